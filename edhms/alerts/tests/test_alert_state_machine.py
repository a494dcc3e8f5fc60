import pytest
from rest_framework.exceptions import ValidationError

from edhms.alerts.models import AlertStatus, EmergencyAlert
from edhms.alerts.services import AlertService
from edhms.audit.models import AuditEvent
from edhms.common.api.exceptions import ConflictError

pytestmark = pytest.mark.django_db


def test_active_to_acknowledged_to_resolved(alert, practitioner):
    alert = AlertService.acknowledge(actor_user_id=None, alert_id=alert.id)
    assert alert.status == AlertStatus.ACKNOWLEDGED
    assert alert.resolved_at is None

    alert = AlertService.resolve(actor_user_id=None, alert_id=alert.id, resolved_by_id=practitioner.id)
    alert.refresh_from_db()
    assert alert.status == AlertStatus.RESOLVED
    assert alert.resolved_at is not None
    assert alert.resolved_by_id == practitioner.id


def test_active_can_resolve_directly(alert):
    alert = AlertService.resolve(actor_user_id=None, alert_id=alert.id)
    assert alert.status == AlertStatus.RESOLVED


def test_resolved_is_terminal(alert):
    AlertService.resolve(actor_user_id=None, alert_id=alert.id)

    with pytest.raises(ConflictError):
        AlertService.acknowledge(actor_user_id=None, alert_id=alert.id)
    with pytest.raises(ConflictError):
        AlertService.resolve(actor_user_id=None, alert_id=alert.id)


def test_acknowledged_cannot_be_acknowledged_again(alert):
    AlertService.acknowledge(actor_user_id=None, alert_id=alert.id)
    with pytest.raises(ConflictError):
        AlertService.acknowledge(actor_user_id=None, alert_id=alert.id)


def test_transitions_are_audited(alert, user):
    AlertService.acknowledge(actor_user_id=user.id, alert_id=alert.id)
    AlertService.resolve(actor_user_id=user.id, alert_id=alert.id)

    codes = AuditEvent.objects.filter(entity_id=alert.id).values_list("event_code", flat=True)
    assert sorted(codes) == ["alert.acknowledged", "alert.resolved"]


def test_update_ignores_status(alert):
    AlertService.update_alert(alert_id=alert.id, data={"title": "Renamed", "status": "resolved"})
    alert.refresh_from_db()
    assert alert.title == "Renamed"
    assert alert.status == AlertStatus.ACTIVE


def test_create_rejects_unknown_hospital(db):
    with pytest.raises(ValidationError):
        AlertService.create_alert(
            actor_user_id=None,
            hospital_id="00000000-0000-0000-0000-000000000000",
            title="Ghost",
        )
    assert EmergencyAlert.objects.count() == 0

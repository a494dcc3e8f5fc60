# edhms/alerts/signals.py
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from edhms.alerts.feed import ALERTS_CHANGED
from edhms.alerts.models import EmergencyAlert
from edhms.common.events import publish


@receiver(post_save, sender=EmergencyAlert)
def alert_saved(sender, instance: EmergencyAlert, created: bool, **kwargs):
    publish(ALERTS_CHANGED, {"alert_id": str(instance.id), "change": "created" if created else "updated"})


@receiver(post_delete, sender=EmergencyAlert)
def alert_deleted(sender, instance: EmergencyAlert, **kwargs):
    publish(ALERTS_CHANGED, {"alert_id": str(instance.id), "change": "deleted"})

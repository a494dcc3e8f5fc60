# edhms/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from edhms.alerts.api.views import AlertViewSet
from edhms.analytics.api.views import AnalyticsViewSet, DashboardView
from edhms.audit.api.views import AuditEventViewSet
from edhms.hospitals.api.views import HospitalViewSet
from edhms.iam.api.auth import LoginView, LogoutView, RefreshView
from edhms.iam.api.me import MeView
from edhms.insights.api.views import InsightViewSet
from edhms.patients.api.views import PatientViewSet
from edhms.practitioners.api.views import PractitionerViewSet
from edhms.preferences.api.views import (
    ApiKeyView,
    PreferencesExportView,
    PreferencesImportView,
    PreferencesResetView,
    PreferencesView,
)
from edhms.records.api.views import MedicalRecordViewSet

router = DefaultRouter()

# ViewSet-backed modules (centralized)
router.register(r"hospitals", HospitalViewSet, basename="hospitals")
router.register(r"practitioners", PractitionerViewSet, basename="practitioners")
router.register(r"patients", PatientViewSet, basename="patients")
router.register(r"records", MedicalRecordViewSet, basename="records")
router.register(r"audit/events", AuditEventViewSet, basename="audit-events")

# ✅ Alerts (list + state machine + change feed)
router.register(r"alerts", AlertViewSet, basename="alerts")

# ✅ Derived metrics + AI advisory calls
router.register(r"analytics", AnalyticsViewSet, basename="analytics")
router.register(r"insights", InsightViewSet, basename="insights")

urlpatterns = [
    # 🔐 Auth + /me
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/refresh/", RefreshView.as_view(), name="refresh"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),

    path("dashboard/", DashboardView.as_view(), name="dashboard"),

    # Console preferences (per user)
    path("preferences/", PreferencesView.as_view(), name="preferences"),
    path("preferences/export/", PreferencesExportView.as_view(), name="preferences-export"),
    path("preferences/import/", PreferencesImportView.as_view(), name="preferences-import"),
    path("preferences/api-key/", ApiKeyView.as_view(), name="preferences-api-key"),
    path("preferences/reset/", PreferencesResetView.as_view(), name="preferences-reset"),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]

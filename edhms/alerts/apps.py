from django.apps import AppConfig


class AlertsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "edhms.alerts"

    def ready(self):
        from edhms.alerts import signals  # noqa: F401

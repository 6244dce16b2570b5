import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class AuthenticationConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "authentication"

    def ready(self):
        """
        Initialize authentication context.
        """
        # Initialize OpenTelemetry tracing
        try:
            from django.conf import settings

            from infrastructure.observability.tracing import setup_tracing

            setup_tracing(
                service_name=getattr(settings, "OTEL_SERVICE_NAME", "sahara-backend"),
                console_export=getattr(settings, "OTEL_CONSOLE_EXPORT", False),
                enable=getattr(settings, "OTEL_TRACING_ENABLED", False),
            )
        except Exception as e:
            logger.warning(f"Failed to initialize OpenTelemetry tracing: {e}")

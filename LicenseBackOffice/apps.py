"""
App configuration for the License back office.
"""

import logging
import os

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class LicenseBackOfficeConfig(AppConfig):
    """App configuration for LicenseBackOffice."""

    name = "LicenseBackOffice"
    verbose_name = "License Back Office"

    def ready(self):
        """Called when Django starts."""
        # RUN_MAIN is "false" in the autoreloader's watcher process
        if os.environ.get("RUN_MAIN") == "false":
            return

        from core.infrastructure.event_handlers import register_event_handlers
        from core.instrumentation import setup_opentelemetry

        setup_opentelemetry()
        register_event_handlers()
        logger.info("Observability setup complete")

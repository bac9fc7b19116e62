from django.apps import AppConfig
from django.conf import settings
import logging

logger = logging.getLogger(__name__)


class CoreBackendConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core_backend"

    def ready(self):
        engine = settings.DATABASES["default"]["ENGINE"]
        if engine.endswith("sqlite3"):
            # SQLite has no row locks; stock and check-in safety rests on the
            # conditional UPDATE and the partial unique index alone.
            logger.debug("Running on SQLite: select_for_update is a no-op")

"""
Record store construction.

The configured store is built once per process from the ``RECORD_STORE``
setting and handed to repositories explicitly.
"""
import logging
from functools import lru_cache

from django.conf import settings
from django.utils.module_loading import import_string

from core.ports.record_store import RecordStore

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def get_record_store() -> RecordStore:
    """
    Build the process-wide record store.

    Returns:
        RecordStore described by ``settings.RECORD_STORE``
    """
    config = settings.RECORD_STORE
    backend = import_string(config["BACKEND"])
    store = backend(**config.get("OPTIONS", {}))
    logger.info("Record store initialised: %s", config["BACKEND"])
    return store

"""
Logging setup for the ZoškaGram backend.

Modules log through ``logging.getLogger(__name__)``; this only configures
the root handler once at application startup.
"""

import logging

from .config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings. DEBUG wins when debug mode is on."""
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)

    # Supabase/httpx log every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

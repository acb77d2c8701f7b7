from __future__ import annotations

from typing import Optional

from heykids.config.settings import Settings, get_settings
from heykids.infrastructure.factory import Services, create_services
from heykids.utils import configure_logging


def bootstrap(settings: Optional[Settings] = None) -> Services:
    """Configure logging from settings and build the wired services."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    return create_services(settings)

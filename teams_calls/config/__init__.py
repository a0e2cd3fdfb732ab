__all__ = [
    "settings",
]

from .logging_config import configure_loggers
from .project_settings import settings
from .sentry_config import configure_sentry

LOGGERS = ["__main__", "teams_calls"]

configure_loggers(LOGGERS, level=settings.LOG_LEVEL)
configure_sentry()

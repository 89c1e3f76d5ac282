"""Compatibility layer exposing Pydantic-based settings."""

from functools import lru_cache

from settings import QuickTicketSettings, get_settings


@lru_cache(maxsize=1)
def _cached_settings() -> QuickTicketSettings:
    return get_settings()


def get_jira_project_key() -> str:
    return _cached_settings().jira.project_key


def get_batch_max_workers() -> int:
    return _cached_settings().batch.max_workers


def get_log_level() -> str:
    return _cached_settings().logging.level


def is_log_json_enabled() -> bool:
    return _cached_settings().logging.json_enabled


# Module-level constants read once at import
JIRA_PROJECT_KEY = get_jira_project_key()
BATCH_MAX_WORKERS = get_batch_max_workers()
LOG_LEVEL = get_log_level()
LOG_JSON = is_log_json_enabled()

__all__ = [
    "JIRA_PROJECT_KEY",
    "BATCH_MAX_WORKERS",
    "LOG_LEVEL",
    "LOG_JSON",
    "get_log_level",
    "is_log_json_enabled",
    "get_settings",
]

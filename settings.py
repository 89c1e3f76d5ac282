# settings.py
"""Centralized configuration using Pydantic settings."""

from __future__ import annotations

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

load_dotenv()


class JiraSettings(BaseSettings):
    project_key: str = Field(alias="JIRA_PROJECT_KEY", default="PROJ")


class BatchSettings(BaseSettings):
    max_workers: int = Field(alias="TICKET_BATCH_WORKERS", default=4, ge=1)


class LoggingSettings(BaseSettings):
    level: str = Field(alias="TICKET_LOG_LEVEL", default="INFO")
    json_enabled: bool = Field(alias="TICKET_LOG_JSON", default=False)


class QuickTicketSettings(BaseSettings):
    jira: JiraSettings
    batch: BatchSettings
    logging: LoggingSettings

    @classmethod
    def load(cls) -> QuickTicketSettings:
        try:
            return cls(
                jira=JiraSettings(),  # type: ignore[call-arg]
                batch=BatchSettings(),  # type: ignore[call-arg]
                logging=LoggingSettings(),  # type: ignore[call-arg]
            )
        except ValidationError as exc:
            invalid = sorted({str(error["loc"][0]) for error in exc.errors() if error.get("loc")})
            msg = "Invalid configuration values: " + ", ".join(invalid)
            raise RuntimeError(msg) from exc


@lru_cache(maxsize=1)
def get_settings() -> QuickTicketSettings:
    return QuickTicketSettings.load()

"""Runtime configuration and logging setup.

Sources, highest priority first: constructor arguments, ``LODGE_*``
environment variables (``__`` separates nested keys), ``.env``, then the
YAML file named by ``LODGE_CONFIG_FILE``.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource
from typing_extensions import Self

from lodge.util.paths import LodgePaths

NOISY_LOGGERS = ("asyncio", "aiosqlite", "sqlalchemy.engine", "apscheduler")


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Top-level sections of the YAML file named by LODGE_CONFIG_FILE."""

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        self._data = self._read(os.environ.get("LODGE_CONFIG_FILE"))

    @staticmethod
    def _read(location: str | None) -> dict[str, Any]:
        if not location:
            return {}
        path = Path(location).expanduser()
        if not path.is_file():
            return {}
        with path.open() as fh:
            return yaml.safe_load(fh) or {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class Server(BaseModel):
    name: str = "Lodge"
    version: str = "0.1.0"
    description: str = "Membership back office: authorization and notifications"


class DatabaseConfig(BaseModel):
    """Database connection. A blank url falls back to a SQLite file under LodgePaths."""

    url: str = ""
    echo: bool = False
    create_tables: bool = True  # metadata.create_all at startup


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """LODGE_LOG_FILE, when logs should go to a file instead of stderr."""
        return os.environ.get("LODGE_LOG_FILE")


class NotificationsConfig(BaseModel):
    max_concurrency: int = Field(default=10, ge=1)  # Parallel record writes per dispatch
    reminder_days: list[int] = [3, 1, 0]  # Days ahead of a program to remind


class SchedulerConfig(BaseModel):
    """Crontab lines for housekeeping jobs. A blank line disables a job."""

    enabled: bool = True
    expired_sweep_cron: str = "0 2 * * *"
    program_reminder_cron: str = "0 9 * * *"


class Config(BaseSettings):
    server: Server = Server()
    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    notifications: NotificationsConfig = NotificationsConfig()
    scheduler: SchedulerConfig = SchedulerConfig()

    model_config = {
        "env_prefix": "LODGE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",
    }

    @model_validator(mode="after")
    def default_database_url(self) -> Self:
        if not self.database.url:
            url = f"sqlite+aiosqlite:///{LodgePaths().database_file}"
            self.database = self.database.model_copy(update={"url": url})
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        yaml_settings = YamlConfigSettingsSource(settings_cls)
        return init_settings, env_settings, dotenv_settings, yaml_settings, file_secret_settings


def _log_handler(config: LoggingConfig) -> logging.Handler:
    if not config.file:
        return logging.StreamHandler(sys.stderr)
    path = Path(config.file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path)


def configure_logging(config: LoggingConfig) -> None:
    """Install a single root handler: a file when LODGE_LOG_FILE is set, else stderr.

    Call once at startup; any handlers installed earlier are replaced.
    """
    handler = _log_handler(config)
    handler.setFormatter(logging.Formatter(config.format, datefmt=config.date_format))
    logging.basicConfig(level=config.level, handlers=[handler], force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        "Logging configured: level=%s file=%s", config.level, config.file
    )

"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field
from sqlalchemy.engine import URL, make_url


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    name: str = Field(default="crud-demo", description="Application name")


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )
    echo_sql: bool = Field(
        default=False, description="Forward SQLAlchemy statement logs"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model.

    Either ``url`` is given verbatim, or the connection string is assembled
    from ``driver``, ``host``, ``port``, ``name``, ``user`` and ``password``.
    """

    url: str | None = Field(
        default=None, description="Full database URL; overrides the parts below"
    )
    driver: str = Field(default="mysql+pymysql", description="SQLAlchemy dialect+driver")
    host: str = Field(default="localhost", description="Database host")
    port: int | None = Field(default=None, description="Database port")
    name: str = Field(default="crud_demo", description="Database name")
    user: str | None = Field(default=None, description="Database username")
    password: str | None = Field(default=None, description="Database password")

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string."""
        if self.url:
            return self.url

        url = URL.create(
            drivername=self.driver,
            username=self.user or None,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.name,
        )
        # Render without masking so the engine receives the real password
        return url.render_as_string(hide_password=False)

    @property
    def dialect(self) -> str:
        """Backend name of the configured database, e.g. ``mysql`` or ``sqlite``."""
        return make_url(self.connection_string).get_backend_name()


class DemoConfig(BaseModel):
    """Demo runner behaviour."""

    abort_on_connection_failure: bool = Field(
        default=False,
        description="Raise when the connection check fails instead of continuing",
    )


class ConfigData(BaseModel):
    """Root configuration object."""

    app: AppConfig = Field(default_factory=AppConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    demo: DemoConfig = Field(default_factory=DemoConfig)

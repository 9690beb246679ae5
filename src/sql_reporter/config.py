from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sql_reporter.models.domain import FilterConfig

DEFAULT_ENTRY_FORMAT = "/* [{origin}] Query {query_nr} - {datetime} [{query_time}] */\n{query}"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SQL_REPORTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # General
    directory: str = "storage/logs/sql"
    use_seconds: bool = False
    console_suffix: str = ""
    extension: str = ".sql"

    # Queries
    queries_enabled: bool = True
    queries_override_log: bool = False
    queries_include_pattern: str | None = None
    queries_exclude_pattern: str | None = None
    queries_min_exec_time: float = Field(default=0.0, ge=0)
    queries_file_name: str = "%Y-%m-log"

    # Formatting
    formatting_new_lines_to_spaces: bool = False
    formatting_entry_format: str = DEFAULT_ENTRY_FORMAT

    # App
    log_level: str = "INFO"

    @field_validator("queries_include_pattern", "queries_exclude_pattern", mode="before")
    @classmethod
    def blank_pattern_is_none(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("extension")
    @classmethod
    def normalize_extension(cls, v: str) -> str:
        if v and not v.startswith("."):
            return "." + v
        return v

    def filter_config(self) -> FilterConfig:
        """Snapshot the filtering options; built fresh on every call."""
        return FilterConfig(
            enabled=self.queries_enabled,
            min_exec_time=self.queries_min_exec_time,
            include_pattern=self.queries_include_pattern,
            exclude_pattern=self.queries_exclude_pattern,
            override_log=self.queries_override_log,
            directory=self.directory,
        )


def get_settings() -> Settings:
    return Settings()

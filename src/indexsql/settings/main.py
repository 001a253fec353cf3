from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from indexsql.constants import DatabaseType

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class IndexSQLSettings(BaseSettings):
    """Package-wide defaults for query generation.

    Values set on a source definition (``options``) take precedence over
    these defaults.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="INDEXSQL_",
    )

    log_level: str = Field(
        default="INFO",
        description="Log level used by setup_logging (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    escape_newlines: bool = Field(
        default=True,
        description="Escape embedded newlines in the main query as backslash-newline "
                    "so it survives single-line configuration transport."
    )
    default_database_type: DatabaseType = Field(
        default=DatabaseType.MYSQL,
        description="Dialect assumed by sources that do not name one"
    )
    group_concat_max_len: Optional[int] = Field(
        default=None,
        gt=0,
        description="Session group_concat_max_len emitted in the pre-queries when a "
                    "source does not configure its own"
    )
    utf8: bool = Field(
        default=False,
        description="Emit the dialect's UTF-8 session statements for every source"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'")
        return level


# Singleton instance
_settings: Optional[IndexSQLSettings] = None


def get_settings(force_reload: bool = False) -> IndexSQLSettings:
    """Get the singleton settings instance.

    Settings are loaded from environment variables (``INDEXSQL_*``) and an
    optional ``.env`` file on first access.

    Args:
        force_reload: If True, creates a new instance even if one already
            exists. Useful for testing or when environment variables have
            changed.

    Returns:
        IndexSQLSettings: The singleton settings instance
    """
    global _settings

    if _settings is None or force_reload:
        _settings = IndexSQLSettings()

    return _settings

import enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, enum.Enum):
    """Possible log levels."""

    NOTSET = "NOTSET"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    FATAL = "FATAL"


class Settings(BaseSettings):
    """
    Library settings.

    These parameters can be configured
    with environment variables.

    url2 never installs loguru sinks itself; log_level is read by host
    applications when they configure their own handlers, e.g.
    logger.add(sys.stderr, level=settings.log_level.value).
    """

    log_level: LogLevel = LogLevel.INFO

    # URL returned by Url2.default()
    default_url: str = "none:"

    # Reject "%" not followed by two hex digits instead of re-escaping it
    strict_percent_encoding: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="URL2_",
        env_file_encoding="utf-8",
    )


settings = Settings()

"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the devtoolbox service.

    Every field can be overridden by an environment variable with the
    ``DEVTOOLBOX_`` prefix (case-insensitive), or from a ``.env`` file in the
    working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="DEVTOOLBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Localisation
    DEFAULT_LOCALE: str = "en"
    SUPPORTED_LOCALES: list[str] = ["en", "zh"]
    LOCALE_COOKIE: str = "locale"

    # Cron tool: how many upcoming fire times to list by default / at most
    CRON_NEXT_RUNS: int = 5
    CRON_MAX_RUNS: int = 50

    CORS_ORIGINS: list[str] = ["http://localhost:5173"]
    LOG_LEVEL: str = "INFO"

    HOST: str = "127.0.0.1"
    PORT: int = 8000


settings = Settings()

"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = "moodscape"
    debug: bool = False
    database_url: str = "sqlite:///./moodscape.db"

    # Daily reminder text
    reminder_title: str = "How are you feeling?"
    reminder_message: str = "Don't forget to log your mood today!"


settings = Settings()

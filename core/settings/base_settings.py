from pydantic_settings import BaseSettings, SettingsConfigDict


class LaunchpadBaseSettings(BaseSettings):
    """Base for every settings section: reads the process env and ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

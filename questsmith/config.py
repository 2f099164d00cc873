"""Application configuration loaded from environment variables and .env file."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Code generation settings
    INDENT_SIZE: int = 4
    DEFAULT_QUEST_NAMESPACE: str = "Schedule1Mods.Quests"
    DEFAULT_NPC_NAMESPACE: str = "Schedule1Mods.NPCs"
    EMIT_SOURCE_COMMENTS: bool = True


settings = Settings()

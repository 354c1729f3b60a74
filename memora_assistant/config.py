from typing import List, Literal
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ASSISTANT_NAME: str = "Memora AI"

    # Cosmetic pause before answering, in milliseconds
    THINKING_DELAY_MS: int = 600

    # Conversation limits
    MAX_CONVERSATION_HISTORY: int = 100
    MAX_INPUT_LENGTH: int = 2000

    # Substituted into hub routes when the context has no group
    DEFAULT_GROUP_ID: str = "default"

    # Yes/No vocabularies used on confirm steps (substring, case-insensitive).
    # Cancellation is checked first.
    CONFIRM_WORDS: List[str] = ["oui", "yes", "ok", "confirmer", "valider", "d'accord", "go"]
    CANCEL_WORDS: List[str] = ["annuler", "cancel", "stop", "arreter", "non", "quitter"]

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Loads from a .env file in the root directory
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

# Singleton instance
settings = Settings()

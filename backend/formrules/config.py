"""Engine configuration via environment variables."""

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Settings loaded from environment variables (or a local .env file)."""

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Registry
    DUPLICATE_FIELD_POLICY: Literal["reject", "replace", "merge"] = "reject"

    # Rule sets (defaults to the bundled formrules/rulesets directory)
    RULESETS_DIR: Optional[Path] = None

    # Feedback
    ERROR_TITLE_TEMPLATE: str = "({count} errors) {title}"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()

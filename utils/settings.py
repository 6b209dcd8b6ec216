"""Runtime settings read from the environment (and an optional .env file)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_VISION_MODEL = "gpt-5-mini"
DEFAULT_CODE_MODEL = "gpt-5"


@dataclass(frozen=True)
class Settings:
    """Explicit configuration handed to the model gateway at construction.

    Attributes:
        openai_api_key: Credential for the model service. May be missing; the
            gateway checks it on every call instead of at startup.
        vision_model: Model used for image classification.
        code_model: Model used for training-script generation.
        log_level: Root logging level name.
    """

    openai_api_key: Optional[str] = None
    vision_model: str = DEFAULT_VISION_MODEL
    code_model: str = DEFAULT_CODE_MODEL
    log_level: str = "INFO"

    @property
    def has_credential(self) -> bool:
        return bool(self.openai_api_key and self.openai_api_key.strip())


def load_settings() -> Settings:
    """Build a Settings instance from environment variables.

    Call `dotenv.load_dotenv()` first when a .env file should be honoured.
    """
    api_key = os.getenv("OPENAI_API_KEY")
    return Settings(
        openai_api_key=api_key.strip() if api_key and api_key.strip() else None,
        vision_model=os.getenv("OPENAI_VISION_MODEL", DEFAULT_VISION_MODEL),
        code_model=os.getenv("OPENAI_CODE_MODEL", DEFAULT_CODE_MODEL),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )

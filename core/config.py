import os

from pydantic import BaseModel, Field

from core.presets import DEFAULT_TARGET_FLAT_FEE


class Settings(BaseModel):
    # Plan
    TARGET_FLAT_FEE: float = Field(
        default_factory=lambda: float(os.getenv("TARGET_FLAT_FEE", str(DEFAULT_TARGET_FLAT_FEE)))
    )

    # App
    APP_TITLE: str = os.getenv("APP_TITLE", "FLAT FEE VS CURRENT COMP")
    SESSION_FILE: str = os.getenv("SESSION_FILE", "session_data.json")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_JSON: bool = os.getenv("LOG_JSON", "false").lower() == "true"


settings = Settings()

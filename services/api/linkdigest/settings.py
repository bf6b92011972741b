"""Application configuration loaded from environment variables."""

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

BackendType = Literal["huggingface", "openai", "none"]

DEFAULT_STATIC_DIR = Path(__file__).resolve().parent / "public"
DEFAULT_MARKER = " [truncated]"

# Truncation defaults per deployment profile: (max_chars, marker).
PROFILE_LIMITS: dict[str, tuple[int | None, str | None]] = {
    "huggingface": (3000, DEFAULT_MARKER),
    "openai": (20000, DEFAULT_MARKER),
    "none": (None, None),
}

CREDENTIAL_VARS = {
    "huggingface": "HF_TOKEN",
    "openai": "OPENAI_API_KEY",
}


class Settings(BaseModel):
    """Typed settings with defaults for local development.

    Values are read from the environment once, when the module is imported,
    and validated at that point. The instance is read-only afterwards.
    """

    model_config = ConfigDict(validate_default=True, frozen=True)

    app_env: str = os.getenv("APP_ENV", "dev")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")
    static_dir: str = os.getenv("STATIC_DIR", str(DEFAULT_STATIC_DIR))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    summary_backend: BackendType = os.getenv("SUMMARY_BACKEND", "huggingface")
    hf_token: str | None = os.getenv("HF_TOKEN")
    hf_model: str = os.getenv("HF_MODEL", "facebook/bart-large-cnn")
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    summary_timeout: float = float(os.getenv("SUMMARY_TIMEOUT", "60"))
    article_timeout: float = float(os.getenv("ARTICLE_TIMEOUT", "15"))
    transcript_languages: str = os.getenv("TRANSCRIPT_LANGUAGES", "en")

    max_chars: int | None = os.getenv("MAX_CHARS")
    truncation_marker: str | None = os.getenv("TRUNCATION_MARKER")

    @field_validator("summary_backend", mode="before")
    @classmethod
    def _lower_backend(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("hf_token", "openai_api_key", "max_chars", mode="before")
    @classmethod
    def _blank_is_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("max_chars")
    @classmethod
    def _positive_limit(cls, v: int | None) -> int | None:
        if v is not None and v <= 0:
            raise ValueError("MAX_CHARS must be a positive integer")
        return v

    @property
    def cors_origins_list(self) -> list[str]:
        """Return CORS origins as a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def transcript_languages_list(self) -> list[str]:
        return [lang.strip() for lang in self.transcript_languages.split(",") if lang.strip()]

    @property
    def summarizes(self) -> bool:
        """True when the deployment answers with a summary rather than the raw text."""
        return self.summary_backend != "none"

    @property
    def credential(self) -> str | None:
        if self.summary_backend == "huggingface":
            return self.hf_token
        if self.summary_backend == "openai":
            return self.openai_api_key
        return None

    @property
    def credential_var(self) -> str | None:
        return CREDENTIAL_VARS.get(self.summary_backend)

    @property
    def effective_max_chars(self) -> int | None:
        """Truncation limit: MAX_CHARS if set, otherwise the profile default."""
        if self.max_chars is not None:
            return self.max_chars
        return PROFILE_LIMITS[self.summary_backend][0]

    @property
    def effective_marker(self) -> str | None:
        """Truncation marker; an empty TRUNCATION_MARKER disables it."""
        if self.truncation_marker is not None:
            return self.truncation_marker or None
        return PROFILE_LIMITS[self.summary_backend][1]


settings = Settings()

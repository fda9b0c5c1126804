"""Configuration management for Pantry Chef.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os
from typing import Optional

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    return float(value) if value not in (None, "") else None


def _env_optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else None


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Gemini Developer API key: required unless USE_VERTEXAI is true
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        # Vertex AI: route model calls through a Google Cloud project instead of an API key
        self.USE_VERTEXAI: bool = _env_bool("USE_VERTEXAI", "false")
        self.GOOGLE_CLOUD_PROJECT: Optional[str] = os.getenv("GOOGLE_CLOUD_PROJECT")
        # Default: europe-west1 (Belgium)
        self.GOOGLE_CLOUD_LOCATION: str = os.getenv("GOOGLE_CLOUD_LOCATION", "europe-west1")
        # Recipe Model: text model that writes the recipe JSON
        self.RECIPE_MODEL: str = os.getenv("RECIPE_MODEL", "gemini-2.5-flash-lite")
        # Image Detection Model: vision model that lists ingredients in a photo
        self.IMAGE_DETECTION_MODEL: str = os.getenv("IMAGE_DETECTION_MODEL", "gemini-2.5-flash-lite")
        # LLM Model Parameters. Unset means the model default is used.
        self.TEMPERATURE: Optional[float] = _env_optional_float("TEMPERATURE")
        self.MAX_OUTPUT_TOKENS: Optional[int] = _env_optional_int("MAX_OUTPUT_TOKENS")
        # Store Backend: "firestore" (production) or "memory" (local runs, lost on restart)
        self.STORE_BACKEND: str = os.getenv("STORE_BACKEND", "firestore")
        # Firestore collection holding generated recipes, one document per canonical key
        self.RECIPES_COLLECTION: str = os.getenv("RECIPES_COLLECTION", "recipes")
        # Service account JSON (raw string). Unset means application default credentials.
        self.FIREBASE_SERVICE_ACCOUNT_JSON: Optional[str] = os.getenv("FIREBASE_SERVICE_ACCOUNT_JSON")
        # Maximum decoded image size (in MB) accepted for ingredient extraction. Default: 5 MB
        self.MAX_IMAGE_SIZE_MB: int = int(os.getenv("MAX_IMAGE_SIZE_MB", "5"))
        # Server Port
        self.PORT: int = int(os.getenv("PORT", "8080"))

    def validate(self) -> None:
        """Validate required configuration.

        Raises:
            ValueError: If required credentials are missing or invalid values provided.
        """
        if self.USE_VERTEXAI:
            if not self.GOOGLE_CLOUD_PROJECT:
                raise ValueError("GOOGLE_CLOUD_PROJECT environment variable is required when USE_VERTEXAI=true")
        elif not self.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY environment variable is required")
        if self.STORE_BACKEND not in ("firestore", "memory"):
            raise ValueError(
                f"STORE_BACKEND must be 'firestore' or 'memory', got: {self.STORE_BACKEND}"
            )
        if not self.RECIPES_COLLECTION:
            raise ValueError("RECIPES_COLLECTION must not be empty")
        if self.TEMPERATURE is not None and not (0.0 <= self.TEMPERATURE <= 1.0):
            raise ValueError(
                f"TEMPERATURE must be between 0.0 and 1.0, got: {self.TEMPERATURE}"
            )
        if self.MAX_OUTPUT_TOKENS is not None and self.MAX_OUTPUT_TOKENS < 512:
            raise ValueError(
                f"MAX_OUTPUT_TOKENS must be at least 512, got: {self.MAX_OUTPUT_TOKENS}"
            )
        if self.MAX_IMAGE_SIZE_MB < 1:
            raise ValueError(
                f"MAX_IMAGE_SIZE_MB must be at least 1, got: {self.MAX_IMAGE_SIZE_MB}"
            )


# Module-level config instance. Validated by the entry points (app.py, query.py).
config = Config()

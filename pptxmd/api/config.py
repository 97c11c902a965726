"""
config.py - Environment configuration for the conversion API.

Settings are read from environment variables, optionally seeded from a
``.env`` file in the project root.
"""

import os
from functools import lru_cache
from pathlib import Path


# Load .env file if it exists
def _load_dotenv():
    env_path = Path(__file__).parent.parent.parent / ".env"
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip()
                    if key and value and key not in os.environ:
                        os.environ[key] = value

_load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.app_name: str = os.environ.get("APP_NAME", "pptxmd")
        self.app_version: str = os.environ.get("APP_VERSION", "0.4.0")
        self.api_prefix: str = os.environ.get("API_PREFIX", "/api")

        # Server settings
        self.host: str = os.environ.get("HOST", "0.0.0.0")
        self.port: int = int(os.environ.get("PORT", "8000"))
        self.debug: bool = os.environ.get("DEBUG", "false").lower() == "true"

        # CORS settings
        self.allowed_origins: list = os.environ.get(
            "CORS_ORIGINS",
            "http://localhost:3000,http://127.0.0.1:3000"
        ).split(",")

        # Conversion settings
        self.max_upload_mb: int = int(os.environ.get("MAX_UPLOAD_MB", "50"))
        self.image_quality: int = int(os.environ.get("IMAGE_QUALITY", "80"))
        self.max_workers: int = int(os.environ.get("MAX_WORKERS", "4"))

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

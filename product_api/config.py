"""
Configuration for the product service.

Values come from environment variables with sensible defaults, read
once when this module is imported.  ``create_app`` also accepts an
explicit ``Settings`` instance, which is how tests pin the API key
without touching the environment.
"""

import os
from dataclasses import dataclass, field


def _env(name: str, default: str) -> str:
    return os.getenv(name, default)


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: _env("PROJECT_NAME", "Product API"))
    api_version: str = field(default_factory=lambda: _env("API_VERSION", "1.0.0"))
    host: str = field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(_env("PORT", "3000")))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))

    # Single shared secret expected in the ``x-api-key`` header on
    # create, update and delete.
    api_key: str = field(default_factory=lambda: _env("API_KEY", "plp-student-key"))


settings = Settings()

"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    env: str = "development"
    log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Ordering used by the HTTP layer when a request names neither preset nor ordering
    default_preset: str = "rave-wheel"

    # Canvas calibration, measured from the master diagrams
    position_offset: float = 323.4375

    # Knowledge JSON used when a render request carries no payload
    knowledge_path: str | None = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "MANDALA_"}


settings = Settings()

"""Shared objects for the HTTP layer."""

from __future__ import annotations

from functools import lru_cache

from mandala.config import settings
from mandala.models.knowledge import KnowledgePayload, load_payload


def get_settings():
    return settings


@lru_cache(maxsize=1)
def _payload_from(path: str) -> KnowledgePayload:
    return load_payload(path)


def get_default_payload() -> KnowledgePayload | None:
    """Knowledge from MANDALA_KNOWLEDGE_PATH, read once per process; None when unset."""
    path = get_settings().knowledge_path
    return _payload_from(path) if path else None

"""
Serialization settings for keyset metadata documents.

Environment variables control behavior:
- KEYSET_JSON_INDENT: Indentation for written documents (default: compact)
- KEYSET_JSON_SORT_KEYS: Sort object keys when writing (default: false)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def _opt(name: str, default: str) -> str:
    """Get optional environment variable with default."""
    return os.getenv(name, default)


def _opt_bool(name: str, default: bool) -> bool:
    """Parse boolean environment variable."""
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


def _opt_int(name: str) -> Optional[int]:
    """Parse optional non-negative integer environment variable."""
    v = _opt(name, "").strip()
    if not v:
        return None
    try:
        n = int(v)
    except ValueError:
        raise RuntimeError(f"Env var {name} must be an integer, got {v!r}") from None
    if n < 0:
        raise RuntimeError(f"Env var {name} must be non-negative, got {n}")
    return n


@dataclass(frozen=True)
class Settings:
    """Output formatting for KeyMetadata.write()."""

    JSON_INDENT: Optional[int] = None
    JSON_SORT_KEYS: bool = False

    @staticmethod
    def load() -> Settings:
        """Load settings from environment variables."""
        return Settings(
            JSON_INDENT=_opt_int("KEYSET_JSON_INDENT"),
            JSON_SORT_KEYS=_opt_bool("KEYSET_JSON_SORT_KEYS", False),
        )

"""Environment-driven settings for boardcore.

Settings are read once at import time. Values accepted as "true" for the
boolean flags are ``1``, ``true``, ``yes`` and ``on`` (case-insensitive).

Environment Variables:
    BOARDCORE_LOG_LEVEL: Default level for ``setup_logging`` (default: INFO)
    BOARDCORE_LOG_FORMAT: Default format preset (default: default)
    BOARDCORE_DEBUG_ENGINE: Trace every step of the move pipeline at DEBUG
"""

from __future__ import annotations

import os

__all__ = [
    "LOG_LEVEL",
    "LOG_FORMAT",
    "DEBUG_ENGINE",
    "FINGERPRINT_SEED",
    "env_flag",
]


def env_flag(name: str, default: str = "0") -> bool:
    """Return True if the environment variable ``name`` is set to a truthy value."""
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


LOG_LEVEL = os.getenv("BOARDCORE_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("BOARDCORE_LOG_FORMAT", "default").lower()
DEBUG_ENGINE = env_flag("BOARDCORE_DEBUG_ENGINE")

# Changing the seed changes every stored fingerprint.
FINGERPRINT_SEED = "apgames"

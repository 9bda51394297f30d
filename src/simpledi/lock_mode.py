from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for scope state and cached bean construction.

    Use these values for the registry-level ``lock_mode`` or per custom scope.
    """

    THREAD = "thread"
    """Guard scope state and cached construction with ``threading.RLock``."""

    NONE = "none"
    """Disable locking; use only when the registry is never shared between threads."""

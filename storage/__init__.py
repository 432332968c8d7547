"""Storage backends for pending password reset codes."""

from .abstract_storage import AbstractResetCodeStore, PendingReset
from .database_storage import DatabaseResetCodeStore
from .memory_storage import MemoryResetCodeStore

__all__ = [
    "AbstractResetCodeStore",
    "DatabaseResetCodeStore",
    "MemoryResetCodeStore",
    "PendingReset",
    "build_reset_code_store",
]


def build_reset_code_store(kind: str) -> AbstractResetCodeStore:
    """Return the store configured by ``RESET_CODE_STORE``."""

    normalized = (kind or "memory").strip().lower()
    if normalized == "memory":
        return MemoryResetCodeStore()
    if normalized == "database":
        return DatabaseResetCodeStore()
    raise ValueError(f"Unknown reset code store: {kind!r}")

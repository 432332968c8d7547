"""In-process reset code storage."""

from __future__ import annotations

from datetime import datetime

from .abstract_storage import AbstractResetCodeStore, PendingReset


class MemoryResetCodeStore(AbstractResetCodeStore):
    """Keep pending codes in a dictionary owned by the running process.

    Codes do not survive a restart and are not shared between workers.
    """

    def __init__(self) -> None:
        self._pending: dict[str, PendingReset] = {}

    def get(self, email: str) -> PendingReset | None:
        return self._pending.get(email)

    def set(self, email: str, code: str, expires_at: datetime) -> PendingReset:
        pending = PendingReset(email=email, code=code, expires_at=expires_at)
        self._pending[email] = pending
        return pending

    def delete(self, email: str) -> None:
        self._pending.pop(email, None)

    def __len__(self) -> int:
        return len(self._pending)

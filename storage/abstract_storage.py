"""Storage abstraction for pending password reset codes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PendingReset:
    """A reset code issued for an email address and the moment it lapses."""

    email: str
    code: str
    expires_at: datetime


class AbstractResetCodeStore(ABC):
    """Interface for reset code backends.

    Implementations hold at most one pending code per email; ``set`` replaces
    whatever was stored before.
    """

    @abstractmethod
    def get(self, email: str) -> PendingReset | None:
        """Return the pending reset for ``email`` or None."""

    @abstractmethod
    def set(self, email: str, code: str, expires_at: datetime) -> PendingReset:
        """Store a code for ``email``, overwriting any previous one."""

    @abstractmethod
    def delete(self, email: str) -> None:
        """Forget the pending code for ``email`` if there is one."""

    def is_expired(self, pending: PendingReset, now: datetime) -> bool:
        """Return whether ``pending`` is no longer usable at ``now``."""

        return now >= pending.expires_at

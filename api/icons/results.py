"""
Explicit outcome values for the best-effort persistence steps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from core.errors import PersistenceError

T = TypeVar("T")


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    value: T
    error: PersistenceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SaveResult:
    accepted: bool
    # "remote", "snapshot" or "memory" (accepted but not written anywhere).
    destination: str | None = None
    duplicate: bool = False
    errors: list[PersistenceError] = field(default_factory=list)

"""Versioned single-writer state store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

TState = TypeVar("TState")


@dataclass(frozen=True, slots=True)
class StateSnapshot(Generic[TState]):
    """Versioned state snapshot from state-store."""

    value: TState
    revision: int


class StateStore(Generic[TState]):
    """Holds one immutable state value and counts replacements.

    Values are expected to be immutable, so reads hand out the stored object
    without copying.
    """

    def __init__(self, initial_state: TState) -> None:
        self._value = initial_state
        self._revision = 0

    def snapshot(self) -> StateSnapshot[TState]:
        return StateSnapshot(value=self._value, revision=self._revision)

    def get(self) -> TState:
        return self._value

    def set(self, value: TState) -> StateSnapshot[TState]:
        """Replace state value and increment revision."""
        self._value = value
        self._revision += 1
        return self.snapshot()

    def revision(self) -> int:
        return self._revision

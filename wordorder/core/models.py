"""Core domain models used by the placement engine."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from wordorder.core.errors import PlacementFault


class LocationKind(StrEnum):
    """Container a token can sit in."""

    POOL = "POOL"
    SLOT = "SLOT"


@dataclass(frozen=True, slots=True)
class Token:
    """Labeled puzzle piece."""

    id: int
    text: str


@dataclass(frozen=True, slots=True)
class Location:
    """Position inside either the pool or the slot sequence."""

    kind: LocationKind
    position: int

    @classmethod
    def pool(cls, position: int) -> Location:
        return cls(LocationKind.POOL, position)

    @classmethod
    def slot(cls, position: int) -> Location:
        return cls(LocationKind.SLOT, position)

    @property
    def in_pool(self) -> bool:
        return self.kind is LocationKind.POOL

    @property
    def in_slots(self) -> bool:
        return self.kind is LocationKind.SLOT

    def __str__(self) -> str:
        return f"{self.kind.value.lower()}[{self.position}]"


EMPTY_SLOT: None = None


@dataclass(frozen=True, slots=True)
class PuzzleState:
    """Committed contents of both containers."""

    pool: tuple[Token, ...]
    slots: tuple[Token | None, ...]

    @classmethod
    def initial(cls, pool_order: Sequence[Token], slot_count: int | None = None) -> PuzzleState:
        """Build a fresh state with every token in the pool and every slot empty."""
        tokens = tuple(pool_order)
        ids = [token.id for token in tokens]
        if len(set(ids)) != len(ids):
            raise ValueError("Token ids must be unique.")
        count = len(tokens) if slot_count is None else slot_count
        if count < len(tokens):
            raise ValueError("Slot count cannot be smaller than the token count.")
        return cls(pool=tokens, slots=(EMPTY_SLOT,) * count)

    @property
    def slot_count(self) -> int:
        return len(self.slots)

    @property
    def token_count(self) -> int:
        return len(self.pool) + sum(1 for token in self.slots if token is not None)

    def token_at(self, location: Location) -> Token | None:
        """Return the token at a location, or None for an empty or unknown position."""
        container: tuple[Token | None, ...] = self.pool if location.in_pool else self.slots
        if not 0 <= location.position < len(container):
            return None
        return container[location.position]

    def locate(self, token_id: int) -> Location | None:
        """Find where a token currently resides."""
        for index, token in enumerate(self.pool):
            if token.id == token_id:
                return Location.pool(index)
        for index, slot_token in enumerate(self.slots):
            if slot_token is not None and slot_token.id == token_id:
                return Location.slot(index)
        return None

    def tokens(self) -> list[Token]:
        """Return every token, pool first then slots in order."""
        placed = [token for token in self.slots if token is not None]
        return [*self.pool, *placed]

    def is_filled(self) -> bool:
        """Return whether every slot holds a token."""
        return all(token is not None for token in self.slots)

    def answer_ids(self) -> tuple[int | None, ...]:
        return tuple(None if token is None else token.id for token in self.slots)


@dataclass(frozen=True, slots=True)
class PendingMove:
    """In-progress move handle threaded between begin, preview and commit."""

    token: Token
    origin: Location
    dragged_over: Location | None = None
    preview: PuzzleState | None = None
    fault: PlacementFault | None = None

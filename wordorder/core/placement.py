"""Pure placement rules over puzzle state."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from wordorder.core.errors import InconsistentStateError, InvalidLocationError, SlotOccupiedError
from wordorder.core.models import EMPTY_SLOT, Location, PuzzleState, Token


def require_in_bounds(state: PuzzleState, location: Location, *, allow_append: bool = False) -> None:
    """Raise when a location does not address an existing position."""
    size = len(state.pool) if location.in_pool else state.slot_count
    upper = size + 1 if allow_append and location.in_pool else size
    if not 0 <= location.position < upper:
        raise InvalidLocationError(f"{location} is outside [0, {upper}).")


def require_token_at(state: PuzzleState, token: Token, location: Location, *, check_bounds: bool = True) -> None:
    """Raise when the claimed location does not currently hold the token.

    With ``check_bounds`` off, an out-of-range location counts as a mismatch.
    """
    if check_bounds:
        require_in_bounds(state, location)
    occupant = state.token_at(location)
    if occupant != token:
        found = "empty" if occupant is None else f"token {occupant.id}"
        raise InconsistentStateError(f"Expected token {token.id} at {location}, found {found}.")


def apply_move(state: PuzzleState, token: Token, origin: Location, destination: Location) -> PuzzleState:
    """Return the state that results from moving token from origin to destination.

    The origin is verified first; moving onto it then returns the same state
    object. Otherwise the destination is bounds-checked and one of the four
    container rules applied. The input state is never modified.
    """
    require_token_at(state, token, origin, check_bounds=False)
    if destination == origin:
        return state
    require_in_bounds(state, destination, allow_append=origin.in_slots)

    if origin.in_pool and destination.in_pool:
        return _swap_in_pool(state, origin.position, destination.position)
    if origin.in_pool:
        return _pool_to_slot(state, token, origin.position, destination.position)
    if destination.in_pool:
        return _slot_to_pool(state, token, origin.position, destination.position)
    return _slot_to_slot(state, token, origin.position, destination.position)


def _swap_in_pool(state: PuzzleState, source: int, target: int) -> PuzzleState:
    pool = list(state.pool)
    pool[source], pool[target] = pool[target], pool[source]
    return PuzzleState(pool=tuple(pool), slots=state.slots)


def _pool_to_slot(state: PuzzleState, token: Token, source: int, target: int) -> PuzzleState:
    occupant = state.slots[target]
    if occupant is not None:
        raise SlotOccupiedError(f"Slot {target} already holds token {occupant.id}.")
    pool = state.pool[:source] + state.pool[source + 1 :]
    slots = list(state.slots)
    slots[target] = token
    return PuzzleState(pool=pool, slots=tuple(slots))


def _slot_to_pool(state: PuzzleState, token: Token, source: int, target: int) -> PuzzleState:
    slots = list(state.slots)
    slots[source] = EMPTY_SLOT
    pool = state.pool[:target] + (token,) + state.pool[target:]
    return PuzzleState(pool=pool, slots=tuple(slots))


def _slot_to_slot(state: PuzzleState, token: Token, source: int, target: int) -> PuzzleState:
    slots = list(state.slots)
    # An empty target leaves the source empty; an occupied one trades places.
    slots[source] = slots[target]
    slots[target] = token
    return PuzzleState(pool=state.pool, slots=tuple(slots))


def audit_closed_world(state: PuzzleState, token_ids: Iterable[int]) -> None:
    """Raise unless every expected token id appears exactly once across both containers."""
    expected = np.fromiter(token_ids, dtype=np.int64)
    present = np.fromiter((token.id for token in state.tokens()), dtype=np.int64)
    values, counts = np.unique(present, return_counts=True)
    duplicates = values[counts > 1]
    missing = np.setdiff1d(expected, present)
    unknown = np.setdiff1d(present, expected)
    if duplicates.size or missing.size or unknown.size or present.size != expected.size:
        raise InconsistentStateError(
            "Closed-world check failed: "
            f"duplicates={duplicates.tolist()} missing={missing.tolist()} unknown={unknown.tolist()}."
        )

"""Placement engine: sole owner of puzzle container state."""

from __future__ import annotations

import logging
from dataclasses import replace

from wordorder.core.errors import InconsistentStateError, PlacementError
from wordorder.core.events import EventBus, MoveCommitted
from wordorder.core.models import Location, PendingMove, PuzzleState, Token
from wordorder.core.placement import apply_move, audit_closed_world, require_token_at
from wordorder.core.state_store import StateStore

logger = logging.getLogger(__name__)


class PlacementEngine:
    """Moves tokens between the pool and the answer slots.

    Callers drive a move with three calls: ``begin_move`` when a token is picked
    up, ``preview_move`` while it hovers over candidates, and ``commit_move`` on
    drop. Only ``commit_move`` changes the stored state; a gesture abandoned
    before commit leaves it untouched.
    """

    def __init__(self, initial_state: PuzzleState, *, event_bus: EventBus | None = None) -> None:
        self._token_ids = tuple(token.id for token in initial_state.tokens())
        audit_closed_world(initial_state, self._token_ids)
        self._store = StateStore(initial_state)
        self._events = event_bus

    def current_state(self) -> PuzzleState:
        return self._store.get()

    def revision(self) -> int:
        return self._store.revision()

    def begin_move(self, token: Token, origin: Location) -> PendingMove:
        """Start a move of token from origin without touching state."""
        require_token_at(self._store.get(), token, origin)
        logger.debug("move_begin token=%s origin=%s", token.id, origin)
        return PendingMove(token=token, origin=origin)

    def preview_move(self, pending: PendingMove, candidate: Location) -> PendingMove:
        """Return pending move annotated with the state a commit onto candidate would yield.

        Rejections a commit would raise are reported through ``fault`` instead,
        so hovering over a full slot or an out-of-range target never interrupts the
        gesture. A stale origin still raises ``InconsistentStateError``.
        """
        try:
            preview = apply_move(self._store.get(), pending.token, pending.origin, candidate)
        except InconsistentStateError:
            raise
        except PlacementError as exc:
            return replace(pending, dragged_over=candidate, preview=None, fault=exc.fault)
        return replace(pending, dragged_over=candidate, preview=preview, fault=None)

    def commit_move(self, pending: PendingMove, destination: Location) -> PuzzleState:
        """Apply the move and return the new committed state."""
        before = self._store.get()
        try:
            after = apply_move(before, pending.token, pending.origin, destination)
        except InconsistentStateError:
            logger.exception(
                "move_inconsistent token=%s origin=%s destination=%s",
                pending.token.id,
                pending.origin,
                destination,
            )
            raise
        except PlacementError as exc:
            logger.info(
                "move_rejected token=%s origin=%s destination=%s fault=%s",
                pending.token.id,
                pending.origin,
                destination,
                exc.fault.value,
            )
            raise
        if after is before:
            logger.debug("move_noop token=%s location=%s", pending.token.id, destination)
            return before

        audit_closed_world(after, self._token_ids)
        snapshot = self._store.set(after)
        logger.debug(
            "move_commit token=%s origin=%s destination=%s revision=%s",
            pending.token.id,
            pending.origin,
            destination,
            snapshot.revision,
        )
        if self._events is not None:
            self._events.publish(
                MoveCommitted(
                    token=pending.token,
                    origin=pending.origin,
                    destination=destination,
                    state=after,
                    revision=snapshot.revision,
                )
            )
        return after

    def cancel_move(self, pending: PendingMove) -> PuzzleState:
        """Drop a pending move; state is returned unchanged."""
        logger.debug("move_cancel token=%s origin=%s", pending.token.id, pending.origin)
        return self._store.get()

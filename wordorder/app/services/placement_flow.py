"""Pointer gesture flow over the placement engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import StrEnum

from wordorder.core.engine import PlacementEngine
from wordorder.core.errors import PlacementError, PlacementFault
from wordorder.core.models import Location, PendingMove, PuzzleState
from wordorder.core.placement import apply_move

logger = logging.getLogger(__name__)


class OccupiedSlotPolicy(StrEnum):
    """What a drop from the pool onto a full slot does."""

    REJECT = "REJECT"
    BOUNCE = "BOUNCE"


@dataclass(frozen=True, slots=True)
class HeldTokenState:
    """Token currently carried by the pointer, if any."""

    pending: PendingMove | None = None

    @property
    def holding(self) -> bool:
        return self.pending is not None


@dataclass(frozen=True, slots=True)
class PlacementActionResult:
    """Outcome of a placement interaction."""

    handled: bool
    held: HeldTokenState
    state: PuzzleState
    status: str | None = None
    fault: PlacementFault | None = None


class PlacementFlowService:
    """Translate pointer down/hover/release into engine calls."""

    @staticmethod
    def on_pointer_down(
        *,
        engine: PlacementEngine,
        held: HeldTokenState,
        location: Location,
    ) -> PlacementActionResult:
        state = engine.current_state()
        if held.holding:
            return PlacementActionResult(handled=False, held=held, state=state)
        token = state.token_at(location)
        if token is None:
            return PlacementActionResult(handled=False, held=held, state=state)
        pending = engine.begin_move(token, location)
        return PlacementActionResult(
            handled=True,
            held=HeldTokenState(pending),
            state=state,
            status=f"Holding '{token.text}'.",
        )

    @staticmethod
    def on_hover(
        *,
        engine: PlacementEngine,
        held: HeldTokenState,
        location: Location,
        policy: OccupiedSlotPolicy = OccupiedSlotPolicy.REJECT,
    ) -> PlacementActionResult:
        if held.pending is None:
            return PlacementActionResult(handled=False, held=held, state=engine.current_state())
        if held.pending.dragged_over == location:
            return PlacementActionResult(
                handled=True,
                held=held,
                state=held.pending.preview or engine.current_state(),
                fault=held.pending.fault,
            )
        pending = engine.preview_move(held.pending, location)
        if policy is OccupiedSlotPolicy.BOUNCE and pending.fault is PlacementFault.SLOT_OCCUPIED:
            bounced = PlacementFlowService._bounce_result(engine.current_state(), pending, location)
            if bounced is not None:
                pending = replace(pending, preview=bounced, fault=None)
        return PlacementActionResult(
            handled=True,
            held=HeldTokenState(pending),
            state=pending.preview or engine.current_state(),
            fault=pending.fault,
        )

    @staticmethod
    def on_pointer_release(
        *,
        engine: PlacementEngine,
        held: HeldTokenState,
        location: Location | None,
        policy: OccupiedSlotPolicy = OccupiedSlotPolicy.REJECT,
    ) -> PlacementActionResult:
        """Commit the held token onto location; ``None`` means released outside any target."""
        pending = held.pending
        if pending is None:
            return PlacementActionResult(handled=False, held=held, state=engine.current_state())
        if location is None:
            return PlacementActionResult(
                handled=True,
                held=HeldTokenState(),
                state=engine.cancel_move(pending),
                status=f"Returned '{pending.token.text}'.",
            )
        if policy is OccupiedSlotPolicy.BOUNCE:
            # Plan both steps first so a failing placement never evicts the occupant.
            if PlacementFlowService._bounce_result(engine.current_state(), pending, location) is not None:
                PlacementFlowService._bounce_occupant(engine, location)
        try:
            state = engine.commit_move(pending, location)
        except PlacementError as exc:
            if exc.fault is PlacementFault.INCONSISTENT_STATE:
                raise
            return PlacementActionResult(
                handled=True,
                held=HeldTokenState(),
                state=engine.current_state(),
                status="Invalid drop position.",
                fault=exc.fault,
            )
        return PlacementActionResult(
            handled=True,
            held=HeldTokenState(),
            state=state,
            status=f"Placed '{pending.token.text}' at {location}.",
        )

    @staticmethod
    def _bounce_result(state: PuzzleState, pending: PendingMove, location: Location) -> PuzzleState | None:
        """State after returning the slot occupant to the pool and placing the held token.

        None when the drop is not a pool-to-full-slot move. A stale held token raises.
        """
        if not (pending.origin.in_pool and location.in_slots):
            return None
        occupant = state.token_at(location)
        if occupant is None:
            return None
        # Occupant is appended, so the held token's pool position stays valid.
        vacated = apply_move(state, occupant, location, Location.pool(len(state.pool)))
        return apply_move(vacated, pending.token, pending.origin, location)

    @staticmethod
    def _bounce_occupant(engine: PlacementEngine, location: Location) -> None:
        state = engine.current_state()
        occupant = state.token_at(location)
        if occupant is None:
            return
        bounce = engine.begin_move(occupant, location)
        engine.commit_move(bounce, Location.pool(len(state.pool)))
        logger.info("occupant_bounced token=%s slot=%s", occupant.id, location.position)

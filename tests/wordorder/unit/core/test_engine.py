from __future__ import annotations

import itertools
import random

import pytest

from tests.wordorder.conftest import A, B, C, assert_closed_world, make_engine
from wordorder.core.engine import PlacementEngine
from wordorder.core.errors import (
    InconsistentStateError,
    InvalidLocationError,
    PlacementFault,
    SlotOccupiedError,
)
from wordorder.core.events import EventBus, MoveCommitted
from wordorder.core.models import Location, PuzzleState, Token


def test_concrete_abc_scenario(abc_engine: PlacementEngine) -> None:
    pending = abc_engine.begin_move(A, Location.pool(0))
    state = abc_engine.commit_move(pending, Location.slot(1))
    assert state.pool == (B, C)
    assert state.slots == (None, A, None)

    pending_b = abc_engine.begin_move(B, Location.pool(0))
    with pytest.raises(SlotOccupiedError) as excinfo:
        abc_engine.commit_move(pending_b, Location.slot(1))
    assert excinfo.value.fault is PlacementFault.SLOT_OCCUPIED
    assert abc_engine.current_state() == state

    back = abc_engine.begin_move(A, Location.slot(1))
    final = abc_engine.commit_move(back, Location.pool(0))
    assert final.slots == (None, None, None)
    assert_closed_world(final, {0, 1, 2})


def test_begin_move_validates_origin(abc_engine: PlacementEngine) -> None:
    with pytest.raises(InconsistentStateError):
        abc_engine.begin_move(A, Location.pool(1))
    with pytest.raises(InconsistentStateError):
        abc_engine.begin_move(A, Location.slot(0))
    with pytest.raises(InvalidLocationError):
        abc_engine.begin_move(A, Location.pool(7))
    pending = abc_engine.begin_move(A, Location.pool(0))
    assert pending.dragged_over is None
    assert pending.preview is None
    assert abc_engine.revision() == 0


def test_preview_does_not_mutate_and_reports_result(abc_engine: PlacementEngine) -> None:
    before = abc_engine.current_state()
    pending = abc_engine.begin_move(A, Location.pool(0))
    previewed = abc_engine.preview_move(pending, Location.slot(2))
    assert previewed.dragged_over == Location.slot(2)
    assert previewed.preview == PuzzleState(pool=(B, C), slots=(None, None, A))
    assert previewed.fault is None
    assert pending.dragged_over is None
    assert abc_engine.current_state() is before
    assert abc_engine.revision() == 0


def test_preview_self_target_is_noop(abc_engine: PlacementEngine) -> None:
    pending = abc_engine.begin_move(B, Location.pool(1))
    previewed = abc_engine.preview_move(pending, Location.pool(1))
    assert previewed.preview is abc_engine.current_state()
    assert previewed.fault is None


def test_preview_reports_faults_instead_of_raising(abc_engine: PlacementEngine) -> None:
    abc_engine.commit_move(abc_engine.begin_move(A, Location.pool(0)), Location.slot(0))
    pending = abc_engine.begin_move(B, Location.pool(0))
    occupied = abc_engine.preview_move(pending, Location.slot(0))
    assert occupied.preview is None
    assert occupied.fault is PlacementFault.SLOT_OCCUPIED
    outside = abc_engine.preview_move(occupied, Location.slot(9))
    assert outside.fault is PlacementFault.INVALID_LOCATION
    recovered = abc_engine.preview_move(outside, Location.slot(1))
    assert recovered.fault is None
    assert recovered.preview is not None


def test_preview_with_stale_origin_raises(abc_engine: PlacementEngine) -> None:
    stale = abc_engine.begin_move(B, Location.pool(1))
    abc_engine.commit_move(abc_engine.begin_move(A, Location.pool(0)), Location.slot(0))
    with pytest.raises(InconsistentStateError):
        abc_engine.preview_move(stale, Location.slot(1))
    with pytest.raises(InconsistentStateError):
        abc_engine.commit_move(stale, Location.slot(1))


def test_preview_then_commit_matches(abc_engine: PlacementEngine) -> None:
    pending = abc_engine.begin_move(C, Location.pool(2))
    pending = abc_engine.preview_move(pending, Location.slot(0))
    pending = abc_engine.preview_move(pending, Location.pool(0))
    pending = abc_engine.preview_move(pending, Location.slot(1))
    committed = abc_engine.commit_move(pending, Location.slot(1))
    assert committed == pending.preview


@pytest.mark.parametrize(
    ("placed", "origin"),
    [
        (False, Location.pool(1)),
        (True, Location.slot(2)),
    ],
)
def test_self_move_is_identity(placed: bool, origin: Location) -> None:
    engine = make_engine()
    if placed:
        engine.commit_move(engine.begin_move(B, Location.pool(1)), Location.slot(2))
    before = engine.current_state()
    revision = engine.revision()
    token = before.token_at(origin)
    assert token is not None
    after = engine.commit_move(engine.begin_move(token, origin), origin)
    assert after is before
    assert engine.revision() == revision


def test_pool_swap_symmetry() -> None:
    tokens = [Token(i, str(i)) for i in range(4)]
    engine = make_engine(*tokens)
    original = engine.current_state().pool
    for i, j in itertools.permutations(range(4), 2):
        first = engine.current_state().pool[i]
        engine.commit_move(engine.begin_move(first, Location.pool(i)), Location.pool(j))
        engine.commit_move(engine.begin_move(first, Location.pool(j)), Location.pool(i))
        assert engine.current_state().pool == original


def test_slot_swap_symmetry(abc_engine: PlacementEngine) -> None:
    abc_engine.commit_move(abc_engine.begin_move(A, Location.pool(0)), Location.slot(0))
    abc_engine.commit_move(abc_engine.begin_move(B, Location.pool(0)), Location.slot(2))
    original = abc_engine.current_state().slots
    abc_engine.commit_move(abc_engine.begin_move(A, Location.slot(0)), Location.slot(2))
    assert abc_engine.current_state().slots == (B, None, A)
    abc_engine.commit_move(abc_engine.begin_move(A, Location.slot(2)), Location.slot(0))
    assert abc_engine.current_state().slots == original


def test_pool_slot_round_trip(abc_engine: PlacementEngine) -> None:
    abc_engine.commit_move(abc_engine.begin_move(B, Location.pool(1)), Location.slot(0))
    state = abc_engine.commit_move(abc_engine.begin_move(B, Location.slot(0)), Location.pool(2))
    assert B in state.pool
    assert state.slots[0] is None
    assert_closed_world(state, {0, 1, 2})


def test_cancel_leaves_state_untouched(abc_engine: PlacementEngine) -> None:
    before = abc_engine.current_state()
    pending = abc_engine.preview_move(abc_engine.begin_move(A, Location.pool(0)), Location.slot(0))
    assert abc_engine.cancel_move(pending) is before
    assert abc_engine.revision() == 0


def test_commit_publishes_event_and_bumps_revision() -> None:
    bus = EventBus()
    seen: list[MoveCommitted] = []
    bus.subscribe(MoveCommitted, seen.append)
    engine = PlacementEngine(PuzzleState.initial([A, B, C]), event_bus=bus)

    state = engine.commit_move(engine.begin_move(C, Location.pool(2)), Location.slot(1))
    engine.commit_move(engine.begin_move(C, Location.slot(1)), Location.slot(1))

    assert engine.revision() == 1
    assert len(seen) == 1
    assert seen[0].state == state
    assert seen[0].destination == Location.slot(1)
    assert seen[0].revision == 1


def test_rejected_commit_logs_fault(abc_engine: PlacementEngine, caplog) -> None:
    caplog.set_level("INFO", logger="wordorder.core.engine")
    abc_engine.commit_move(abc_engine.begin_move(A, Location.pool(0)), Location.slot(0))
    with pytest.raises(SlotOccupiedError):
        abc_engine.commit_move(abc_engine.begin_move(B, Location.pool(0)), Location.slot(0))
    assert "fault=SLOT_OCCUPIED" in caplog.text


def test_engine_rejects_inconsistent_initial_state() -> None:
    with pytest.raises(InconsistentStateError):
        PlacementEngine(PuzzleState(pool=(A,), slots=(A, None)))


def test_random_commit_sequences_keep_closed_world(seeded_rng: random.Random) -> None:
    tokens = [Token(i, f"t{i}") for i in range(6)]
    engine = make_engine(*tokens)
    ids = {token.id for token in tokens}
    for _ in range(500):
        state = engine.current_state()
        token = seeded_rng.choice(state.tokens())
        origin = state.locate(token.id)
        assert origin is not None
        if seeded_rng.random() < 0.5:
            destination = Location.slot(seeded_rng.randrange(state.slot_count))
        else:
            destination = Location.pool(seeded_rng.randrange(len(state.pool) + 1))
        pending = engine.begin_move(token, origin)
        try:
            engine.commit_move(pending, destination)
        except (SlotOccupiedError, InvalidLocationError):
            assert engine.current_state() is state
        assert_closed_world(engine.current_state(), ids)

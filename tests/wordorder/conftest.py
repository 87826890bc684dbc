from __future__ import annotations

import random

import pytest

from wordorder.core.engine import PlacementEngine
from wordorder.core.models import PuzzleState, Token
from wordorder.questions.repository import QuestionRepository

A = Token(0, "A")
B = Token(1, "B")
C = Token(2, "C")


def make_engine(*tokens: Token) -> PlacementEngine:
    return PlacementEngine(PuzzleState.initial(tokens or (A, B, C)))


def assert_closed_world(state: PuzzleState, token_ids: set[int]) -> None:
    present = [token.id for token in state.tokens()]
    assert sorted(present) == sorted(token_ids)
    assert len(state.pool) + sum(1 for token in state.slots if token is not None) == len(token_ids)


@pytest.fixture
def abc_engine() -> PlacementEngine:
    return make_engine(A, B, C)


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def question_repository(tmp_path) -> QuestionRepository:
    return QuestionRepository(tmp_path / "questions")

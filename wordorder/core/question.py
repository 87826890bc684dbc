"""Question content and puzzle construction."""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from wordorder.core.models import PuzzleState, Token

ASCENDING: Literal["asc"] = "asc"


@dataclass(frozen=True, slots=True)
class Question:
    """Keywords to arrange plus the order that solves them."""

    name: str
    keywords: tuple[Token, ...]
    correct_order: Literal["asc"] | tuple[int, ...] = ASCENDING

    def target_order(self) -> tuple[int, ...]:
        """Resolve the correct order to a tuple of keyword ids."""
        ids = [keyword.id for keyword in self.keywords]
        if self.correct_order == ASCENDING:
            return tuple(sorted(ids))
        order = tuple(self.correct_order)
        if sorted(order) != sorted(ids):
            raise ValueError(f"Correct order for '{self.name}' must be a permutation of keyword ids.")
        return order


def shuffle_tokens(tokens: Sequence[Token], rng: random.Random) -> list[Token]:
    """Shuffled copy of tokens; the input sequence is left untouched."""
    result = list(tokens)
    rng.shuffle(result)
    return result


def new_puzzle(question: Question, rng: random.Random) -> PuzzleState:
    """Create a fresh puzzle: shuffled pool, one empty slot per keyword."""
    return PuzzleState.initial(shuffle_tokens(question.keywords, rng))


SAMPLE_QUESTION = Question(
    name="JavaScript Arrow Function",
    keywords=tuple(
        Token(index, text)
        for index, text in enumerate(
            (
                "export",
                "default",
                "async",
                "function",
                "programingo",
                "()",
                "{",
                "return",
                '"programingo"',
                ";",
                "}",
            )
        )
    ),
)

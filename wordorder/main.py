"""Application entry point."""

from __future__ import annotations

import argparse
import logging
import random

from wordorder.core.engine import PlacementEngine
from wordorder.core.models import PuzzleState
from wordorder.core.question import SAMPLE_QUESTION, Question, new_puzzle
from wordorder.infra.app_data import resolve_questions_dir
from wordorder.infra.config import load_default_env_files, read_runtime_settings
from wordorder.infra.logging import setup_logging
from wordorder.questions.repository import QuestionRepository
from wordorder.questions.schema import payload_to_question

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Set up a keyword ordering puzzle.")
    parser.add_argument("--question", default=None, help="Stored question name (default: built-in sample).")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the pool shuffle.")
    parser.add_argument("--list", action="store_true", help="List stored questions and exit.")
    return parser.parse_args(argv)


def load_question(name: str | None, repository: QuestionRepository) -> Question:
    if name is None:
        return SAMPLE_QUESTION
    return payload_to_question(repository.load_payload(name))


def render_state(state: PuzzleState) -> str:
    """Plain-text view of both containers; empty slots show as underscores."""
    answer = " ".join("_" if token is None else token.text for token in state.slots)
    pool = " ".join(token.text for token in state.pool)
    return f"answer: {answer}\npool:   {pool}"


def main(argv: list[str] | None = None) -> int:
    """Build a puzzle from the selected question and print its initial state."""
    load_default_env_files()
    setup_logging()
    args = _parse_args(argv)
    settings = read_runtime_settings()
    repository = QuestionRepository(resolve_questions_dir())

    if args.list:
        for name in repository.list_names():
            print(name)
        return 0

    question = load_question(args.question or settings.question_name, repository)
    seed = args.seed if args.seed is not None else settings.seed
    engine = PlacementEngine(new_puzzle(question, random.Random(seed)))
    logger.info(
        "puzzle_ready question=%s tokens=%s seed=%s",
        question.name,
        engine.current_state().token_count,
        seed,
    )
    print(question.name)
    print(render_state(engine.current_state()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

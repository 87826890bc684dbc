"""Question payload schema and validation helpers."""

from __future__ import annotations

from wordorder.core.models import Token
from wordorder.core.question import ASCENDING, Question

SCHEMA_VERSION = 1


def question_to_payload(question: Question) -> dict[str, object]:
    """Convert a question to a JSON-serializable payload."""
    correct_order: object = (
        ASCENDING if question.correct_order == ASCENDING else list(question.correct_order)
    )
    return {
        "version": SCHEMA_VERSION,
        "name": question.name,
        "keywords": [{"id": keyword.id, "text": keyword.text} for keyword in question.keywords],
        "correct_order": correct_order,
    }


def payload_to_question(payload: dict[str, object]) -> Question:
    """Convert a loaded payload into a question."""
    raw_version = payload.get("version", -1)
    if not isinstance(raw_version, (int, str)):
        raise ValueError("Question version must be int-compatible.")
    if int(raw_version) != SCHEMA_VERSION:
        raise ValueError("Unsupported question version.")
    name = str(payload.get("name", "")).strip()
    if not name:
        raise ValueError("Question name is required.")

    raw_keywords = payload.get("keywords")
    if not isinstance(raw_keywords, list) or not raw_keywords:
        raise ValueError("Question keywords must be a non-empty list.")

    keywords: list[Token] = []
    for item in raw_keywords:
        if not isinstance(item, dict):
            raise ValueError("Each keyword must be an object.")
        try:
            keyword = Token(id=int(item["id"]), text=str(item["text"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError("Malformed keyword entry in question payload.") from exc
        keywords.append(keyword)
    if len({keyword.id for keyword in keywords}) != len(keywords):
        raise ValueError("Keyword ids must be unique within a question.")

    raw_order = payload.get("correct_order", ASCENDING)
    if raw_order == ASCENDING:
        question = Question(name=name, keywords=tuple(keywords))
    elif isinstance(raw_order, list):
        try:
            order = tuple(int(value) for value in raw_order)
        except (TypeError, ValueError) as exc:
            raise ValueError("Correct order must list integer keyword ids.") from exc
        question = Question(name=name, keywords=tuple(keywords), correct_order=order)
    else:
        raise ValueError("Correct order must be 'asc' or a list of keyword ids.")
    question.target_order()
    return question

"""Unified app-data paths."""

from __future__ import annotations

import os
from pathlib import Path


def resolve_app_data_root() -> Path:
    """Resolve app-data root directory for runtime state."""
    configured = os.getenv("WORDORDER_APP_DATA_DIR", "").strip()
    if configured:
        candidate = Path(configured)
        if candidate.is_absolute():
            return candidate
        return resolve_project_root() / candidate
    return resolve_project_root() / "appdata"


def resolve_project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def resolve_logs_dir() -> Path:
    """Resolve logs directory, honoring WORDORDER_LOG_DIR."""
    return _override_or_default("WORDORDER_LOG_DIR", resolve_app_data_root() / "logs")


def resolve_questions_dir() -> Path:
    """Resolve stored-questions directory, honoring WORDORDER_QUESTIONS_DIR."""
    return _override_or_default("WORDORDER_QUESTIONS_DIR", resolve_app_data_root() / "questions")


def _override_or_default(var_name: str, default_path: Path) -> Path:
    raw = os.getenv(var_name, "").strip()
    if not raw:
        return default_path
    candidate = Path(raw)
    if candidate.is_absolute():
        return candidate
    return resolve_app_data_root() / candidate

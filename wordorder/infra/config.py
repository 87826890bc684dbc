"""Environment file loading and runtime settings."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

DEFAULT_ENV_FILES: tuple[str, ...] = (
    "appdata/config/.env",
    "appdata/config/.env.local",
    ".env",
    ".env.local",
)


@dataclass(frozen=True, slots=True)
class RuntimeSettings:
    """Settings read from the process environment."""

    seed: int | None
    question_name: str | None


def parse_env_text(text: str) -> dict[str, str]:
    """Return KEY=VALUE assignments from env-file text, later keys winning.

    Blank lines, ``#`` comments, lines without ``=`` and empty keys are skipped.
    One pair of matching surrounding quotes is stripped from a value.
    """
    assignments: dict[str, str] = {}
    for raw_line in text.splitlines():
        parsed = _parse_env_line(raw_line)
        if parsed is not None:
            key, value = parsed
            assignments[key] = value
    return assignments


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Apply an env file to the process environment; missing files are ignored."""
    env_path = _resolve_env_path(path)
    if not env_path.is_file():
        return
    for key, value in parse_env_text(env_path.read_text(encoding="utf-8")).items():
        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files in order; later files win over earlier ones."""
    for path in tuple(paths) if paths is not None else DEFAULT_ENV_FILES:
        load_env_file(path, override_existing=override_existing)


def read_runtime_settings() -> RuntimeSettings:
    """Read seed and question selection from the environment."""
    raw_seed = os.getenv("WORDORDER_SEED", "").strip()
    try:
        seed = int(raw_seed) if raw_seed else None
    except ValueError as exc:
        raise ValueError(f"WORDORDER_SEED must be an integer, got {raw_seed!r}.") from exc
    question_name = os.getenv("WORDORDER_QUESTION", "").strip() or None
    return RuntimeSettings(seed=seed, question_name=question_name)


def _resolve_env_path(path: str) -> Path:
    """Resolve env path from cwd, then project root."""
    candidate = Path(path)
    if candidate.exists() or candidate.is_absolute():
        return candidate
    # Fallback for IDE run configs with different working directory.
    return Path(__file__).resolve().parents[2] / path


def _parse_env_line(raw_line: str) -> tuple[str, str] | None:
    line = raw_line.strip()
    if not line or line.startswith("#"):
        return None
    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        value = value[1:-1]
    return key, value

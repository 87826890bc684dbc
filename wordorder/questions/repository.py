"""Persistence layer for loading/saving questions."""

from __future__ import annotations

import json
from pathlib import Path


class QuestionRepository:
    """JSON file repository for puzzle questions."""

    def __init__(self, root: Path) -> None:
        self._root = root
        self._root.mkdir(parents=True, exist_ok=True)

    def list_names(self) -> list[str]:
        """List available question names."""
        names: list[str] = []
        for path in self._root.glob("*.json"):
            names.append(self._read_name(path) or path.stem)
        return sorted(names, key=str.lower)

    def load_payload(self, name: str) -> dict[str, object]:
        """Load question payload by name."""
        path = self._path_for_name(name)
        if path is None:
            raise FileNotFoundError(f"Question '{name}' not found.")
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    def save_payload(self, name: str, payload: dict[str, object]) -> None:
        """Save question payload by name, replacing an existing file of that name."""
        cleaned = _validate_name(name)
        path = self._path_for_name(cleaned) or self._allocate_path(cleaned)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2)

    def _allocate_path(self, name: str) -> Path:
        base = _normalize_for_filename(name)
        candidate = self._root / f"{base}.json"
        index = 2
        while candidate.exists():
            candidate = self._root / f"{base}_{index}.json"
            index += 1
        return candidate

    def _path_for_name(self, name: str) -> Path | None:
        cleaned = _validate_name(name)
        direct = self._root / f"{_normalize_for_filename(cleaned)}.json"
        if direct.exists() and self._read_name(direct) in {cleaned, None}:
            return direct
        for path in self._root.glob("*.json"):
            if self._read_name(path) == cleaned:
                return path
        return None

    @staticmethod
    def _read_name(path: Path) -> str | None:
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, json.JSONDecodeError):
            return None
        if not isinstance(payload, dict):
            return None
        value = payload.get("name")
        if isinstance(value, str):
            return value.strip() or None
        return None


def _validate_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise ValueError("Question name cannot be empty.")
    return cleaned


def _normalize_for_filename(name: str) -> str:
    chars = [char if char.isalnum() or char in {"-", "_"} else "_" for char in name]
    normalized = "".join(chars).strip("_")
    return normalized or "question"

"""orjson-backed JSON encoding for log records."""

from __future__ import annotations

from typing import Any

import orjson


def dumps_text(payload: Any) -> str:
    """Serialize payload to a compact JSON string; unknown values fall back to ``str``."""
    return orjson.dumps(payload, default=str).decode("utf-8")


__all__ = ["dumps_text"]

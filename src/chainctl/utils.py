from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def join_or_none(values: Iterable[Any]) -> str:
    """Comma-join values for log lines; an empty list renders as ``none``."""
    items = [str(v) for v in values]
    return ",".join(items) if items else "none"

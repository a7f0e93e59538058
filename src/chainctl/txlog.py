"""
Transaction Log - append-only record of what chainctl did on-chain.

Each line is ``[<ISO-8601 UTC timestamp>] <message>`` and stands on its
own. A failed write is reported on stderr and never propagates: the
on-chain effect being recorded has already happened.
"""

from __future__ import annotations

from pathlib import Path

import click

from .utils import utc_now_iso


class TransactionLog:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def format_line(self, message: str) -> str:
        # one entry per physical line
        message = message.replace("\r", "\\r").replace("\n", "\\n")
        return f"[{utc_now_iso()}] {message}\n"

    def record(self, message: str) -> bool:
        """
        Append one entry.

        Args:
            message: Free-text description of the action

        Returns:
            True if the line was written, False if the write failed
        """
        line = self.format_line(message)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8", errors="backslashreplace") as f:
                f.write(line)
        except OSError as exc:
            click.secho(f"Error logging transaction: {exc}", fg="red", err=True)
            return False
        return True

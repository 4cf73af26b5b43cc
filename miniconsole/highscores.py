"""Persistent top-five high score table."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

MAX_ENTRIES = 5
STAMP_FORMAT = "%Y-%m-%d %H:%M"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class HighScoreEntry:
    """One row of the table."""

    game: str
    score: int
    stamp: str


def _sort_key(entry: HighScoreEntry) -> tuple[int, str]:
    return entry.score, entry.stamp


def _parse_line(line: str) -> HighScoreEntry | None:
    parts = line.split("|", 2)
    if len(parts) < 3:
        return None
    game, score_text, stamp = parts
    match = _LEADING_INT.match(score_text)
    if match is None:
        return None
    return HighScoreEntry(game, int(match.group(1)), stamp)


class HighScoreBoard:
    """High scores stored as ``game|score|stamp`` lines in a text file."""

    def __init__(self, file_path: str | Path) -> None:
        self.file_path = Path(file_path)
        self._entries: list[HighScoreEntry] = []

    @property
    def entries(self) -> list[HighScoreEntry]:
        """Entries, best first."""
        return list(self._entries)

    def _sort_and_trim(self) -> None:
        self._entries.sort(key=_sort_key, reverse=True)
        del self._entries[MAX_ENTRIES:]

    def load(self) -> None:
        """Replace the entries with those read from the file; a missing file gives none."""
        self._entries = []
        try:
            text = self.file_path.read_text(encoding="utf-8")
        except OSError:
            return
        for line in text.splitlines():
            if not line:
                continue
            entry = _parse_line(line)
            if entry is not None:
                self._entries.append(entry)
        self._sort_and_trim()

    def save(self) -> None:
        """Write the entries to the file; write failures are ignored."""
        content = "".join(f"{e.game}|{e.score}|{e.stamp}\n" for e in self._entries)
        try:
            self.file_path.write_text(content, encoding="utf-8")
        except OSError:
            return

    def submit(self, game: str, score: int) -> bool:
        """Record a score if it makes the table; returns whether it did."""
        if score <= 0:
            return False
        if len(self._entries) >= MAX_ENTRIES and score <= self._entries[-1].score:
            return False
        self._entries.append(HighScoreEntry(game, score, self._now_stamp()))
        self._sort_and_trim()
        self.save()
        return True

    def top_score(self) -> int:
        """Best score on the table, or 0 when empty."""
        return self._entries[0].score if self._entries else 0

    @staticmethod
    def _now_stamp() -> str:
        return datetime.now().strftime(STAMP_FORMAT)
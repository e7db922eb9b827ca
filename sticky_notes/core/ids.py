from __future__ import annotations

import time
from typing import Callable, Iterable


def _epoch_ms() -> int:
    return time.time_ns() // 1_000_000


class NoteIdGenerator:
    """
    Time-derived ids (epoch milliseconds as a decimal string).
    Strictly increasing: if the clock did not move since the last id,
    the next integer is used instead.
    """

    def __init__(self, clock_ms: Callable[[], int] = _epoch_ms):
        self._clock_ms = clock_ms
        self._last = 0

    def seed(self, used_ids: Iterable[str]) -> None:
        for note_id in used_ids:
            try:
                value = int(note_id)
            except (TypeError, ValueError):
                continue
            if value > self._last:
                self._last = value

    def next_id(self) -> str:
        value = max(int(self._clock_ms()), self._last + 1)
        self._last = value
        return str(value)

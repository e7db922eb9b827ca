from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from sticky_notes.core.dates import parse_timestamp, to_iso


@dataclass(frozen=True)
class Note:
    id: str
    content: str
    color: str
    date: datetime

    def with_content(self, content: str) -> "Note":
        return replace(self, content=content)

    def to_record(self) -> dict:
        """Storage form: {id, content, color, date}."""
        return {
            "id": self.id,
            "content": self.content,
            "color": self.color,
            "date": to_iso(self.date),
        }

    @classmethod
    def from_record(cls, record: dict) -> "Note":
        """
        Raises ValueError/TypeError/KeyError on a malformed record;
        the caller decides whether to skip it.
        """
        if not isinstance(record, dict):
            raise TypeError(f"note record must be an object, got {type(record).__name__}")
        note_id = record["id"]
        if isinstance(note_id, (int, float)) and not isinstance(note_id, bool):
            note_id = str(int(note_id))
        if not isinstance(note_id, str) or not note_id.strip():
            raise ValueError("note record has an empty id")
        content = record.get("content")
        color = record.get("color")
        return cls(
            id=note_id,
            content="" if content is None else str(content),
            color="" if color is None else str(color),
            date=parse_timestamp(record["date"]),
        )

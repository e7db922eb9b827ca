from __future__ import annotations

from datetime import datetime, timezone

_MONTHS_ES = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(dt: datetime) -> str:
    """UTC, millisecond precision, 'Z' suffix: 2026-10-19T12:00:00.000Z"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value) -> datetime:
    """
    Accepts ISO-8601 strings (naive = UTC) or epoch milliseconds.
    Always returns an aware UTC datetime.
    """
    if isinstance(value, bool):
        raise TypeError("boolean is not a timestamp")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
    if not isinstance(value, str):
        raise TypeError(f"unsupported timestamp type: {type(value).__name__}")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_note_date(dt: datetime) -> str:
    """Long Spanish date in local time: '19 de octubre de 2026'."""
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    return f"{dt.day} de {_MONTHS_ES[dt.month - 1]} de {dt.year}"

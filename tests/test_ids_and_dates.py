import sys
import os
from datetime import datetime, timedelta, timezone

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from sticky_notes.core.dates import format_note_date, parse_timestamp, to_iso
from sticky_notes.core.ids import NoteIdGenerator


def test_ids_follow_clock():
    ticks = iter([100, 250, 900])
    gen = NoteIdGenerator(clock_ms=lambda: next(ticks))
    assert [gen.next_id() for _ in range(3)] == ["100", "250", "900"]


def test_ids_bump_when_clock_stalls_or_goes_back():
    ticks = iter([100, 100, 50])
    gen = NoteIdGenerator(clock_ms=lambda: next(ticks))
    assert [gen.next_id() for _ in range(3)] == ["100", "101", "102"]


def test_seed_ignores_non_numeric_ids():
    gen = NoteIdGenerator(clock_ms=lambda: 10)
    gen.seed(["abc", "42", None, "7"])
    assert gen.next_id() == "43"


def test_to_iso_normalizes_to_utc():
    dt = datetime(2026, 10, 19, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    assert to_iso(dt) == "2026-10-19T12:00:00.000Z"


def test_to_iso_treats_naive_as_utc():
    assert to_iso(datetime(2026, 1, 2, 3, 4, 5)) == "2026-01-02T03:04:05.000Z"


def test_parse_timestamp_variants():
    expected = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
    assert parse_timestamp("2026-10-19T12:00:00.000Z") == expected
    assert parse_timestamp("2026-10-19T14:00:00+02:00") == expected
    assert parse_timestamp("2026-10-19T12:00:00") == expected


@pytest.mark.parametrize("value", [True, None, "not a date", [1]])
def test_parse_timestamp_rejects_garbage(value):
    with pytest.raises((TypeError, ValueError)):
        parse_timestamp(value)


def test_format_note_date_spanish_long_form():
    assert format_note_date(datetime(2026, 3, 1)) == "1 de marzo de 2026"
    assert format_note_date(datetime(2025, 12, 31, 23, 59)) == "31 de diciembre de 2025"

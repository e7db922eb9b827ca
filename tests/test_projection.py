import sys
import os
from datetime import datetime

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sticky_notes.core.models import Note
from sticky_notes.core.search import matches_query
from sticky_notes.ui.projection import project_cards


def _notes():
    return [
        Note(id="2", content="Buy MILK", color="blue", date=datetime(2026, 10, 19)),
        Note(id="1", content="call mom", color="red", date=datetime(2026, 1, 5)),
    ]


def test_matches_query():
    assert matches_query("Hello", "hell")
    assert matches_query("Hello", "")
    assert matches_query("", None)
    assert not matches_query("", "x")
    assert not matches_query("Hello", "bye")


def test_cards_keep_order_and_hide_non_matches():
    cards = project_cards(_notes(), "milk")
    assert [c.note_id for c in cards] == ["2", "1"]
    assert [c.visible for c in cards] == [True, False]


def test_empty_query_shows_all():
    assert all(c.visible for c in project_cards(_notes(), ""))


def test_drafts_override_stored_content():
    cards = project_cards(_notes(), "dentist", drafts={"1": "call dentist"})
    assert [c.visible for c in cards] == [False, True]
    assert cards[1].content == "call dentist"


def test_date_label_and_color():
    card = project_cards(_notes())[0]
    assert card.date_label == "19 de octubre de 2026"
    assert card.color == "blue"


def test_keep_visible_overrides_query():
    cards = project_cards(_notes(), "milk", keep_visible={"1"})
    assert [c.visible for c in cards] == [True, True]

"""Tests for the note store."""
from __future__ import annotations

import pytest

from daily_dashboard.errors import ValidationError
from daily_dashboard.note_store import NoteCreate, NoteStore, NoteUpdate
from daily_dashboard.notes import demo_notes
from daily_dashboard.storage import safe_user_key

USER = "tester@example.com"


@pytest.fixture
def store():
    return NoteStore()


def test_create_and_get(store):
    note = store.create_note(USER, NoteCreate(title=" Idea ", content="Body", tags=["x", "x"]))
    assert note.title == "Idea"
    assert note.tags == ["x"]
    assert store.get_note(USER, note.id) == note


@pytest.mark.parametrize(
    "title, content, message",
    [("", "body", "title required"), ("t", "   ", "content required")],
)
def test_create_requires_title_and_content(store, title, content, message):
    with pytest.raises(ValidationError, match=message):
        store.create_note(USER, NoteCreate(title=title, content=content))


def test_update_is_partial(store):
    note = store.create_note(USER, NoteCreate(title="t", content="c"))
    updated = store.update_note(USER, note.id, NoteUpdate(content="new"))
    assert updated.title == "t"
    assert updated.content == "new"
    assert updated.updated_at >= updated.created_at


def test_update_rejects_blank_title(store):
    note = store.create_note(USER, NoteCreate(title="t", content="c"))
    with pytest.raises(ValidationError):
        store.update_note(USER, note.id, NoteUpdate(title=" "))


def test_missing_note(store):
    assert store.get_note(USER, "nope") is None
    assert store.update_note(USER, "nope", NoteUpdate(title="x")) is None
    assert store.delete_note(USER, "nope") is False


def test_delete(store):
    note = store.create_note(USER, NoteCreate(title="t", content="c"))
    assert store.delete_note(USER, note.id) is True
    assert store.list_notes(USER) == []


def test_seeded_notes_persist(tmp_path):
    store = NoteStore(tmp_path, seed=demo_notes)
    titles = [n.title for n in store.list_notes(USER)]
    assert titles == ["My day ideas", "Project notes"]

    reloaded = NoteStore(tmp_path, seed=demo_notes)
    assert [n.id for n in reloaded.list_notes(USER)] == [n.id for n in store.list_notes(USER)]


def test_get_note_returns_a_copy(store):
    note = store.create_note(USER, NoteCreate(title="t", content="c"))
    fetched = store.get_note(USER, note.id)
    fetched.content = "edited outside the store"
    assert store.get_note(USER, note.id).content == "c"


def test_non_object_lines_are_skipped(tmp_path):
    path = tmp_path / f"{safe_user_key(USER)}_notes.jsonl"
    path.write_text('42\n{"id": "n1", "title": null, "content": "x"}\n{"id": "n2", "title": "ok"}\n')
    notes = NoteStore(tmp_path).list_notes(USER)
    assert [n.id for n in notes] == ["n2"]
    assert notes[0].content == ""

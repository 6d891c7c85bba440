"""Tests for the task store: validation, partial updates and JSONL persistence."""
from __future__ import annotations

import json
from datetime import date, timedelta

import pytest

from daily_dashboard.analysis import query_tasks
from daily_dashboard.errors import ValidationError
from daily_dashboard.storage import safe_user_key
from daily_dashboard.task_store import TaskCreate, TaskStore, TaskUpdate
from daily_dashboard.task_store import store as task_store_module
from daily_dashboard.tasks import TaskPriority, TaskStatus, demo_tasks

USER = "tester@example.com"


@pytest.fixture
def store():
    return TaskStore()


class TestCreate:
    def test_defaults(self, store):
        task = store.create_task(USER, TaskCreate(title="  Write report  "))
        assert task.title == "Write report"
        assert task.status == TaskStatus.TODO
        assert task.priority == TaskPriority.MEDIUM
        assert task.start_date is None and task.end_date is None
        assert task.updated_at == task.created_at

    def test_newest_first(self, store):
        first = store.create_task(USER, TaskCreate(title="one"))
        second = store.create_task(USER, TaskCreate(title="two"))
        assert [t.id for t in store.list_tasks(USER)] == [second.id, first.id]

    def test_due_date_fills_both_bounds(self, store):
        task = store.create_task(USER, TaskCreate(title="x", due_date="2024-01-05"))
        assert task.start_date == task.end_date == date(2024, 1, 5)

    def test_single_bound_fills_other(self, store):
        task = store.create_task(USER, TaskCreate(title="x", end_date="2024-01-05"))
        assert task.start_date == date(2024, 1, 5)

    def test_tags_normalized(self, store):
        task = store.create_task(USER, TaskCreate(title="x", tags=[" a ", "b", "a", ""]))
        assert task.tags == ["a", "b"]

    @pytest.mark.parametrize(
        "request_kwargs, message",
        [
            ({"title": "   "}, "title required"),
            ({"title": "x", "status": "archived"}, "Invalid status"),
            ({"title": "x", "priority": "urgent"}, "Invalid priority"),
            ({"title": "x", "start_date": "01/05/2024"}, "Invalid start_date"),
            ({"title": "x", "start_date": "2024-01-06", "end_date": "2024-01-05"}, "is after"),
        ],
    )
    def test_rejects_bad_fields(self, store, request_kwargs, message):
        with pytest.raises(ValidationError, match=message):
            store.create_task(USER, TaskCreate(**request_kwargs))
        assert store.list_tasks(USER) == []


class TestUpdate:
    def test_partial_update_refreshes_updated_at(self, store):
        task = store.create_task(USER, TaskCreate(title="x", description="keep"))
        created = task.created_at

        updated = store.update_task(USER, task.id, TaskUpdate(status="done"))
        assert updated.status == TaskStatus.DONE
        assert updated.description == "keep"
        assert updated.created_at == created
        assert updated.updated_at >= created

    def test_updated_at_never_before_created_at(self, store, monkeypatch):
        task = store.create_task(USER, TaskCreate(title="x"))
        skewed = task.created_at - timedelta(days=1)
        monkeypatch.setattr(task_store_module, "utc_now", lambda: skewed)
        updated = store.update_task(USER, task.id, TaskUpdate(title="y"))
        assert updated.updated_at == updated.created_at

    def test_single_bound_update_fills_other(self, store):
        task = store.create_task(USER, TaskCreate(title="x", due_date="2024-01-01"))
        updated = store.update_task(USER, task.id, TaskUpdate(start_date="2024-02-01"))
        assert updated.start_date == updated.end_date == date(2024, 2, 1)

    def test_merged_range_is_checked(self, store):
        task = store.create_task(
            USER, TaskCreate(title="x", start_date="2024-01-01", end_date="2024-01-10")
        )
        with pytest.raises(ValidationError):
            store.update_task(
                USER, task.id, TaskUpdate(start_date="2024-01-20", end_date="2024-01-15")
            )
        assert store.get_task(USER, task.id).start_date == date(2024, 1, 1)

    def test_invalid_field_leaves_task_untouched(self, store):
        task = store.create_task(USER, TaskCreate(title="x"))
        with pytest.raises(ValidationError):
            store.update_task(USER, task.id, TaskUpdate(title="renamed", priority="urgent"))
        assert store.get_task(USER, task.id).title == "x"

    def test_empty_description_clears(self, store):
        task = store.create_task(USER, TaskCreate(title="x", description="old"))
        updated = store.update_task(USER, task.id, TaskUpdate(description=""))
        assert updated.description is None

    def test_unknown_id(self, store):
        assert store.update_task(USER, "missing", TaskUpdate(title="y")) is None


class TestDeleteAndIsolation:
    def test_delete(self, store):
        task = store.create_task(USER, TaskCreate(title="x"))
        assert store.delete_task(USER, task.id) is True
        assert store.delete_task(USER, task.id) is False
        assert store.get_task(USER, task.id) is None

    def test_users_do_not_share_tasks(self, store):
        task = store.create_task(USER, TaskCreate(title="mine"))
        assert store.list_tasks("other@example.com") == []
        assert store.get_task("other@example.com", task.id) is None

    def test_list_is_a_snapshot(self, store):
        store.create_task(USER, TaskCreate(title="x"))
        snapshot = store.list_tasks(USER)
        snapshot.clear()
        assert len(store.list_tasks(USER)) == 1


class TestSeedingAndPersistence:
    def test_seed_runs_once_per_user(self):
        store = TaskStore(seed=demo_tasks)
        titles = [t.title for t in store.list_tasks(USER)]
        assert titles == ["Inbox triage", "Weekly review", "Refactor dashboard cards"]
        store.delete_task(USER, store.list_tasks(USER)[0].id)
        assert len(store.list_tasks(USER)) == 2

    def test_jsonl_round_trip(self, tmp_path):
        store = TaskStore(tmp_path)
        created = store.create_task(
            USER, TaskCreate(title="Persist me", due_date="2024-01-05", tags=["x"])
        )

        path = tmp_path / f"{safe_user_key(USER)}_tasks.jsonl"
        assert path.exists()
        assert json.loads(path.read_text().splitlines()[0])["title"] == "Persist me"

        reloaded = TaskStore(tmp_path).get_task(USER, created.id)
        assert reloaded is not None
        assert reloaded.start_date == date(2024, 1, 5)
        assert reloaded.tags == ["x"]
        assert reloaded.created_at == created.created_at

    def test_bad_lines_are_skipped(self, tmp_path, caplog):
        path = tmp_path / f"{safe_user_key(USER)}_tasks.jsonl"
        good = {
            "id": "t1",
            "title": "Good",
            "status": "done",
            "priority": "high",
            "created_at": "2024-01-01T00:00:00Z",
        }
        path.write_text("not json\n" + json.dumps(good) + "\n" + json.dumps({"title": "no id"}) + "\n")

        tasks = TaskStore(tmp_path).list_tasks(USER)
        assert [t.id for t in tasks] == ["t1"]
        assert tasks[0].status == TaskStatus.DONE
        assert "Skipping bad line" in caplog.text

    def test_safe_user_key_is_one_to_one(self):
        assert safe_user_key("a.b@example.com") == "a.b@example.com"
        assert safe_user_key("a_b@example.com") != safe_user_key("a.b@example.com")
        assert safe_user_key("../etc/passwd") == "..%2Fetc%2Fpasswd"
        assert safe_user_key("100%") == "100%25"

    def test_similar_emails_keep_separate_files(self, tmp_path):
        TaskStore(tmp_path).create_task("a.b@x.com", TaskCreate(title="secret of a.b"))

        assert TaskStore(tmp_path).list_tasks("a_b@x.com") == []
        other = TaskStore(tmp_path)
        other.create_task("a_b@x.com", TaskCreate(title="mine"))
        assert [t.title for t in TaskStore(tmp_path).list_tasks("a.b@x.com")] == ["secret of a.b"]
        assert len(list(tmp_path.glob("*_tasks.jsonl"))) == 2

    @pytest.mark.parametrize(
        "bad_line",
        [
            "42",
            "[]",
            "null",
            '"just a string"',
            '{"id": "t9", "title": null}',
            '{"id": "t9", "title": 7}',
            '{"id": 9, "title": "numeric id"}',
            '{"id": "t9", "title": "x", "description": 5}',
            '{"id": "t9", "title": "x", "tags": "work"}',
        ],
    )
    def test_non_record_lines_are_skipped(self, tmp_path, bad_line):
        path = tmp_path / f"{safe_user_key(USER)}_tasks.jsonl"
        good = {"id": "t1", "title": "ok", "created_at": "2024-01-01T00:00:00Z"}
        path.write_text(bad_line + "\n" + json.dumps(good) + "\n")

        store = TaskStore(tmp_path)
        assert [t.id for t in store.list_tasks(USER)] == ["t1"]
        assert query_tasks(store.list_tasks(USER), {"q": "ok"})[0].id == "t1"


class TestReturnedCopies:
    def test_get_returns_a_detached_copy(self, store):
        task = store.create_task(USER, TaskCreate(title="x"))
        fetched = store.get_task(USER, task.id)
        assert fetched == task
        assert fetched is not store.get_task(USER, task.id)

        fetched.title = "changed outside the store"
        assert store.get_task(USER, task.id).title == "x"

    def test_update_result_is_not_the_stored_record(self, store):
        task = store.create_task(USER, TaskCreate(title="x"))
        updated = store.update_task(USER, task.id, TaskUpdate(status="done"))
        updated.status = TaskStatus.TODO
        assert store.get_task(USER, task.id).status == TaskStatus.DONE

    def test_list_items_are_copies(self, store):
        store.create_task(USER, TaskCreate(title="x"))
        store.list_tasks(USER)[0].title = "changed"
        assert store.list_tasks(USER)[0].title == "x"

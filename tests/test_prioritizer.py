from datetime import date

from daily_dashboard.analysis import top_priorities
from daily_dashboard.tasks import TaskPriority, TaskStatus


def test_top_priorities_orders_by_priority(task_factory):
    tasks = [
        task_factory("low", priority=TaskPriority.LOW),
        task_factory("high", priority=TaskPriority.HIGH),
        task_factory("medium", priority=TaskPriority.MEDIUM),
    ]
    assert [t.id for t in top_priorities(tasks)] == ["high", "medium", "low"]


def test_top_priorities_skips_done_and_keeps_tie_order(task_factory):
    tasks = [
        task_factory("h1", priority=TaskPriority.HIGH, end=date(2024, 2, 1)),
        task_factory("done", priority=TaskPriority.HIGH, status=TaskStatus.DONE),
        task_factory("h2", priority=TaskPriority.HIGH),
        task_factory("m1", priority=TaskPriority.MEDIUM),
        task_factory("h3", priority=TaskPriority.HIGH, status=TaskStatus.IN_PROGRESS),
    ]
    assert [t.id for t in top_priorities(tasks)] == ["h1", "h2", "h3"]


def test_top_priorities_empty():
    assert top_priorities([]) == []


def test_top_priorities_custom_limit(task_factory):
    tasks = [task_factory(f"t{i}") for i in range(5)]
    assert len(top_priorities(tasks, limit=4)) == 4

import pytest
from datetime import date, timedelta
from sqlalchemy.exc import SQLAlchemyError, OperationalError

from taskboard.models.task import Task
from taskboard.models.tag import Tag
from taskboard.models.subtask import Subtask
from taskboard.schemas.task import TaskCreate, TaskUpdate
from taskboard.services import task_service
from taskboard.services.stats_service import get_stats
from taskboard.services.task_service import (
    TaskNotFoundError,
    SubtaskNotFoundError,
    TaskValidationError,
)


def _boom(*args, **kwargs):
    raise OperationalError("INSERT", {}, Exception("connection lost"))


# ============ TESTS task_service.py ============

def test_create_task_returns_enriched_task(db):
    task = task_service.create_task(db, TaskCreate(title="Service", tags=["a"], subtasks=["x", "y"]))

    assert task.id is not None
    assert [t.tag_name for t in task.tags] == ["a"]
    assert [s.text for s in task.subtasks] == ["x", "y"]
    assert task.priority == "medium"


def test_create_task_blank_title_does_not_touch_store(db):
    with pytest.raises(TaskValidationError):
        task_service.create_task(db, TaskCreate(title="  ", tags=["a"]))
    assert db.query(Task).count() == 0


def test_create_task_rolls_back_on_child_failure(db, monkeypatch):
    """TEST: une erreur sur les enfants annule aussi la tâche"""
    monkeypatch.setattr(task_service, "_insert_children", _boom)

    with pytest.raises(SQLAlchemyError):
        task_service.create_task(db, TaskCreate(title="Partielle", tags=["a"]))

    assert db.query(Task).count() == 0
    assert db.query(Tag).count() == 0


def test_update_task_rolls_back_on_failure(db, monkeypatch):
    task = task_service.create_task(db, TaskCreate(title="Avant", tags=["a", "b"], subtasks=["x"]))
    task_id = task.id

    monkeypatch.setattr(task_service, "_insert_children", _boom)
    with pytest.raises(SQLAlchemyError):
        task_service.update_task(db, task_id, TaskUpdate(title="Après", tags=["c"]))

    task = task_service.get_task(db, task_id)
    assert task.title == "Avant"
    assert sorted(t.tag_name for t in task.tags) == ["a", "b"]
    assert [s.text for s in task.subtasks] == ["x"]


def test_update_task_not_found(db):
    with pytest.raises(TaskNotFoundError):
        task_service.update_task(db, 9999, TaskUpdate(title="Rien"))
    # body invalide, mais la tâche manquante passe en premier
    with pytest.raises(TaskNotFoundError):
        task_service.update_task(db, 9999, TaskUpdate(title=" ", subtasks=[""]))


def test_update_refreshes_updated_at(db):
    task = task_service.create_task(db, TaskCreate(title="Horodatage"))
    before = task.updated_at

    task = task_service.update_task(db, task.id, TaskUpdate(title="Horodatage 2"))
    assert task.updated_at >= before
    assert task.created_at <= task.updated_at


def test_toggle_not_found(db):
    with pytest.raises(TaskNotFoundError):
        task_service.toggle_task_completion(db, 9999)
    with pytest.raises(SubtaskNotFoundError):
        task_service.toggle_subtask_completion(db, 9999)


def test_delete_task_removes_children(db):
    task = task_service.create_task(db, TaskCreate(title="À supprimer", tags=["a"], subtasks=["x"]))
    task_id = task.id

    task_service.delete_task(db, task_id)

    assert db.query(Task).filter(Task.id == task_id).count() == 0
    assert db.query(Tag).filter(Tag.task_id == task_id).count() == 0
    assert db.query(Subtask).filter(Subtask.task_id == task_id).count() == 0

    with pytest.raises(TaskNotFoundError):
        task_service.delete_task(db, task_id)


def test_store_rejects_unknown_priority(db):
    db.add(Task(title="Mauvaise priorité", priority="urgent"))
    with pytest.raises(SQLAlchemyError):
        db.commit()
    db.rollback()
    assert db.query(Task).count() == 0


def test_store_rejects_orphan_tag(db):
    db.add(Tag(task_id=9999, tag_name="orphelin"))
    with pytest.raises(SQLAlchemyError):
        db.commit()
    db.rollback()


@pytest.mark.xfail(reason="toggle is read-then-write, interleaved toggles lose an update")
def test_interleaved_toggles_are_not_atomic(client, db):
    task = task_service.create_task(db, TaskCreate(title="Course"))
    task_id = task.id

    other = client.app.state.SessionLocal()
    try:
        # both requests read completed=False before either writes
        first = db.query(Task).filter(Task.id == task_id).first()
        second = other.query(Task).filter(Task.id == task_id).first()
        first.completed = not first.completed
        second.completed = not second.completed
        db.commit()
        other.commit()
    finally:
        other.close()

    db.expire_all()
    # two toggles should bring the flag back to False
    assert task_service.get_task(db, task_id).completed is False


# ============ TESTS stats_service.py ============

def test_stats_overdue_excludes_completed(db):
    today = date(2026, 3, 10)
    past = today - timedelta(days=3)

    task_service.create_task(db, TaskCreate(title="En retard", due_date=past))
    task_service.create_task(db, TaskCreate(title="Échéance aujourd'hui", due_date=today))
    done = task_service.create_task(db, TaskCreate(title="Finie", due_date=past))
    task_service.toggle_task_completion(db, done.id)

    stats = get_stats(db, today=today)
    assert stats == {"total": 3, "completed": 1, "active": 2, "overdue": 1}

"""Task service

Reads and writes against tasks, tags and subtasks. Writes that touch children
(create, update) run in a single transaction and roll back entirely on error.
"""

import logging
from sqlalchemy.orm import Session
from typing import List, Optional, Tuple
from taskboard.models.task import Task
from taskboard.models.tag import Tag
from taskboard.models.subtask import Subtask
from taskboard.schemas.task import TaskCreate, TaskUpdate, SubtaskIn

logger = logging.getLogger(__name__)


class TaskValidationError(ValueError):
    pass


class TaskNotFoundError(LookupError):
    pass


class SubtaskNotFoundError(LookupError):
    pass


def _require_title(title: Optional[str]) -> str:
    if title is None or title.strip() == "":
        raise TaskValidationError("Title is required")
    return title


def _subtask_rows(entries) -> List[Tuple[str, bool]]:
    # chaque entrée: texte brut ou {text, completed}
    rows = []
    for entry in entries or []:
        if isinstance(entry, SubtaskIn):
            text, completed = entry.text, entry.completed
        else:
            text, completed = entry, False
        if text is None or text.strip() == "":
            raise TaskValidationError("Subtask text is required")
        rows.append((text, completed))
    return rows


def _insert_children(db: Session, task_id: int, tags, subtask_rows) -> None:
    if tags:
        db.add_all([Tag(task_id=task_id, tag_name=name) for name in tags])
    if subtask_rows:
        db.add_all([
            Subtask(task_id=task_id, text=text, completed=completed)
            for text, completed in subtask_rows
        ])


def list_tasks(db: Session) -> List[Task]:
    # tags/subtasks are lazy-loaded per task (one query each)
    return db.query(Task).order_by(Task.created_at.desc(), Task.id.desc()).all()


def get_task(db: Session, task_id: int) -> Task:
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise TaskNotFoundError(f"Task {task_id} not found")
    return task


def create_task(db: Session, data: TaskCreate) -> Task:
    title = _require_title(data.title)
    subtask_rows = _subtask_rows(data.subtasks)

    try:
        task = Task(
            title=title,
            description=data.description or None,
            priority=data.priority or "medium",
            due_date=data.due_date,
        )
        db.add(task)
        db.flush()  # needed for task.id

        _insert_children(db, task.id, data.tags, subtask_rows)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Created task {task.id}")
    return get_task(db, task.id)


def update_task(db: Session, task_id: int, data: TaskUpdate) -> Task:
    """Rewrite a task and replace its tags and subtasks.

    Scalar fields are overwritten, not merged: anything omitted from
    ``data`` goes back to its default. The old children are deleted and
    the new ones inserted in the same transaction.
    """
    try:
        task = db.query(Task).filter(Task.id == task_id).first()
        if not task:
            raise TaskNotFoundError(f"Task {task_id} not found")

        title = _require_title(data.title)
        subtask_rows = _subtask_rows(data.subtasks)

        task.title = title
        task.description = data.description or None
        task.priority = data.priority or "medium"
        task.due_date = data.due_date
        task.completed = bool(data.completed)

        db.query(Tag).filter(Tag.task_id == task_id).delete(synchronize_session=False)
        db.query(Subtask).filter(Subtask.task_id == task_id).delete(synchronize_session=False)
        _insert_children(db, task_id, data.tags, subtask_rows)

        db.commit()
    except Exception:
        db.rollback()
        raise

    return get_task(db, task_id)


def toggle_task_completion(db: Session, task_id: int) -> bool:
    # read-then-write: two concurrent toggles on the same row can cancel out
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise TaskNotFoundError(f"Task {task_id} not found")

    new_status = not task.completed
    task.completed = new_status
    db.commit()
    return new_status


def toggle_subtask_completion(db: Session, subtask_id: int) -> bool:
    subtask = db.query(Subtask).filter(Subtask.id == subtask_id).first()
    if not subtask:
        raise SubtaskNotFoundError(f"Subtask {subtask_id} not found")

    new_status = not subtask.completed
    subtask.completed = new_status
    db.commit()
    return new_status


def delete_task(db: Session, task_id: int) -> None:
    deleted = db.query(Task).filter(Task.id == task_id).delete(synchronize_session=False)
    db.commit()

    if deleted == 0:
        raise TaskNotFoundError(f"Task {task_id} not found")
    logger.info(f"Deleted task {task_id}")

"""Stats service"""

from sqlalchemy import func
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
from taskboard.models.task import Task


def _count(db: Session, *criteria) -> int:
    return db.query(func.count(Task.id)).filter(*criteria).scalar() or 0


def get_stats(db: Session, today: Optional[date] = None) -> dict:
    """Four independent counts over tasks.

    No shared snapshot: under concurrent writes ``total`` may differ from
    ``completed + active``.
    """
    today = today or date.today()

    return {
        "total": _count(db),
        "completed": _count(db, Task.completed == True),
        "active": _count(db, Task.completed == False),
        "overdue": _count(
            db,
            Task.completed == False,
            Task.due_date.is_not(None),
            Task.due_date < today,
        ),
    }

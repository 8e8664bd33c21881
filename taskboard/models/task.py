"""Task model"""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Boolean, Enum
from sqlalchemy.orm import relationship
from datetime import datetime
from taskboard.core.database import Base

PRIORITIES = ("low", "medium", "high")


class Task(Base):
    __tablename__ = "tasks"
    # SQLite: never hand out the id of a deleted row again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(
        Enum(*PRIORITIES, name="task_priority", create_constraint=True),
        nullable=False,
        default="medium",
    )
    due_date = Column(Date, nullable=True, index=True)
    completed = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # read-only views; rows are written through Tag/Subtask, deleted by ON DELETE CASCADE
    tags = relationship("Tag", order_by="Tag.id", viewonly=True)
    subtasks = relationship("Subtask", order_by="Subtask.id", viewonly=True)

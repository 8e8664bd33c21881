"""Pydantic schemas for task request/response validation."""

from pydantic import BaseModel, ConfigDict, field_validator
from datetime import date, datetime
from typing import Optional, List, Literal, Union

Priority = Literal["low", "medium", "high"]


class SubtaskIn(BaseModel):
    text: str
    completed: bool = False


class TaskCreate(BaseModel):
    # title reste optionnel ici: le service renvoie un 400 s'il manque ou est vide
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[Priority] = None
    due_date: Optional[date] = None
    tags: Optional[List[str]] = None
    subtasks: Optional[List[Union[str, SubtaskIn]]] = None


class TaskUpdate(TaskCreate):
    """Full replacement of a task: omitted fields go back to their defaults."""

    completed: Optional[bool] = None


class SubtaskResponse(BaseModel):
    id: int
    text: str
    completed: bool

    model_config = ConfigDict(from_attributes=True)


class TaskResponse(BaseModel):
    id: int
    title: str
    description: Optional[str]
    priority: Priority
    due_date: Optional[date]
    completed: bool
    created_at: datetime
    updated_at: datetime
    tags: List[str] = []
    subtasks: List[SubtaskResponse] = []

    model_config = ConfigDict(from_attributes=True)

    @field_validator("tags", mode="before")
    @classmethod
    def tag_names(cls, value):
        return [getattr(tag, "tag_name", tag) for tag in value or []]


class ToggleResponse(BaseModel):
    id: int
    completed: bool


class DeleteResponse(BaseModel):
    message: str
    id: int

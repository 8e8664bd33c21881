import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List

from taskboard.core.database import get_db
from taskboard.schemas.task import TaskCreate, TaskUpdate, TaskResponse, ToggleResponse, DeleteResponse
from taskboard.services import task_service
from taskboard.services.task_service import TaskNotFoundError, TaskValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _store_error(message: str) -> HTTPException:
    logger.exception(message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@router.get("", response_model=List[TaskResponse])
def list_tasks(db: Session = Depends(get_db)):
    try:
        tasks = task_service.list_tasks(db)
        # sérialiser ici pour que le lazy-load des enfants reste dans le try
        return [TaskResponse.model_validate(task) for task in tasks]
    except SQLAlchemyError:
        raise _store_error("Failed to fetch tasks")


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, db: Session = Depends(get_db)):
    try:
        return TaskResponse.model_validate(task_service.get_task(db, task_id))
    except TaskNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    except SQLAlchemyError:
        raise _store_error("Failed to fetch task")


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(task_data: TaskCreate, db: Session = Depends(get_db)):
    try:
        return TaskResponse.model_validate(task_service.create_task(db, task_data))
    except TaskValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SQLAlchemyError:
        raise _store_error("Failed to create task")


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(task_id: int, task_data: TaskUpdate, db: Session = Depends(get_db)):
    try:
        return TaskResponse.model_validate(task_service.update_task(db, task_id, task_data))
    except TaskValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except TaskNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    except SQLAlchemyError:
        raise _store_error("Failed to update task")


@router.patch("/{task_id}/toggle", response_model=ToggleResponse)
def toggle_task(task_id: int, db: Session = Depends(get_db)):
    try:
        completed = task_service.toggle_task_completion(db, task_id)
    except TaskNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    except SQLAlchemyError:
        raise _store_error("Failed to toggle task")
    return ToggleResponse(id=task_id, completed=completed)


@router.delete("/{task_id}", response_model=DeleteResponse)
def delete_task(task_id: int, db: Session = Depends(get_db)):
    try:
        task_service.delete_task(db, task_id)
    except TaskNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    except SQLAlchemyError:
        raise _store_error("Failed to delete task")
    return DeleteResponse(message="Task deleted successfully", id=task_id)

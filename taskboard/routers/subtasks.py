import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.core.database import get_db
from taskboard.schemas.task import ToggleResponse
from taskboard.services.task_service import toggle_subtask_completion, SubtaskNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/subtasks", tags=["subtasks"])


@router.patch("/{subtask_id}/toggle", response_model=ToggleResponse)
def toggle_subtask(subtask_id: int, db: Session = Depends(get_db)):
    try:
        completed = toggle_subtask_completion(db, subtask_id)
    except SubtaskNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subtask not found")
    except SQLAlchemyError:
        logger.exception("Failed to toggle subtask")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to toggle subtask")
    return ToggleResponse(id=subtask_id, completed=completed)

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from life_tracker.crud import crud_checklist, crud_goal
from life_tracker.models.dashboard import NotificationResponse
from life_tracker.services import metrics
from life_tracker.services.notifications import build_notifications
from life_tracker.db.core import get_db

router = APIRouter(
    prefix="/api/notifications",
    tags=["notifications"],
)


@router.get("", response_model=List[NotificationResponse])
def read_notifications(db: Session = Depends(get_db)):
    """
    Reminders derived from goals and checklists, most urgent first.
    """
    return build_notifications(
        goals=crud_goal.read_db_goals(db),
        checklists=crud_checklist.read_db_checklists(db),
        now=metrics.utc_now(),
    )

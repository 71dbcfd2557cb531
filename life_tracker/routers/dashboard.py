from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from life_tracker.crud import crud_note, crud_habit, crud_transaction, crud_goal
from life_tracker.models.dashboard import DashboardStats
from life_tracker.services import metrics
from life_tracker.db.core import get_db

router = APIRouter(
    prefix="/api/dashboard",
    tags=["dashboard"],
)


@router.get("/stats", response_model=DashboardStats)
def read_dashboard_stats(db: Session = Depends(get_db)):
    """
    Summary counters for the home screen: note count, habits done today,
    this month's income minus expenses and completed goals.
    """
    today = metrics.utc_today()
    return metrics.compute_dashboard_stats(
        notes=crud_note.read_db_notes(db),
        habits=crud_habit.read_db_habits(db),
        today_logs=crud_habit.read_db_habit_logs_for_date(db, log_date=today),
        transactions=crud_transaction.read_db_transactions(db),
        goals=crud_goal.read_db_goals(db),
        today=today,
    )

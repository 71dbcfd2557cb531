from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from datetime import date

from life_tracker.crud import crud_habit
from life_tracker.models import habit as habit_models
from life_tracker.db.core import get_db, NotFoundError

router = APIRouter(
    prefix="/api/habit-logs",
    tags=["habit-logs"],
)


@router.post("", response_model=habit_models.HabitLogResponse, status_code=status.HTTP_201_CREATED)
def upsert_habit_log(log: habit_models.HabitLogUpsert, db: Session = Depends(get_db)):
    """
    Mark a habit done (or not done) for a day and refresh its streaks.
    Posting the same habit and day again overwrites the earlier log.
    """
    try:
        return crud_habit.upsert_db_habit_log(db=db, log_data=log)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/date/{log_date}", response_model=List[habit_models.HabitLogResponse])
def read_habit_logs_for_date(log_date: date, db: Session = Depends(get_db)):
    return crud_habit.read_db_habit_logs_for_date(db, log_date=log_date)

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from life_tracker.crud import crud_habit
from life_tracker.models import habit as habit_models
from life_tracker.models.common import MessageResponse
from life_tracker.db.core import get_db, NotFoundError

router = APIRouter(
    prefix="/api/habits",
    tags=["habits"],
)


@router.get("", response_model=List[habit_models.HabitResponse])
def read_habits(db: Session = Depends(get_db)):
    """
    Retrieve all habits with their current and longest streaks.
    """
    return crud_habit.read_db_habits(db)


@router.get("/{habit_id}", response_model=habit_models.HabitResponse)
def read_habit(habit_id: int, db: Session = Depends(get_db)):
    db_habit = crud_habit.read_db_habit(db, habit_id=habit_id)
    if db_habit is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Habit not found")
    return db_habit


@router.post("", response_model=habit_models.HabitResponse, status_code=status.HTTP_201_CREATED)
def create_habit(habit: habit_models.HabitCreate, db: Session = Depends(get_db)):
    try:
        return crud_habit.create_db_habit(db=db, habit_data=habit)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.patch("/{habit_id}", response_model=habit_models.HabitResponse)
def update_habit(habit_id: int, habit: habit_models.HabitUpdate, db: Session = Depends(get_db)):
    try:
        return crud_habit.update_db_habit(db=db, habit_id=habit_id, habit_updates=habit)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Habit not found")
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{habit_id}", response_model=MessageResponse)
def delete_habit(habit_id: int, db: Session = Depends(get_db)):
    """
    Delete a habit. All of its logs are deleted with it.
    """
    if not crud_habit.delete_db_habit(db=db, habit_id=habit_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Habit not found")
    return {"message": "Habit deleted successfully"}


@router.get("/{habit_id}/logs", response_model=List[habit_models.HabitLogResponse])
def read_habit_logs(habit_id: int, db: Session = Depends(get_db)):
    """
    Retrieve every log recorded for a habit, newest day first.
    """
    return crud_habit.read_db_habit_logs(db, habit_id=habit_id)

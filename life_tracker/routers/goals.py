from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from life_tracker.crud import crud_goal
from life_tracker.models import goal as goal_models
from life_tracker.models.common import MessageResponse
from life_tracker.db.core import get_db, NotFoundError

router = APIRouter(
    prefix="/api/goals",
    tags=["goals"],
)


@router.get("", response_model=List[goal_models.GoalResponse])
def read_goals(db: Session = Depends(get_db)):
    return crud_goal.read_db_goals(db)


@router.get("/{goal_id}", response_model=goal_models.GoalResponse)
def read_goal(goal_id: int, db: Session = Depends(get_db)):
    db_goal = crud_goal.read_db_goal(db, goal_id=goal_id)
    if db_goal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not found")
    return db_goal


@router.post("", response_model=goal_models.GoalResponse, status_code=status.HTTP_201_CREATED)
def create_goal(goal: goal_models.GoalCreate, db: Session = Depends(get_db)):
    try:
        return crud_goal.create_db_goal(db=db, goal_data=goal)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.patch("/{goal_id}", response_model=goal_models.GoalResponse)
def update_goal(goal_id: int, goal: goal_models.GoalUpdate, db: Session = Depends(get_db)):
    """
    Update progress, status or details of a goal. Omitted fields are left untouched.
    """
    try:
        return crud_goal.update_db_goal(db=db, goal_id=goal_id, goal_updates=goal)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not found")
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{goal_id}", response_model=MessageResponse)
def delete_goal(goal_id: int, db: Session = Depends(get_db)):
    if not crud_goal.delete_db_goal(db=db, goal_id=goal_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not found")
    return {"message": "Goal deleted successfully"}

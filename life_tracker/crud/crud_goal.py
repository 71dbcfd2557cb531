from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import desc
from typing import List, Optional
from datetime import datetime

from life_tracker.db.core import GoalDB, NotFoundError
from life_tracker.models.goal import GoalCreate, GoalUpdate
from life_tracker.logging_config import get_logger

logger = get_logger(__name__)


def create_db_goal(db: Session, goal_data: GoalCreate) -> GoalDB:
    """Create a new goal; start date defaults to now"""
    now = datetime.utcnow()
    db_goal = GoalDB(
        title=goal_data.title,
        description=goal_data.description,
        target_value=goal_data.target_value,
        current_value=goal_data.current_value,
        unit=goal_data.unit,
        status=goal_data.status,
        start_date=goal_data.start_date or now,
        target_date=goal_data.target_date,
        motivation_media=list(goal_data.motivation_media),
        created_at=now,
    )

    try:
        db.add(db_goal)
        db.commit()
        db.refresh(db_goal)
    except IntegrityError:
        db.rollback()
        raise ValueError("Goal creation failed due to database constraint")

    logger.info(f"Created goal {db_goal.id} ({db_goal.status.value})")
    return db_goal


def read_db_goal(db: Session, goal_id: int) -> Optional[GoalDB]:
    return db.query(GoalDB).filter(GoalDB.id == goal_id).first()


def read_db_goals(db: Session) -> List[GoalDB]:
    """All goals, newest first"""
    return db.query(GoalDB).order_by(desc(GoalDB.created_at), desc(GoalDB.id)).all()


def update_db_goal(db: Session, goal_id: int, goal_updates: GoalUpdate) -> GoalDB:
    db_goal = read_db_goal(db, goal_id)
    if not db_goal:
        raise NotFoundError(f"Goal with id {goal_id} not found")

    for field, value in goal_updates.changes().items():
        if field == "motivation_media":
            # Assign a fresh list so the JSON column registers the change
            value = list(value)
        setattr(db_goal, field, value)

    try:
        db.commit()
        db.refresh(db_goal)
        return db_goal
    except IntegrityError:
        db.rollback()
        raise ValueError("Goal update failed due to database constraint")


def delete_db_goal(db: Session, goal_id: int) -> bool:
    db_goal = read_db_goal(db, goal_id)
    if not db_goal:
        return False

    db.delete(db_goal)
    db.commit()
    logger.info(f"Deleted goal {goal_id}")
    return True

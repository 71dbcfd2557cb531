from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import desc
from typing import List, Optional
from datetime import datetime, date

from life_tracker.db.core import HabitDB, HabitLogDB, NotFoundError
from life_tracker.models.habit import HabitCreate, HabitUpdate, HabitLogUpsert
from life_tracker.services import metrics
from life_tracker.logging_config import get_logger

logger = get_logger(__name__)


# ===== HABITS =====

def create_db_habit(db: Session, habit_data: HabitCreate) -> HabitDB:
    """Create a new habit with empty streaks"""
    db_habit = HabitDB(
        name=habit_data.name,
        description=habit_data.description,
        current_streak=0,
        longest_streak=0,
        created_at=datetime.utcnow(),
    )

    try:
        db.add(db_habit)
        db.commit()
        db.refresh(db_habit)
    except IntegrityError:
        db.rollback()
        raise ValueError("Habit creation failed due to database constraint")

    logger.info(f"Created habit {db_habit.id} ({db_habit.name})")
    return db_habit


def read_db_habit(db: Session, habit_id: int) -> Optional[HabitDB]:
    return db.query(HabitDB).filter(HabitDB.id == habit_id).first()


def read_db_habits(db: Session) -> List[HabitDB]:
    """All habits, newest first"""
    return db.query(HabitDB).order_by(desc(HabitDB.created_at), desc(HabitDB.id)).all()


def update_db_habit(db: Session, habit_id: int, habit_updates: HabitUpdate) -> HabitDB:
    db_habit = read_db_habit(db, habit_id)
    if not db_habit:
        raise NotFoundError(f"Habit with id {habit_id} not found")

    for field, value in habit_updates.changes().items():
        setattr(db_habit, field, value)

    try:
        db.commit()
        db.refresh(db_habit)
        return db_habit
    except IntegrityError:
        db.rollback()
        raise ValueError("Habit update failed due to database constraint")


def delete_db_habit(db: Session, habit_id: int) -> bool:
    """Delete a habit together with all of its logs"""
    db_habit = read_db_habit(db, habit_id)
    if not db_habit:
        return False

    log_count = len(db_habit.logs)
    db.delete(db_habit)
    db.commit()
    logger.info(f"Deleted habit {habit_id} and {log_count} log(s)")
    return True


# ===== HABIT LOGS =====

def read_db_habit_logs(db: Session, habit_id: int) -> List[HabitLogDB]:
    """Logs for one habit, newest day first"""
    return db.query(HabitLogDB).filter(
        HabitLogDB.habit_id == habit_id
    ).order_by(desc(HabitLogDB.date)).all()


def read_db_habit_logs_for_date(db: Session, log_date: date) -> List[HabitLogDB]:
    """Logs across all habits for one calendar day"""
    return db.query(HabitLogDB).filter(HabitLogDB.date == log_date).order_by(HabitLogDB.habit_id).all()


def recalculate_habit_streaks(db: Session, db_habit: HabitDB, today: Optional[date] = None) -> HabitDB:
    """Recompute streak fields from the habit's logs. Does not commit."""
    today = today or metrics.utc_today()
    result = metrics.compute_streaks(read_db_habit_logs(db, db_habit.id), today)

    db_habit.current_streak = result.current_streak
    db_habit.longest_streak = result.longest_streak
    logger.debug(
        f"Habit {db_habit.id} streaks: current={result.current_streak} longest={result.longest_streak}"
    )
    return db_habit


def upsert_db_habit_log(db: Session, log_data: HabitLogUpsert) -> HabitLogDB:
    """
    Record a habit's completion for a day.

    An existing log for the same (habit, day) is overwritten rather than
    duplicated. The habit's streaks are recomputed and committed together
    with the log, so readers never see one without the other.
    """
    db_habit = read_db_habit(db, log_data.habit_id)
    if not db_habit:
        raise NotFoundError(f"Habit with id {log_data.habit_id} not found")

    db_log = db.query(HabitLogDB).filter(
        HabitLogDB.habit_id == log_data.habit_id,
        HabitLogDB.date == log_data.date,
    ).first()

    if db_log:
        db_log.completed = log_data.completed
    else:
        db_log = HabitLogDB(
            habit_id=log_data.habit_id,
            date=log_data.date,
            completed=log_data.completed,
        )
        db.add(db_log)

    try:
        db.flush()
        recalculate_habit_streaks(db, db_habit)
        db.commit()
        db.refresh(db_log)
        return db_log
    except IntegrityError:
        db.rollback()
        raise ValueError("Habit log could not be saved due to database constraint")

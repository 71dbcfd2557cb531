from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import IntegrityError
from sqlalchemy import desc
from typing import List, Optional
from datetime import datetime

from life_tracker.db.core import ChecklistDB, ChecklistItemDB, NotFoundError
from life_tracker.models.checklist import ChecklistCreate, ChecklistUpdate, ChecklistItemCreate, ChecklistItemUpdate
from life_tracker.logging_config import get_logger

logger = get_logger(__name__)


# ===== CHECKLISTS =====

def create_db_checklist(db: Session, checklist_data: ChecklistCreate) -> ChecklistDB:
    db_checklist = ChecklistDB(title=checklist_data.title, created_at=datetime.utcnow())

    try:
        db.add(db_checklist)
        db.commit()
        db.refresh(db_checklist)
    except IntegrityError:
        db.rollback()
        raise ValueError("Checklist creation failed due to database constraint")

    logger.info(f"Created checklist {db_checklist.id}")
    return db_checklist


def read_db_checklist(db: Session, checklist_id: int) -> Optional[ChecklistDB]:
    return db.query(ChecklistDB).options(
        selectinload(ChecklistDB.items)
    ).filter(ChecklistDB.id == checklist_id).first()


def read_db_checklists(db: Session) -> List[ChecklistDB]:
    """All checklists with their items, newest checklist first"""
    return db.query(ChecklistDB).options(
        selectinload(ChecklistDB.items)
    ).order_by(desc(ChecklistDB.created_at), desc(ChecklistDB.id)).all()


def update_db_checklist(db: Session, checklist_id: int, checklist_updates: ChecklistUpdate) -> ChecklistDB:
    db_checklist = read_db_checklist(db, checklist_id)
    if not db_checklist:
        raise NotFoundError(f"Checklist with id {checklist_id} not found")

    for field, value in checklist_updates.changes().items():
        setattr(db_checklist, field, value)

    try:
        db.commit()
        db.refresh(db_checklist)
        return db_checklist
    except IntegrityError:
        db.rollback()
        raise ValueError("Checklist update failed due to database constraint")


def delete_db_checklist(db: Session, checklist_id: int) -> bool:
    """Delete a checklist together with all of its items"""
    db_checklist = read_db_checklist(db, checklist_id)
    if not db_checklist:
        return False

    item_count = len(db_checklist.items)
    db.delete(db_checklist)
    db.commit()
    logger.info(f"Deleted checklist {checklist_id} and {item_count} item(s)")
    return True


# ===== CHECKLIST ITEMS =====

def _require_checklist(db: Session, checklist_id: int):
    exists = db.query(ChecklistDB.id).filter(ChecklistDB.id == checklist_id).first()
    if not exists:
        raise NotFoundError(f"Checklist with id {checklist_id} not found")


def read_db_checklist_items(db: Session, checklist_id: int) -> List[ChecklistItemDB]:
    """Items of one checklist in display order"""
    return db.query(ChecklistItemDB).filter(
        ChecklistItemDB.checklist_id == checklist_id
    ).order_by(ChecklistItemDB.order, ChecklistItemDB.id).all()


def read_db_checklist_item(db: Session, item_id: int) -> Optional[ChecklistItemDB]:
    return db.query(ChecklistItemDB).filter(ChecklistItemDB.id == item_id).first()


def create_db_checklist_item(db: Session, item_data: ChecklistItemCreate) -> ChecklistItemDB:
    _require_checklist(db, item_data.checklist_id)

    db_item = ChecklistItemDB(
        checklist_id=item_data.checklist_id,
        title=item_data.title,
        completed=item_data.completed,
        order=item_data.order,
    )

    try:
        db.add(db_item)
        db.commit()
        db.refresh(db_item)
        return db_item
    except IntegrityError:
        db.rollback()
        raise ValueError("Checklist item creation failed due to database constraint")


def update_db_checklist_item(db: Session, item_id: int, item_updates: ChecklistItemUpdate) -> ChecklistItemDB:
    db_item = read_db_checklist_item(db, item_id)
    if not db_item:
        raise NotFoundError(f"Checklist item with id {item_id} not found")

    update_data = item_updates.changes()
    if "checklist_id" in update_data and update_data["checklist_id"] != db_item.checklist_id:
        _require_checklist(db, update_data["checklist_id"])

    for field, value in update_data.items():
        setattr(db_item, field, value)

    try:
        db.commit()
        db.refresh(db_item)
        return db_item
    except IntegrityError:
        db.rollback()
        raise ValueError("Checklist item update failed due to database constraint")


def delete_db_checklist_item(db: Session, item_id: int) -> bool:
    db_item = read_db_checklist_item(db, item_id)
    if not db_item:
        return False

    db.delete(db_item)
    db.commit()
    return True

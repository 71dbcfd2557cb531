from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import or_, desc
from typing import List, Optional
from datetime import datetime

from life_tracker.db.core import NoteDB, NotFoundError
from life_tracker.models.note import NoteCreate, NoteUpdate
from life_tracker.logging_config import get_logger

logger = get_logger(__name__)


def create_db_note(db: Session, note_data: NoteCreate) -> NoteDB:
    """Create a new note"""
    now = datetime.utcnow()
    db_note = NoteDB(
        title=note_data.title,
        content=note_data.content,
        created_at=now,
        updated_at=now,
    )

    try:
        db.add(db_note)
        db.commit()
        db.refresh(db_note)
    except IntegrityError:
        db.rollback()
        raise ValueError("Note creation failed due to database constraint")

    logger.info(f"Created note {db_note.id}")
    return db_note


def read_db_note(db: Session, note_id: int) -> Optional[NoteDB]:
    return db.query(NoteDB).filter(NoteDB.id == note_id).first()


def read_db_notes(db: Session) -> List[NoteDB]:
    """All notes, most recently edited first"""
    return db.query(NoteDB).order_by(desc(NoteDB.updated_at), desc(NoteDB.id)).all()


def search_db_notes(db: Session, query: str) -> List[NoteDB]:
    """Case-insensitive substring match against title or content"""
    # Match % and _ literally
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"
    return db.query(NoteDB).filter(
        or_(
            NoteDB.title.ilike(pattern, escape="\\"),
            NoteDB.content.ilike(pattern, escape="\\"),
        )
    ).order_by(desc(NoteDB.updated_at), desc(NoteDB.id)).all()


def update_db_note(db: Session, note_id: int, note_updates: NoteUpdate) -> NoteDB:
    """Apply the supplied fields and bump updated_at"""
    db_note = read_db_note(db, note_id)
    if not db_note:
        raise NotFoundError(f"Note with id {note_id} not found")

    for field, value in note_updates.changes().items():
        setattr(db_note, field, value)
    # Set explicitly so an empty PATCH still counts as an edit
    db_note.updated_at = datetime.utcnow()

    try:
        db.commit()
        db.refresh(db_note)
        return db_note
    except IntegrityError:
        db.rollback()
        raise ValueError("Note update failed due to database constraint")


def delete_db_note(db: Session, note_id: int) -> bool:
    db_note = read_db_note(db, note_id)
    if not db_note:
        return False

    db.delete(db_note)
    db.commit()
    logger.info(f"Deleted note {note_id}")
    return True

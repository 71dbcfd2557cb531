from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from life_tracker.crud import crud_note
from life_tracker.models import note as note_models
from life_tracker.models.common import MessageResponse
from life_tracker.db.core import get_db, NotFoundError

router = APIRouter(
    prefix="/api/notes",
    tags=["notes"],
)


@router.get("", response_model=List[note_models.NoteResponse])
def read_notes(db: Session = Depends(get_db)):
    """
    Retrieve all notes, most recently edited first.
    """
    return crud_note.read_db_notes(db)


@router.get("/search", response_model=List[note_models.NoteResponse])
def search_notes(q: Optional[str] = Query(None), db: Session = Depends(get_db)):
    """
    Search notes by title or content (case-insensitive).
    """
    if not q:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Search query is required")
    return crud_note.search_db_notes(db, query=q)


@router.get("/{note_id}", response_model=note_models.NoteResponse)
def read_note(note_id: int, db: Session = Depends(get_db)):
    db_note = crud_note.read_db_note(db, note_id=note_id)
    if db_note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    return db_note


@router.post("", response_model=note_models.NoteResponse, status_code=status.HTTP_201_CREATED)
def create_note(note: note_models.NoteCreate, db: Session = Depends(get_db)):
    try:
        return crud_note.create_db_note(db=db, note_data=note)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.patch("/{note_id}", response_model=note_models.NoteResponse)
def update_note(note_id: int, note: note_models.NoteUpdate, db: Session = Depends(get_db)):
    """
    Update a note's title and/or content. Omitted fields are left untouched.
    """
    try:
        return crud_note.update_db_note(db=db, note_id=note_id, note_updates=note)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{note_id}", response_model=MessageResponse)
def delete_note(note_id: int, db: Session = Depends(get_db)):
    if not crud_note.delete_db_note(db=db, note_id=note_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    return {"message": "Note deleted successfully"}

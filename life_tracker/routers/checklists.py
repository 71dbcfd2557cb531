from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from life_tracker.crud import crud_checklist
from life_tracker.models import checklist as checklist_models
from life_tracker.models.common import MessageResponse
from life_tracker.db.core import get_db, NotFoundError

router = APIRouter(
    prefix="/api/checklists",
    tags=["checklists"],
)


@router.get("", response_model=List[checklist_models.ChecklistResponse])
def read_checklists(db: Session = Depends(get_db)):
    """
    Retrieve all checklists, each with its items in display order.
    """
    return crud_checklist.read_db_checklists(db)


@router.get("/{checklist_id}", response_model=checklist_models.ChecklistResponse)
def read_checklist(checklist_id: int, db: Session = Depends(get_db)):
    db_checklist = crud_checklist.read_db_checklist(db, checklist_id=checklist_id)
    if db_checklist is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Checklist not found")
    return db_checklist


@router.get("/{checklist_id}/items", response_model=List[checklist_models.ChecklistItemResponse])
def read_checklist_items(checklist_id: int, db: Session = Depends(get_db)):
    if crud_checklist.read_db_checklist(db, checklist_id=checklist_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Checklist not found")
    return crud_checklist.read_db_checklist_items(db, checklist_id=checklist_id)


@router.post("", response_model=checklist_models.ChecklistResponse, status_code=status.HTTP_201_CREATED)
def create_checklist(checklist: checklist_models.ChecklistCreate, db: Session = Depends(get_db)):
    try:
        return crud_checklist.create_db_checklist(db=db, checklist_data=checklist)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.patch("/{checklist_id}", response_model=checklist_models.ChecklistResponse)
def update_checklist(checklist_id: int, checklist: checklist_models.ChecklistUpdate, db: Session = Depends(get_db)):
    try:
        return crud_checklist.update_db_checklist(db=db, checklist_id=checklist_id, checklist_updates=checklist)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Checklist not found")
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{checklist_id}", response_model=MessageResponse)
def delete_checklist(checklist_id: int, db: Session = Depends(get_db)):
    """
    Delete a checklist and every item on it.
    """
    if not crud_checklist.delete_db_checklist(db=db, checklist_id=checklist_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Checklist not found")
    return {"message": "Checklist deleted successfully"}

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from life_tracker.crud import crud_checklist
from life_tracker.models import checklist as checklist_models
from life_tracker.models.common import MessageResponse
from life_tracker.db.core import get_db, NotFoundError

router = APIRouter(
    prefix="/api/checklist-items",
    tags=["checklist-items"],
)


@router.get("/{item_id}", response_model=checklist_models.ChecklistItemResponse)
def read_checklist_item(item_id: int, db: Session = Depends(get_db)):
    db_item = crud_checklist.read_db_checklist_item(db, item_id=item_id)
    if db_item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Checklist item not found")
    return db_item


@router.post("", response_model=checklist_models.ChecklistItemResponse, status_code=status.HTTP_201_CREATED)
def create_checklist_item(item: checklist_models.ChecklistItemCreate, db: Session = Depends(get_db)):
    try:
        return crud_checklist.create_db_checklist_item(db=db, item_data=item)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.patch("/{item_id}", response_model=checklist_models.ChecklistItemResponse)
def update_checklist_item(item_id: int, item: checklist_models.ChecklistItemUpdate, db: Session = Depends(get_db)):
    """
    Tick/untick, rename or reorder an item.
    """
    try:
        return crud_checklist.update_db_checklist_item(db=db, item_id=item_id, item_updates=item)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_checklist_item(item_id: int, db: Session = Depends(get_db)):
    if not crud_checklist.delete_db_checklist_item(db=db, item_id=item_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Checklist item not found")
    return {"message": "Checklist item deleted successfully"}

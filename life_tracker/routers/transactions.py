from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from life_tracker.crud import crud_transaction
from life_tracker.models import transaction as transaction_models
from life_tracker.models.common import MessageResponse
from life_tracker.db.core import get_db, NotFoundError

router = APIRouter(
    prefix="/api/transactions",
    tags=["transactions"],
)


@router.get("", response_model=List[transaction_models.TransactionResponse])
def read_transactions(db: Session = Depends(get_db)):
    return crud_transaction.read_db_transactions(db)


@router.get("/{transaction_id}", response_model=transaction_models.TransactionResponse)
def read_transaction(transaction_id: int, db: Session = Depends(get_db)):
    db_transaction = crud_transaction.read_db_transaction(db, transaction_id=transaction_id)
    if db_transaction is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return db_transaction


@router.post("", response_model=transaction_models.TransactionResponse, status_code=status.HTTP_201_CREATED)
def create_transaction(transaction: transaction_models.TransactionCreate, db: Session = Depends(get_db)):
    """
    Record income or an expense. The date defaults to now when omitted.
    """
    try:
        return crud_transaction.create_db_transaction(db=db, transaction_data=transaction)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.patch("/{transaction_id}", response_model=transaction_models.TransactionResponse)
def update_transaction(
    transaction_id: int,
    transaction: transaction_models.TransactionUpdate,
    db: Session = Depends(get_db)
):
    try:
        return crud_transaction.update_db_transaction(
            db=db, transaction_id=transaction_id, transaction_updates=transaction
        )
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{transaction_id}", response_model=MessageResponse)
def delete_transaction(transaction_id: int, db: Session = Depends(get_db)):
    if not crud_transaction.delete_db_transaction(db=db, transaction_id=transaction_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return {"message": "Transaction deleted successfully"}

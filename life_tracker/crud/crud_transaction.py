from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import desc
from typing import List, Optional
from datetime import datetime

from life_tracker.db.core import TransactionDB, NotFoundError
from life_tracker.models.transaction import TransactionCreate, TransactionUpdate
from life_tracker.logging_config import get_logger

logger = get_logger(__name__)


def create_db_transaction(db: Session, transaction_data: TransactionCreate) -> TransactionDB:
    """Create a new income or expense entry"""
    db_transaction = TransactionDB(
        title=transaction_data.title,
        amount=transaction_data.amount,
        type=transaction_data.type,
        category=transaction_data.category,
        date=transaction_data.date or datetime.utcnow(),
    )

    try:
        db.add(db_transaction)
        db.commit()
        db.refresh(db_transaction)
    except IntegrityError:
        db.rollback()
        raise ValueError("Transaction creation failed due to database constraint")

    logger.info(f"Created {db_transaction.type.value} transaction {db_transaction.id} for {db_transaction.amount}")
    return db_transaction


def read_db_transaction(db: Session, transaction_id: int) -> Optional[TransactionDB]:
    return db.query(TransactionDB).filter(TransactionDB.id == transaction_id).first()


def read_db_transactions(db: Session) -> List[TransactionDB]:
    """All transactions, most recent first"""
    return db.query(TransactionDB).order_by(desc(TransactionDB.date), desc(TransactionDB.id)).all()


def update_db_transaction(db: Session, transaction_id: int, transaction_updates: TransactionUpdate) -> TransactionDB:
    db_transaction = read_db_transaction(db, transaction_id)
    if not db_transaction:
        raise NotFoundError(f"Transaction with id {transaction_id} not found")

    for field, value in transaction_updates.changes().items():
        setattr(db_transaction, field, value)

    try:
        db.commit()
        db.refresh(db_transaction)
        return db_transaction
    except IntegrityError:
        db.rollback()
        raise ValueError("Transaction update failed due to database constraint")


def delete_db_transaction(db: Session, transaction_id: int) -> bool:
    db_transaction = read_db_transaction(db, transaction_id)
    if not db_transaction:
        return False

    db.delete(db_transaction)
    db.commit()
    logger.info(f"Deleted transaction {transaction_id}")
    return True

from pydantic import ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal

from life_tracker.db.core import TransactionType
from life_tracker.models.common import ApiModel, PartialUpdate, to_naive_utc, strip_text


# ===== TRANSACTION PYDANTIC MODELS =====

class TransactionCreate(ApiModel):
    title: str = Field(..., min_length=1, max_length=255, description="What the money was for")
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, description="Transaction amount")
    type: TransactionType = Field(..., description="income or expense")
    category: str = Field(..., min_length=1, max_length=100)
    date: Optional[datetime] = Field(None, description="Defaults to the time of creation")

    @field_validator('title', 'category', mode='before')
    @classmethod
    def clean_text(cls, v):
        return strip_text(v)

    @field_validator('date')
    @classmethod
    def validate_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class TransactionUpdate(PartialUpdate):
    """Update transaction - all fields optional"""
    non_nullable = ("title", "amount", "type", "category", "date")

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    type: Optional[TransactionType] = None
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    date: Optional[datetime] = None

    @field_validator('title', 'category', mode='before')
    @classmethod
    def clean_text(cls, v):
        return strip_text(v)

    @field_validator('date')
    @classmethod
    def validate_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class TransactionResponse(ApiModel):
    """Transaction data returned to client"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    amount: Decimal
    type: TransactionType
    category: str
    date: datetime

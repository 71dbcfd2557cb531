from pydantic import ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from life_tracker.db.core import GoalStatus
from life_tracker.models.common import ApiModel, PartialUpdate, to_naive_utc, strip_text, blank_to_none


# ===== GOAL PYDANTIC MODELS =====

class GoalCreate(ApiModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    target_value: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    current_value: Decimal = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    unit: Optional[str] = Field(None, max_length=50, description='e.g. "books", "dollars", "days"')
    status: GoalStatus = GoalStatus.NOT_STARTED
    start_date: Optional[datetime] = Field(None, description="Defaults to the time of creation")
    target_date: Optional[datetime] = None
    motivation_media: List[str] = Field(default_factory=list, description="Image/video URLs or data URIs")

    @field_validator('title', mode='before')
    @classmethod
    def validate_title(cls, v):
        return strip_text(v)

    @field_validator('description', 'unit', mode='before')
    @classmethod
    def clean_optional_text(cls, v):
        return blank_to_none(v)

    @field_validator('start_date', 'target_date')
    @classmethod
    def validate_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class GoalUpdate(PartialUpdate):
    """Update goal - all fields optional"""
    non_nullable = ("title", "current_value", "status", "start_date", "motivation_media")

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    target_value: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    current_value: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    unit: Optional[str] = Field(None, max_length=50)
    status: Optional[GoalStatus] = None
    start_date: Optional[datetime] = None
    target_date: Optional[datetime] = None
    motivation_media: Optional[List[str]] = None

    @field_validator('title', mode='before')
    @classmethod
    def validate_title(cls, v):
        return strip_text(v)

    @field_validator('description', 'unit', mode='before')
    @classmethod
    def clean_optional_text(cls, v):
        return blank_to_none(v)

    @field_validator('start_date', 'target_date')
    @classmethod
    def validate_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class GoalResponse(ApiModel):
    """Goal data returned to client"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str]
    target_value: Optional[Decimal]
    current_value: Decimal
    unit: Optional[str]
    status: GoalStatus
    start_date: datetime
    target_date: Optional[datetime]
    motivation_media: List[str]
    created_at: datetime
    progress: int = Field(0, description="Percent of target reached, capped at 100")

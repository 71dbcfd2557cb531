from pydantic import ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime

from life_tracker.models.common import ApiModel, PartialUpdate, strip_text


# ===== CHECKLIST ITEM PYDANTIC MODELS =====

class ChecklistItemCreate(ApiModel):
    checklist_id: int = Field(..., description="Owning checklist ID")
    title: str = Field(..., min_length=1, max_length=255)
    completed: bool = False
    order: int = Field(..., description="Position within the checklist, ascending")

    @field_validator('title', mode='before')
    @classmethod
    def validate_title(cls, v):
        return strip_text(v)


class ChecklistItemUpdate(PartialUpdate):
    """Update checklist item - all fields optional"""
    non_nullable = ("checklist_id", "title", "completed", "order")

    checklist_id: Optional[int] = None
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    completed: Optional[bool] = None
    order: Optional[int] = None

    @field_validator('title', mode='before')
    @classmethod
    def validate_title(cls, v):
        return strip_text(v)


class ChecklistItemResponse(ApiModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    checklist_id: int
    title: str
    completed: bool
    order: int


# ===== CHECKLIST PYDANTIC MODELS =====

class ChecklistCreate(ApiModel):
    title: str = Field(..., min_length=1, max_length=255)

    @field_validator('title', mode='before')
    @classmethod
    def validate_title(cls, v):
        return strip_text(v)


class ChecklistUpdate(PartialUpdate):
    non_nullable = ("title",)

    title: Optional[str] = Field(None, min_length=1, max_length=255)

    @field_validator('title', mode='before')
    @classmethod
    def validate_title(cls, v):
        return strip_text(v)


class ChecklistResponse(ApiModel):
    """Checklist with its items in display order"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    created_at: datetime
    items: List[ChecklistItemResponse] = []
    progress: int = Field(0, description="Percent of items completed")

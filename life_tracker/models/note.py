from pydantic import ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime

from life_tracker.models.common import ApiModel, PartialUpdate, strip_text


# ===== NOTE PYDANTIC MODELS =====

class NoteCreate(ApiModel):
    title: str = Field(..., min_length=1, max_length=255, description="Note title")
    content: str = Field("", description="Note body")

    @field_validator('title', mode='before')
    @classmethod
    def validate_title(cls, v):
        return strip_text(v)


class NoteUpdate(PartialUpdate):
    """Update note - all fields optional"""
    non_nullable = ("title", "content")

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = None

    @field_validator('title', mode='before')
    @classmethod
    def validate_title(cls, v):
        return strip_text(v)


class NoteResponse(ApiModel):
    """Note data returned to client"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

from pydantic import ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime
import datetime as dt

from life_tracker.models.common import ApiModel, PartialUpdate, strip_text, blank_to_none


# ===== HABIT PYDANTIC MODELS =====

class HabitCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=255, description="Habit name")
    description: Optional[str] = Field(None, description="What the habit involves")

    @field_validator('name', mode='before')
    @classmethod
    def validate_name(cls, v):
        return strip_text(v)

    @field_validator('description', mode='before')
    @classmethod
    def validate_description(cls, v):
        # Empty descriptions are stored as null
        return blank_to_none(v)


class HabitUpdate(PartialUpdate):
    """Update habit - streak fields are derived and cannot be set"""
    non_nullable = ("name",)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None

    @field_validator('name', mode='before')
    @classmethod
    def validate_name(cls, v):
        return strip_text(v)

    @field_validator('description', mode='before')
    @classmethod
    def validate_description(cls, v):
        return blank_to_none(v)


class HabitResponse(ApiModel):
    """Habit data returned to client"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str]
    current_streak: int
    longest_streak: int
    created_at: datetime


# ===== HABIT LOG PYDANTIC MODELS =====

class HabitLogUpsert(ApiModel):
    """Record whether a habit was done on a given day"""
    habit_id: int = Field(..., description="Habit ID")
    date: dt.date = Field(..., description="Calendar day, YYYY-MM-DD")
    completed: bool


class HabitLogResponse(ApiModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    habit_id: int
    date: dt.date
    completed: bool

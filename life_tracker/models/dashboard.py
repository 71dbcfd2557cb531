from pydantic import ConfigDict
from datetime import datetime
from decimal import Decimal

from life_tracker.models.common import ApiModel


class DashboardStats(ApiModel):
    """Cross-entity rollup for the dashboard; never stored"""
    model_config = ConfigDict(from_attributes=True)

    total_notes: int
    habits_completed_today: str  # "completed/total"
    monthly_balance: Decimal
    goals_progress: str  # "completed/total"


class NotificationResponse(ApiModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: str
    priority: str
    title: str
    message: str
    timestamp: datetime
    item_id: int

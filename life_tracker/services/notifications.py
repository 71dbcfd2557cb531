import math
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List

from life_tracker.services.metrics import goal_progress, completion_percent
from life_tracker.logging_config import get_logger

logger = get_logger(__name__)

PRIORITY_ORDER = {"high": 3, "medium": 2, "low": 1}
SECONDS_PER_DAY = 60 * 60 * 24
DUE_SOON_DAYS = 7
ALMOST_DONE_PERCENT = 80


@dataclass
class Notification:
    id: str
    type: str
    priority: str
    title: str
    message: str
    timestamp: datetime
    item_id: int


def _status(goal) -> str:
    return getattr(goal.status, "value", goal.status)


def _raw_percent(current, target) -> Decimal:
    return Decimal(str(current or 0)) / Decimal(str(target)) * 100


def _goal_notifications(goal, now: datetime) -> List[Notification]:
    notifications = []
    status = _status(goal)

    if goal.target_date and status != "completed":
        if goal.target_date < now:
            notifications.append(Notification(
                id=f"goal-overdue-{goal.id}",
                type="goal",
                priority="high",
                title="Goal Overdue",
                message=f'"{goal.title}" is past its target date',
                timestamp=goal.target_date,
                item_id=goal.id,
            ))

        days_until_due = math.ceil((goal.target_date - now).total_seconds() / SECONDS_PER_DAY)
        if 0 < days_until_due <= DUE_SOON_DAYS:
            plural = "" if days_until_due == 1 else "s"
            notifications.append(Notification(
                id=f"goal-due-soon-{goal.id}",
                type="goal",
                priority="medium",
                title="Goal Due Soon",
                message=f'"{goal.title}" is due in {days_until_due} day{plural}',
                timestamp=now,
                item_id=goal.id,
            ))

    if goal.target_value and status == "in_progress":
        # Uncapped here, unlike goal_progress(): 100% and above means done, not "almost"
        percent = _raw_percent(goal.current_value, goal.target_value)
        if ALMOST_DONE_PERCENT <= percent < 100:
            notifications.append(Notification(
                id=f"goal-almost-complete-{goal.id}",
                type="goal",
                priority="medium",
                title="Goal Almost Complete",
                message=f'"{goal.title}" is {goal_progress(goal.current_value, goal.target_value)}% complete! Keep going!',
                timestamp=now,
                item_id=goal.id,
            ))

    return notifications


def _checklist_notifications(checklist, now: datetime) -> List[Notification]:
    total_items = len(checklist.items)
    if total_items == 0:
        return []

    completed_items = sum(1 for item in checklist.items if item.completed)
    percent = Decimal(completed_items) / Decimal(total_items) * 100
    if not ALMOST_DONE_PERCENT <= percent < 100:
        return []

    return [Notification(
        id=f"checklist-almost-complete-{checklist.id}",
        type="checklist",
        priority="medium",
        title="Checklist Almost Done",
        message=(
            f'"{checklist.title}" is {completion_percent(completed_items, total_items)}% complete '
            f"({completed_items}/{total_items} items)"
        ),
        timestamp=now,
        item_id=checklist.id,
    )]


def build_notifications(goals: Iterable, checklists: Iterable, now: datetime) -> List[Notification]:
    """
    Derive reminders from the current goals and checklists.

    Nothing is stored: the feed is rebuilt on every call, ordered by
    priority and then newest first.
    """
    notifications = []
    for goal in goals:
        notifications.extend(_goal_notifications(goal, now))
    for checklist in checklists:
        notifications.extend(_checklist_notifications(checklist, now))

    notifications.sort(key=lambda n: n.timestamp, reverse=True)
    notifications.sort(key=lambda n: PRIORITY_ORDER[n.priority], reverse=True)

    logger.debug(f"Built {len(notifications)} notifications")
    return notifications

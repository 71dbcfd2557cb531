"""
Derived metrics for the tracker: habit streaks, dashboard statistics and
progress percentages.

Everything here is a pure function over already-loaded records. Records are
duck-typed (ORM rows, Pydantic models or simple namespaces all work) so the
functions never touch a session.
"""
import os
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Sequence


LONGEST_STREAK_CONTIGUOUS = os.getenv("LONGEST_STREAK_CONTIGUOUS", "false").lower() == "true"

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def utc_today() -> date:
    return datetime.utcnow().date()


def utc_now() -> datetime:
    return datetime.utcnow()


@dataclass(frozen=True)
class StreakResult:
    current_streak: int
    longest_streak: int


@dataclass(frozen=True)
class DashboardSnapshot:
    total_notes: int
    habits_completed_today: str
    monthly_balance: Decimal
    goals_progress: str


# ===== STREAKS =====

def compute_streaks(logs: Iterable, today: date, contiguous_longest: Optional[bool] = None) -> StreakResult:
    """
    Compute current and longest streak from one habit's logs.

    The current streak walks backward from ``today`` and stops at the first
    day that has no log or an incomplete log.

    The longest streak is a run-length over the logs sorted newest first:
    completed logs extend the run, incomplete ones reset it. Gaps between
    dates do not break a run unless ``contiguous_longest`` is set, in which
    case a missing day resets the run as well.
    """
    if contiguous_longest is None:
        contiguous_longest = LONGEST_STREAK_CONTIGUOUS

    sorted_logs = sorted(logs, key=lambda log: log.date, reverse=True)
    completed_by_day = {log.date: log.completed for log in sorted_logs}

    current_streak = 0
    check_date = today
    while completed_by_day.get(check_date):
        current_streak += 1
        check_date -= timedelta(days=1)

    longest_streak = 0
    running = 0
    previous_date = None
    for log in sorted_logs:
        if not log.completed:
            running = 0
        elif contiguous_longest and previous_date is not None and previous_date - log.date != timedelta(days=1):
            running = 1
        else:
            running += 1
        longest_streak = max(longest_streak, running)
        previous_date = log.date

    return StreakResult(current_streak=current_streak, longest_streak=longest_streak)


# ===== PROGRESS =====

def _to_decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    # str() first so floats keep their printed value instead of binary noise
    return Decimal(str(value))


def goal_progress(current_value, target_value) -> int:
    """Whole percent of target reached, capped at 100."""
    target = _to_decimal(target_value)
    if target is None or target == 0:
        return 0
    current = _to_decimal(current_value) or Decimal("0")
    percent = (current / target * HUNDRED).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return max(0, min(int(percent), 100))


def completion_percent(completed: int, total: int) -> int:
    if total == 0:
        return 0
    percent = (Decimal(completed) / Decimal(total) * HUNDRED).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(percent)


def checklist_progress(items: Sequence) -> int:
    completed = sum(1 for item in items if item.completed)
    return completion_percent(completed, len(items))


# ===== DASHBOARD =====

def monthly_balance(transactions: Iterable, today: date) -> Decimal:
    income = Decimal("0")
    expenses = Decimal("0")
    for transaction in transactions:
        if transaction.date.year != today.year or transaction.date.month != today.month:
            continue
        amount = _to_decimal(transaction.amount)
        kind = getattr(transaction.type, "value", transaction.type)
        if kind == "income":
            income += amount
        elif kind == "expense":
            expenses += amount
    return (income - expenses).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_dashboard_stats(
    notes: Sequence,
    habits: Sequence,
    today_logs: Iterable,
    transactions: Iterable,
    goals: Sequence,
    today: date,
) -> DashboardSnapshot:
    completed_habits = sum(1 for log in today_logs if log.completed)
    completed_goals = sum(1 for goal in goals if getattr(goal.status, "value", goal.status) == "completed")

    return DashboardSnapshot(
        total_notes=len(notes),
        habits_completed_today=f"{completed_habits}/{len(habits)}",
        monthly_balance=monthly_balance(transactions, today),
        goals_progress=f"{completed_goals}/{len(goals)}",
    )

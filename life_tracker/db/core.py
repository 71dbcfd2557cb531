import os
import anyio
from contextlib import asynccontextmanager
from typing import Optional, List
from sqlalchemy import create_engine, ForeignKey, Index, UniqueConstraint, Boolean, Integer, String, Text, JSON, DECIMAL, DateTime, Date
from sqlalchemy.types import Enum
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Mapped, relationship, mapped_column
from sqlalchemy.pool import StaticPool
from fastapi import Request
from datetime import datetime
from decimal import Decimal
import enum

from life_tracker.services.metrics import goal_progress, checklist_progress
from life_tracker.logging_config import get_logger

logger = get_logger(__name__)


# Volatile in-memory store by default; point at a real database for durability.
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite://")


class NotFoundError(Exception):
    pass


class Base(DeclarativeBase):
    pass


class TransactionType(str, enum.Enum):
    INCOME = "income"
    EXPENSE = "expense"


class GoalStatus(str, enum.Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"


class NoteDB(Base):
    __tablename__ = "notes"

    __table_args__ = (
        Index("idx_notes_updated_at", "updated_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Audit Trail
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class HabitDB(Base):
    __tablename__ = "habits"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)

    # Derived from the habit's logs, rewritten on every log upsert
    current_streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    longest_streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    logs = relationship("HabitLogDB", back_populates="habit", cascade="all, delete-orphan")


class HabitLogDB(Base):
    __tablename__ = "habit_logs"

    __table_args__ = (
        # One log per habit per calendar day
        UniqueConstraint("habit_id", "date", name="uq_habit_log_habit_date"),
        Index("idx_habit_logs_date", "date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    habit_id: Mapped[int] = mapped_column(ForeignKey("habits.id", ondelete="CASCADE"), nullable=False)
    # Unannotated: a "date" annotation here would resolve to the column itself
    date = mapped_column(Date, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False)

    habit = relationship("HabitDB", back_populates="logs")


class TransactionDB(Base):
    __tablename__ = "transactions"

    __table_args__ = (
        Index("idx_transactions_date", "date"),
        Index("idx_transactions_type_date", "type", "date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(DECIMAL(10, 2), nullable=False)
    type: Mapped[TransactionType] = mapped_column(Enum(TransactionType), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)


class ChecklistDB(Base):
    __tablename__ = "checklists"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    items = relationship(
        "ChecklistItemDB",
        back_populates="checklist",
        cascade="all, delete-orphan",
        order_by="(ChecklistItemDB.order, ChecklistItemDB.id)",
    )

    @property
    def progress(self) -> int:
        return checklist_progress(self.items)


class ChecklistItemDB(Base):
    __tablename__ = "checklist_items"

    __table_args__ = (
        Index("idx_checklist_items_checklist_order", "checklist_id", "order"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    checklist_id: Mapped[int] = mapped_column(ForeignKey("checklists.id", ondelete="CASCADE"), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False)

    checklist = relationship("ChecklistDB", back_populates="items")


class GoalDB(Base):
    __tablename__ = "goals"

    __table_args__ = (
        Index("idx_goals_status", "status"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)

    # Progress Tracking
    target_value: Mapped[Optional[Decimal]] = mapped_column(DECIMAL(10, 2))
    current_value: Mapped[Decimal] = mapped_column(DECIMAL(10, 2), default=Decimal("0"), nullable=False)
    unit: Mapped[Optional[str]] = mapped_column(String(50))  # e.g. "books", "dollars", "days"
    status: Mapped[GoalStatus] = mapped_column(Enum(GoalStatus), default=GoalStatus.NOT_STARTED, nullable=False)

    # Schedule
    start_date: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    target_date: Mapped[Optional[datetime]] = mapped_column(DateTime)

    # Media URLs or data URIs
    motivation_media: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    @property
    def progress(self) -> int:
        return goal_progress(self.current_value, self.target_value)


class Database:
    """
    Engine, session factory and write serialization for one application.

    SQLite sessions are handed out one at a time: the in-memory store shares
    a single connection between threadpool workers, and file-backed SQLite
    only has one writer anyway. Waiting happens on the event loop, so queued
    requests never hold a worker thread the current session still needs.
    """

    def __init__(self, url: Optional[str] = None, echo: Optional[bool] = None):
        self.url = url or DATABASE_URL
        if echo is None:
            echo = os.getenv("SQL_ECHO", "false").lower() == "true"

        engine_kwargs = {"echo": echo}
        self.is_sqlite = self.url.startswith("sqlite")
        if self.is_sqlite:
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if self._is_in_memory(self.url):
                engine_kwargs["poolclass"] = StaticPool

        self.engine = create_engine(self.url, **engine_kwargs)
        self.session_local = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        # A semaphore rather than a lock: FastAPI may close the dependency from another task
        self._slot = anyio.Semaphore(1) if self.is_sqlite else None

    @staticmethod
    def _is_in_memory(url: str) -> bool:
        return url in ("sqlite://", "sqlite:///:memory:", "sqlite+pysqlite://", "sqlite+pysqlite:///:memory:")

    def create_all(self):
        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Database schema ready at {self.engine.url.render_as_string(hide_password=True)}")

    @asynccontextmanager
    async def session(self):
        if self._slot is not None:
            await self._slot.acquire()
        try:
            database = self.session_local()
            try:
                yield database
            finally:
                database.close()
        finally:
            if self._slot is not None:
                self._slot.release()

    def dispose(self):
        self.engine.dispose()


# Dependency to get the database session
async def get_db(request: Request):
    async with request.app.state.database.session() as database:
        yield database

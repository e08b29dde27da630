import uuid
from datetime import datetime

from sqlalchemy import JSON, Column, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint

from backend.database import Base
from backend.constants import (
    DEFAULT_CATEGORY, DEFAULT_MULTIPLIER, TASK_STATUS_ACTIVE
)


def generate_task_id() -> str:
    """Fresh opaque task identifier"""
    return uuid.uuid4().hex[:12]


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True, index=True, default=generate_task_id)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False, default=DEFAULT_CATEGORY)  # Gym, Content, Study, ...
    active_days = Column(JSON, nullable=False, default=list)  # weekday indices 0-6, Sunday=0
    multiplier = Column(Integer, nullable=False, default=DEFAULT_MULTIPLIER)  # 1-10
    status = Column(String, nullable=False, default=TASK_STATUS_ACTIVE)  # active, paused
    created_at = Column(DateTime, default=datetime.utcnow)

    def is_active_on(self, weekday_index: int) -> bool:
        """Check whether the task is due on a weekday (Sunday=0)"""
        return weekday_index in (self.active_days or [])


class DailyLog(Base):
    __tablename__ = "daily_logs"
    __table_args__ = (
        UniqueConstraint("task_id", "date", name="uq_daily_logs_task_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(String, ForeignKey("tasks.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    status = Column(String, nullable=False)  # COMPLETED, MISSED, REST_USED

from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime, date
from typing import Dict, List, Literal, Optional

from backend.constants import (
    DEFAULT_ACTIVE_DAYS, DEFAULT_CATEGORY, DEFAULT_MULTIPLIER, MULTIPLIER_MAX, MULTIPLIER_MIN,
    LOG_STATUS_COMPLETED, LOG_STATUS_MISSED, LOG_STATUS_REST_USED, LOG_STATUSES,
    SNAPSHOT_LOGS_SLOT, SNAPSHOT_TASKS_SLOT, TASK_CATEGORIES, TASK_STATUS_ACTIVE, TASK_STATUSES,
    TRANSACTION_EARNED, TRANSACTION_SPENT
)

Category = Literal[TASK_CATEGORIES]
TaskStatus = Literal[TASK_STATUSES]
StoredLogStatus = Literal[LOG_STATUS_COMPLETED, LOG_STATUS_MISSED, LOG_STATUS_REST_USED]
LogStatus = Literal[LOG_STATUSES]
TransactionType = Literal[TRANSACTION_EARNED, TRANSACTION_SPENT]


def _normalize_active_days(days: Optional[List[int]]) -> Optional[List[int]]:
    if days is None:
        return None
    for day in days:
        if day < 0 or day > 6:
            raise ValueError(f"weekday index must be 0-6 (Sunday=0), got {day}")
    return sorted(set(days))


# Task schemas
class TaskBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    category: Category = DEFAULT_CATEGORY
    active_days: List[int] = Field(default_factory=lambda: list(DEFAULT_ACTIVE_DAYS))
    multiplier: int = Field(default=DEFAULT_MULTIPLIER, ge=MULTIPLIER_MIN, le=MULTIPLIER_MAX)
    status: TaskStatus = TASK_STATUS_ACTIVE

    @field_validator("active_days")
    @classmethod
    def check_active_days(cls, value):
        return _normalize_active_days(value)

class TaskCreate(TaskBase):
    pass

class TaskUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[Category] = None
    active_days: Optional[List[int]] = None
    multiplier: Optional[int] = Field(None, ge=MULTIPLIER_MIN, le=MULTIPLIER_MAX)
    status: Optional[TaskStatus] = None

    # Omit a field to leave it unchanged; every column is NOT NULL
    @field_validator("name", "category", "active_days", "multiplier", "status", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("field cannot be null")
        return value

    @field_validator("active_days")
    @classmethod
    def check_active_days(cls, value):
        return _normalize_active_days(value)

class TaskResponse(TaskBase):
    id: str
    created_at: datetime

    class Config:
        from_attributes = True


# Daily log schemas
class LogToggleRequest(BaseModel):
    task_id: str
    date: date

class LogSetRequest(BaseModel):
    task_id: str
    date: date
    status: LogStatus

class LogResponse(BaseModel):
    task_id: str
    date: date
    status: StoredLogStatus

    class Config:
        from_attributes = True


# Engine output
class StreakInfo(BaseModel):
    task_id: str
    current_streak: int = 0
    longest_streak: int = 0
    total_completed: int = 0
    total_missed: int = 0
    total_rest_used: int = 0

class RestTransaction(BaseModel):
    id: str
    amount: int
    type: TransactionType
    reason: str
    date: date

class EngineResponse(BaseModel):
    streaks: Dict[str, StreakInfo]
    transactions: List[RestTransaction]
    balance: int

class BalanceResponse(BaseModel):
    balance: int
    earned: int
    spent: int

class ToggleResponse(BaseModel):
    task_id: str
    date: date
    previous_status: LogStatus
    status: LogStatus
    balance: int  # Balance after the mutation was replayed
    streak: Optional[StreakInfo] = None


# Tracker (week grid)
class TrackerCell(BaseModel):
    date: date
    weekday: int  # Sunday=0
    status: LogStatus
    is_active_day: bool

class TrackerRow(BaseModel):
    task: TaskResponse
    streak: StreakInfo
    cells: List[TrackerCell]

class TrackerResponse(BaseModel):
    week_start: date
    week_end: date
    days: List[date]
    balance: int
    rows: List[TrackerRow]
    today: date
    today_completed: int  # COMPLETED cells today among active tasks
    today_scheduled: int  # Active tasks whose schedule includes today


# Dashboard
class CompletionTrendPoint(BaseModel):
    date: date
    label: str
    completed: int

class RestPointTrendPoint(BaseModel):
    date: date
    label: str
    earned: int
    spent: int

class CategoryCount(BaseModel):
    name: str
    value: int

class LeaderboardEntry(BaseModel):
    task_id: str
    name: str
    streak: int
    longest: int

class DashboardResponse(BaseModel):
    total_rp: int
    earned_rp: int
    spent_rp: int
    completion_rate: float
    productivity_score: int
    hottest_streak: int
    category_breakdown: List[CategoryCount]
    weekly_trend: List[CompletionTrendPoint]
    rp_trend: List[RestPointTrendPoint]
    leaderboard: List[LeaderboardEntry]


# Snapshot (raw collections keyed by slot name)
class SnapshotTask(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    category: Category
    active_days: List[int] = Field(default_factory=list)
    multiplier: int  # stored verbatim, bounds are enforced on create/update only
    status: TaskStatus
    created_at: datetime

    class Config:
        from_attributes = True

class SnapshotLog(BaseModel):
    task_id: str
    date: date
    status: LogStatus

    class Config:
        from_attributes = True

class Snapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Required: an absent slot is an error, not an empty collection
    tasks: List[SnapshotTask] = Field(..., alias=SNAPSHOT_TASKS_SLOT)
    logs: List[SnapshotLog] = Field(..., alias=SNAPSHOT_LOGS_SLOT)

class SnapshotImportResponse(BaseModel):
    tasks_imported: int
    logs_imported: int
    orphan_logs_dropped: int

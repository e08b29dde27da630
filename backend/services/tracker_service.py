"""
Tracker service.
Builds the weekly grid of (task, day) cells for active tasks.
"""
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from backend.schemas import TaskResponse, TrackerCell, TrackerResponse, TrackerRow
from backend.repositories.task_repository import TaskRepository
from backend.repositories.log_repository import DailyLogRepository
from backend.services.date_service import DateService
from backend.services.engine import compute_engine
from backend.constants import LOG_STATUS_COMPLETED, LOG_STATUS_PENDING


class TrackerService:
    """Service for the weekly tracker view"""

    def __init__(self, db: Session):
        self.db = db
        self.task_repo = TaskRepository()
        self.log_repo = DailyLogRepository()
        self.date_service = DateService()

    def get_week(self, reference: Optional[date] = None, today: Optional[date] = None) -> TrackerResponse:
        """
        Week grid (Monday first) containing the reference date, plus today's progress.

        Paused tasks are hidden but still count toward streaks and balance.
        Cells on days outside a task's schedule are flagged, not blocked.
        """
        today = today or self.date_service.today()
        reference = reference or today
        days = self.date_service.week_days(reference)

        state = compute_engine(self.task_repo.get_all(self.db), self.log_repo.get_all(self.db))
        week_logs = self.log_repo.get_range(self.db, days[0], days[-1])
        statuses = {(log.task_id, log.date): log.status for log in week_logs}

        active_tasks = self.task_repo.get_active(self.db)
        today_logs = self.log_repo.get_range(self.db, today, today)
        active_ids = {task.id for task in active_tasks}
        today_weekday = self.date_service.weekday_index(today)

        rows = []
        for task in active_tasks:
            cells = []
            for day in days:
                weekday = self.date_service.weekday_index(day)
                cells.append(TrackerCell(
                    date=day,
                    weekday=weekday,
                    status=statuses.get((task.id, day), LOG_STATUS_PENDING),
                    is_active_day=task.is_active_on(weekday)
                ))
            rows.append(TrackerRow(
                task=TaskResponse.model_validate(task),
                streak=state.streaks[task.id],
                cells=cells
            ))

        return TrackerResponse(
            week_start=days[0],
            week_end=days[-1],
            days=days,
            balance=state.balance,
            rows=rows,
            today=today,
            today_completed=sum(
                1 for log in today_logs
                if log.task_id in active_ids and log.status == LOG_STATUS_COMPLETED
            ),
            today_scheduled=sum(1 for task in active_tasks if task.is_active_on(today_weekday))
        )

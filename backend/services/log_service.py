"""
Daily log service.
Applies tracker clicks and forced status writes, always replaying the full
history before deciding and after writing.
"""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from backend.models import DailyLog
from backend.schemas import BalanceResponse, EngineResponse, ToggleResponse
from backend.exceptions import InvalidLogStatusException, TaskNotFoundException
from backend.repositories.task_repository import TaskRepository
from backend.repositories.log_repository import DailyLogRepository
from backend.services.engine import compute_engine, summarize_ledger
from backend.services.transition_service import resolve_next_status
from backend.services.locks import write_lock
from backend.constants import LOG_STATUS_PENDING, LOG_STATUSES

logger = logging.getLogger("streak_forge.logs")


class LogService:
    """Service for daily log mutations and derived state"""

    def __init__(self, db: Session):
        self.db = db
        self.task_repo = TaskRepository()
        self.log_repo = DailyLogRepository()

    def compute_state(self) -> EngineResponse:
        """Replay every stored log against every stored task"""
        tasks = self.task_repo.get_all(self.db)
        logs = self.log_repo.get_all(self.db)
        return compute_engine(tasks, logs)

    def get_balance(self) -> BalanceResponse:
        """Current Rest Point balance with its earned/spent split"""
        state = self.compute_state()
        earned, spent = summarize_ledger(state.transactions)
        return BalanceResponse(balance=state.balance, earned=earned, spent=spent)

    def get_logs(self, start: Optional[date] = None, end: Optional[date] = None) -> List[DailyLog]:
        """Get stored logs, optionally limited to a date range"""
        return self.log_repo.get_range(self.db, start, end)

    def toggle_log(self, task_id: str, log_date: date) -> ToggleResponse:
        """
        Advance a tracker cell one step through its status cycle.

        The rest affordability check uses the balance replayed from the logs
        as they are before this click; the state is replayed again after the
        write so the returned balance is never stale.

        Raises:
            TaskNotFoundException: If the task does not exist
        """
        with write_lock:
            task = self.task_repo.get_by_id(self.db, task_id)
            if not task:
                raise TaskNotFoundException(task_id)

            before = self.compute_state()
            existing = self.log_repo.get(self.db, task_id, log_date)
            previous_status = existing.status if existing else LOG_STATUS_PENDING

            next_status = resolve_next_status(previous_status, task.multiplier, before.balance)
            self._write(task_id, log_date, existing, next_status)

            after = self.compute_state()

        logger.info(
            f"Toggled {task_id} on {log_date}: {previous_status} -> {next_status} "
            f"(balance {before.balance} -> {after.balance})"
        )
        return ToggleResponse(
            task_id=task_id,
            date=log_date,
            previous_status=previous_status,
            status=next_status,
            balance=after.balance,
            streak=after.streaks.get(task_id)
        )

    def set_log_status(self, task_id: str, log_date: date, status: str) -> ToggleResponse:
        """
        Write a cell status directly, bypassing the affordability check.

        PENDING deletes the row. A forced rest can drive the balance negative.

        Raises:
            TaskNotFoundException: If the task does not exist
            InvalidLogStatusException: If the status is unknown
        """
        if status not in LOG_STATUSES:
            raise InvalidLogStatusException(status)

        with write_lock:
            task = self.task_repo.get_by_id(self.db, task_id)
            if not task:
                raise TaskNotFoundException(task_id)

            existing = self.log_repo.get(self.db, task_id, log_date)
            previous_status = existing.status if existing else LOG_STATUS_PENDING
            self._write(task_id, log_date, existing, status)

            after = self.compute_state()

        logger.info(f"Set {task_id} on {log_date}: {previous_status} -> {status}")
        if after.balance < 0:
            logger.warning(f"Rest Point balance is negative: {after.balance}")
        return ToggleResponse(
            task_id=task_id,
            date=log_date,
            previous_status=previous_status,
            status=status,
            balance=after.balance,
            streak=after.streaks.get(task_id)
        )

    def _write(self, task_id: str, log_date: date, existing: Optional[DailyLog], status: str) -> None:
        """Persist a cell status: delete the row for PENDING, upsert otherwise"""
        if status == LOG_STATUS_PENDING:
            if existing:
                self.log_repo.delete(self.db, existing)
        else:
            self.log_repo.upsert(self.db, task_id, log_date, status)
        self.db.commit()

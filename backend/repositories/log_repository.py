"""
Daily log repository - Data access layer for DailyLog model.
One row per (task, date); a missing row means the cell is pending.
"""
from datetime import date
from typing import List, Optional
from sqlalchemy import and_
from sqlalchemy.orm import Session

from backend.models import DailyLog


class DailyLogRepository:
    """Repository for DailyLog data access"""

    @staticmethod
    def get(db: Session, task_id: str, log_date: date) -> Optional[DailyLog]:
        """Get the log for a (task, date) cell"""
        return db.query(DailyLog).filter(
            and_(
                DailyLog.task_id == task_id,
                DailyLog.date == log_date
            )
        ).first()

    @staticmethod
    def get_all(db: Session) -> List[DailyLog]:
        """Get all logs in insertion order"""
        return db.query(DailyLog).order_by(DailyLog.id).all()

    @staticmethod
    def get_range(db: Session, start: Optional[date] = None, end: Optional[date] = None) -> List[DailyLog]:
        """Get logs between two dates (inclusive), ordered by date"""
        query = db.query(DailyLog)
        if start:
            query = query.filter(DailyLog.date >= start)
        if end:
            query = query.filter(DailyLog.date <= end)
        return query.order_by(DailyLog.date, DailyLog.id).all()

    @staticmethod
    def upsert(db: Session, task_id: str, log_date: date, status: str) -> DailyLog:
        """Create the cell's log or change its status in place (no commit)"""
        log = DailyLogRepository.get(db, task_id, log_date)
        if log:
            log.status = status
        else:
            log = DailyLog(task_id=task_id, date=log_date, status=status)
            db.add(log)
        return log

    @staticmethod
    def delete(db: Session, log: DailyLog) -> None:
        """Delete a log row (no commit)"""
        db.delete(log)

    @staticmethod
    def delete_by_task(db: Session, task_id: str) -> int:
        """Delete every log of a task (no commit)"""
        return db.query(DailyLog).filter(
            DailyLog.task_id == task_id
        ).delete(synchronize_session=False)

    @staticmethod
    def delete_all(db: Session) -> int:
        """Delete every log (no commit)"""
        return db.query(DailyLog).delete(synchronize_session=False)

"""
Task repository - Data access layer for Task model.
Handles all database queries related to tasks.
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from backend.models import Task
from backend.constants import TASK_STATUS_ACTIVE


class TaskRepository:
    """Repository for Task data access"""

    @staticmethod
    def get_by_id(db: Session, task_id: str) -> Optional[Task]:
        """Get task by ID"""
        return db.query(Task).filter(Task.id == task_id).first()

    @staticmethod
    def get_all(db: Session) -> List[Task]:
        """Get all tasks in creation order"""
        return db.query(Task).order_by(Task.created_at, Task.id).all()

    @staticmethod
    def get_active(db: Session) -> List[Task]:
        """Get tasks that are not paused"""
        return db.query(Task).filter(
            Task.status == TASK_STATUS_ACTIVE
        ).order_by(Task.created_at, Task.id).all()

    @staticmethod
    def create(db: Session, task: Task) -> Task:
        """Create new task"""
        db.add(task)
        db.commit()
        db.refresh(task)
        return task

    @staticmethod
    def update(db: Session, task: Task) -> Task:
        """Update existing task"""
        db.commit()
        db.refresh(task)
        return task

    @staticmethod
    def delete(db: Session, task: Task) -> None:
        """Delete task (caller removes its logs in the same transaction)"""
        db.delete(task)
        db.commit()

    @staticmethod
    def delete_all(db: Session) -> int:
        """Delete every task without committing"""
        return db.query(Task).delete(synchronize_session=False)

"""
Task management service.
Handles habit definitions: create, update, pause and cascade delete.
"""
import logging
from datetime import datetime
from typing import List

from sqlalchemy.orm import Session

from backend.models import Task
from backend.schemas import TaskCreate, TaskUpdate
from backend.exceptions import TaskNotFoundException
from backend.repositories.task_repository import TaskRepository
from backend.repositories.log_repository import DailyLogRepository
from backend.services.locks import write_lock

logger = logging.getLogger("streak_forge.tasks")


class TaskService:
    """Service for task management"""

    def __init__(self, db: Session):
        self.db = db
        self.task_repo = TaskRepository()
        self.log_repo = DailyLogRepository()

    def get_task(self, task_id: str) -> Task:
        """
        Get task by ID.

        Raises:
            TaskNotFoundException: If no task has this ID
        """
        task = self.task_repo.get_by_id(self.db, task_id)
        if not task:
            raise TaskNotFoundException(task_id)
        return task

    def get_tasks(self) -> List[Task]:
        """Get all tasks"""
        return self.task_repo.get_all(self.db)

    def get_active_tasks(self) -> List[Task]:
        """Get tasks shown on the tracker (not paused)"""
        return self.task_repo.get_active(self.db)

    def create_task(self, task_data: TaskCreate) -> Task:
        """Create a new task with a fresh ID and creation timestamp"""
        task = Task(**task_data.model_dump())
        task.created_at = datetime.utcnow()
        task = self.task_repo.create(self.db, task)
        logger.info(f"Created task {task.id} ({task.name}, x{task.multiplier})")
        return task

    def update_task(self, task_id: str, task_update: TaskUpdate) -> Task:
        """Patch the supplied fields of an existing task"""
        # Multiplier changes reprice every past rest
        with write_lock:
            task = self.get_task(task_id)

            update_data = task_update.model_dump(exclude_unset=True)
            for key, value in update_data.items():
                setattr(task, key, value)

            task = self.task_repo.update(self.db, task)
        logger.info(f"Updated task {task_id}: {sorted(update_data)}")
        return task

    def delete_task(self, task_id: str) -> None:
        """Delete a task together with all of its logs"""
        with write_lock:
            task = self.get_task(task_id)
            removed = self.log_repo.delete_by_task(self.db, task_id)
            self.task_repo.delete(self.db, task)
        logger.info(f"Deleted task {task_id} and {removed} log(s)")

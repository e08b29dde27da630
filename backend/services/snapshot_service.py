"""
Snapshot service.
Exports and imports the raw task and log collections verbatim as one JSON
document with two named slots (sf_tasks, sf_logs). Derived state is never
stored; it is replayed after import.
"""
import logging
from typing import Any, Dict

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.models import DailyLog, Task
from backend.schemas import Snapshot, SnapshotImportResponse, SnapshotLog, SnapshotTask
from backend.exceptions import SnapshotException
from backend.repositories.task_repository import TaskRepository
from backend.repositories.log_repository import DailyLogRepository
from backend.services.locks import write_lock
from backend.constants import LOG_STATUS_PENDING

logger = logging.getLogger("streak_forge.snapshot")


class SnapshotService:
    """Service for raw data export/import"""

    def __init__(self, db: Session):
        self.db = db
        self.task_repo = TaskRepository()
        self.log_repo = DailyLogRepository()

    def export_snapshot(self) -> Dict[str, Any]:
        """Dump tasks and logs as JSON-ready data keyed by slot name"""
        snapshot = Snapshot(
            tasks=[SnapshotTask.model_validate(task) for task in self.task_repo.get_all(self.db)],
            logs=[SnapshotLog.model_validate(log) for log in self.log_repo.get_all(self.db)]
        )
        return snapshot.model_dump(mode="json", by_alias=True)

    def import_snapshot(self, payload: Dict[str, Any]) -> SnapshotImportResponse:
        """
        Replace both collections with the snapshot contents.

        Logs referencing unknown tasks are dropped, mirroring the cascade that
        task deletion performs. Pending rows and duplicate cells are rejected.

        Raises:
            SnapshotException: If the payload is malformed or inconsistent
        """
        try:
            snapshot = Snapshot.model_validate(payload)
        except ValidationError as e:
            raise SnapshotException(f"{e.error_count()} invalid field(s)") from e

        task_ids = [task.id for task in snapshot.tasks]
        if len(task_ids) != len(set(task_ids)):
            raise SnapshotException("duplicate task id")

        known = set(task_ids)
        cells = set()
        logs = []
        dropped = 0
        for log in snapshot.logs:
            if log.status == LOG_STATUS_PENDING:
                raise SnapshotException(f"pending log stored for {log.task_id} on {log.date}")
            if log.task_id not in known:
                dropped += 1
                continue
            cell = (log.task_id, log.date)
            if cell in cells:
                raise SnapshotException(f"duplicate log for {log.task_id} on {log.date}")
            cells.add(cell)
            logs.append(log)

        with write_lock:
            try:
                self.log_repo.delete_all(self.db)
                self.task_repo.delete_all(self.db)
                # Bulk deletes bypass the identity map; drop stale instances before re-adding ids
                self.db.expunge_all()
                self.db.add_all([Task(**task.model_dump()) for task in snapshot.tasks])
                self.db.flush()
                self.db.add_all([DailyLog(**log.model_dump()) for log in logs])
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"Snapshot import failed: {e}")
                raise SnapshotException(str(e)) from e

        logger.info(
            f"Imported snapshot: {len(snapshot.tasks)} task(s), {len(logs)} log(s), "
            f"{dropped} orphan log(s) dropped"
        )
        return SnapshotImportResponse(
            tasks_imported=len(snapshot.tasks),
            logs_imported=len(logs),
            orphan_logs_dropped=dropped
        )

"""
Tests for SnapshotService.
"""
import pytest

from backend.services.snapshot_service import SnapshotService
from backend.services.log_service import LogService
from backend.repositories.task_repository import TaskRepository
from backend.repositories.log_repository import DailyLogRepository
from backend.exceptions import SnapshotException


def _task(task_id, name="Read", multiplier=1):
    return {
        "id": task_id,
        "name": name,
        "category": "Study",
        "active_days": [1, 2, 3],
        "multiplier": multiplier,
        "status": "active",
        "created_at": "2026-01-01T08:00:00",
    }


class TestExport:
    """Tests for export_snapshot"""

    def test_uses_named_slots(self, db_session, make_task, add_logs, day_one):
        task = make_task(task_id="abc123")
        add_logs(task, day_one, ["COMPLETED", "MISSED"])

        snapshot = SnapshotService(db_session).export_snapshot()

        assert set(snapshot) == {"sf_tasks", "sf_logs"}
        assert snapshot["sf_tasks"][0]["id"] == "abc123"
        assert snapshot["sf_logs"] == [
            {"task_id": "abc123", "date": "2026-01-01", "status": "COMPLETED"},
            {"task_id": "abc123", "date": "2026-01-02", "status": "MISSED"},
        ]

    def test_export_then_import_preserves_engine_state(self, db_session, make_task, add_logs, day_one):
        task = make_task()
        add_logs(task, day_one, ["COMPLETED"] * 30 + ["REST_USED"])
        service = SnapshotService(db_session)
        before = LogService(db_session).compute_state()

        service.import_snapshot(service.export_snapshot())

        assert LogService(db_session).compute_state() == before


class TestImport:
    """Tests for import_snapshot"""

    def test_replaces_existing_data(self, db_session, make_task):
        make_task(name="Old")
        payload = {
            "sf_tasks": [_task("t1")],
            "sf_logs": [{"task_id": "t1", "date": "2026-01-01", "status": "COMPLETED"}],
        }

        result = SnapshotService(db_session).import_snapshot(payload)

        assert result.tasks_imported == 1
        assert result.logs_imported == 1
        assert [task.name for task in TaskRepository.get_all(db_session)] == ["Read"]

    def test_drops_orphan_logs(self, db_session):
        payload = {
            "sf_tasks": [_task("t1")],
            "sf_logs": [
                {"task_id": "t1", "date": "2026-01-01", "status": "COMPLETED"},
                {"task_id": "gone", "date": "2026-01-01", "status": "REST_USED"},
            ],
        }

        result = SnapshotService(db_session).import_snapshot(payload)

        assert result.orphan_logs_dropped == 1
        assert len(DailyLogRepository.get_all(db_session)) == 1

    def test_rejects_duplicate_cells(self, db_session):
        payload = {
            "sf_tasks": [_task("t1")],
            "sf_logs": [
                {"task_id": "t1", "date": "2026-01-01", "status": "COMPLETED"},
                {"task_id": "t1", "date": "2026-01-01", "status": "MISSED"},
            ],
        }
        with pytest.raises(SnapshotException):
            SnapshotService(db_session).import_snapshot(payload)

    def test_rejects_pending_rows(self, db_session):
        payload = {
            "sf_tasks": [_task("t1")],
            "sf_logs": [{"task_id": "t1", "date": "2026-01-01", "status": "PENDING"}],
        }
        with pytest.raises(SnapshotException):
            SnapshotService(db_session).import_snapshot(payload)

    def test_rejects_malformed_payload(self, db_session):
        with pytest.raises(SnapshotException):
            SnapshotService(db_session).import_snapshot({"sf_tasks": [{"id": "t1"}]})

    def test_rejects_duplicate_task_ids(self, db_session):
        payload = {"sf_tasks": [_task("t1"), _task("t1", name="Again")], "sf_logs": []}
        with pytest.raises(SnapshotException):
            SnapshotService(db_session).import_snapshot(payload)

    def test_failed_import_keeps_existing_data(self, db_session, make_task):
        make_task(name="Keep")
        with pytest.raises(SnapshotException):
            SnapshotService(db_session).import_snapshot({"sf_tasks": "nope"})
        assert [task.name for task in TaskRepository.get_all(db_session)] == ["Keep"]

    @pytest.mark.parametrize("payload", [
        {},
        {"sf_tasks_typo": [_task("t1")], "sf_logs": []},
        {"sf_tasks": [_task("t1")]},
    ])
    def test_missing_slot_keeps_existing_data(self, db_session, make_task, add_logs, day_one, payload):
        kept = make_task(name="Keep")
        add_logs(kept, day_one, ["COMPLETED"])

        with pytest.raises(SnapshotException):
            SnapshotService(db_session).import_snapshot(payload)

        assert [task.name for task in TaskRepository.get_all(db_session)] == ["Keep"]
        assert len(DailyLogRepository.get_all(db_session)) == 1

    def test_empty_slots_clear_everything(self, db_session, make_task, add_logs, day_one):
        task = make_task()
        add_logs(task, day_one, ["COMPLETED"])

        result = SnapshotService(db_session).import_snapshot({"sf_tasks": [], "sf_logs": []})

        assert result.tasks_imported == 0
        assert TaskRepository.get_all(db_session) == []
        assert DailyLogRepository.get_all(db_session) == []

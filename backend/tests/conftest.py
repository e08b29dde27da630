"""
Shared fixtures: in-memory database, sessions and task/log factories.
"""
import os
import tempfile

# Keep app imports away from real files before any backend module loads
os.environ.setdefault("STREAK_FORGE_DATABASE_URL", "sqlite://")
os.environ.setdefault("STREAK_FORGE_LOG_DIR", tempfile.mkdtemp(prefix="streak-forge-logs-"))

import pytest
from datetime import date, datetime, timedelta
from types import SimpleNamespace
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.database import Base
from backend.models import DailyLog, Task


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def today():
    return date(2026, 3, 16)  # a Monday


@pytest.fixture
def day_one():
    return date(2026, 1, 1)


@pytest.fixture
def make_task(db_session):
    """Factory for persisted tasks"""
    def _make_task(name="Workout", multiplier=1, category="Gym", active_days=None,
                   status="active", task_id=None, created_at=None):
        task = Task(
            name=name,
            category=category,
            active_days=active_days if active_days is not None else [0, 1, 2, 3, 4, 5, 6],
            multiplier=multiplier,
            status=status,
            created_at=created_at or datetime(2026, 1, 1, 8, 0, 0)
        )
        if task_id:
            task.id = task_id
        db_session.add(task)
        db_session.commit()
        db_session.refresh(task)
        return task
    return _make_task


@pytest.fixture
def add_logs(db_session):
    """Persist one log per day starting at `start`"""
    def _add_logs(task, start, statuses):
        logs = []
        for offset, status in enumerate(statuses):
            log = DailyLog(task_id=task.id, date=start + timedelta(days=offset), status=status)
            db_session.add(log)
            logs.append(log)
        db_session.commit()
        return logs
    return _add_logs


def plain_task(task_id="t1", name="Read", multiplier=1, category="Study"):
    """Detached task record for engine tests"""
    return SimpleNamespace(id=task_id, name=name, multiplier=multiplier, category=category)


def plain_logs(task_id, start, statuses):
    """Detached daily logs, one per consecutive day"""
    return [
        SimpleNamespace(task_id=task_id, date=start + timedelta(days=offset), status=status)
        for offset, status in enumerate(statuses)
    ]

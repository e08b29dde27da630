from fastapi import FastAPI, Depends, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
import logging
import os
from pathlib import Path
from datetime import date

from backend.database import engine, get_db, Base
from backend import models  # Import all models to register them with Base
from backend.schemas import (
    TaskCreate, TaskUpdate, TaskResponse,
    LogToggleRequest, LogSetRequest, LogResponse, ToggleResponse,
    EngineResponse, BalanceResponse,
    TrackerResponse, DashboardResponse, SnapshotImportResponse
)
from backend.auth import verify_api_key
from backend.exceptions import (
    InvalidLogStatusException, SnapshotException, TaskNotFoundException
)
from backend.services.task_service import TaskService
from backend.services.log_service import LogService
from backend.services.stats_service import StatsService
from backend.services.tracker_service import TrackerService
from backend.services.snapshot_service import SnapshotService
from backend.constants import (
    CORS_ALLOWED_ORIGINS, DEFAULT_LOG_DIRECTORY_DEV, DEFAULT_LOG_DIRECTORY_PROD, DEFAULT_LOG_FILE
)

LOG_DIR = os.getenv("STREAK_FORGE_LOG_DIR", DEFAULT_LOG_DIRECTORY_PROD)
LOG_FILE = os.getenv("STREAK_FORGE_LOG_FILE", DEFAULT_LOG_FILE)

# Create log directory if it doesn't exist (for development)
try:
    Path(LOG_DIR).mkdir(parents=True, exist_ok=True)
    log_path = Path(LOG_DIR) / LOG_FILE
except PermissionError:
    # Fallback to local directory if no permissions for /var/log
    LOG_DIR = DEFAULT_LOG_DIRECTORY_DEV
    Path(LOG_DIR).mkdir(parents=True, exist_ok=True)
    log_path = Path(LOG_DIR) / LOG_FILE

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(log_path),
        logging.StreamHandler()  # Also log to console
    ]
)

logger = logging.getLogger("streak_forge")

# Create database tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Streak Forge API",
    description="Habit streak tracker with a Rest Point economy",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    logger.info(f"Streak Forge API started. Logging to: {log_path}")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down Streak Forge API")

# Health check (no auth required)
@app.get("/")
async def root():
    return {"message": "Streak Forge API", "status": "active"}


# Tasks
@app.get("/api/tasks", response_model=List[TaskResponse], dependencies=[Depends(verify_api_key)])
async def get_tasks(db: Session = Depends(get_db)):
    """Get all tasks"""
    return TaskService(db).get_tasks()

@app.get("/api/tasks/{task_id}", response_model=TaskResponse, dependencies=[Depends(verify_api_key)])
async def get_task(task_id: str, db: Session = Depends(get_db)):
    """Get a specific task"""
    try:
        return TaskService(db).get_task(task_id)
    except TaskNotFoundException:
        raise HTTPException(status_code=404, detail="Task not found")

@app.post("/api/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED, dependencies=[Depends(verify_api_key)])
async def create_task(task: TaskCreate, db: Session = Depends(get_db)):
    """Create a new task"""
    return TaskService(db).create_task(task)

@app.put("/api/tasks/{task_id}", response_model=TaskResponse, dependencies=[Depends(verify_api_key)])
async def update_task(task_id: str, task_update: TaskUpdate, db: Session = Depends(get_db)):
    """Update a task"""
    try:
        return TaskService(db).update_task(task_id, task_update)
    except TaskNotFoundException:
        raise HTTPException(status_code=404, detail="Task not found")

@app.delete("/api/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(verify_api_key)])
async def delete_task(task_id: str, db: Session = Depends(get_db)):
    """Delete a task and all of its logs"""
    try:
        TaskService(db).delete_task(task_id)
    except TaskNotFoundException:
        raise HTTPException(status_code=404, detail="Task not found")


# Daily logs
@app.get("/api/logs", response_model=List[LogResponse], dependencies=[Depends(verify_api_key)])
async def get_logs(start: Optional[date] = None, end: Optional[date] = None, db: Session = Depends(get_db)):
    """Get stored logs, optionally within a date range"""
    return LogService(db).get_logs(start, end)

@app.post("/api/logs/toggle", response_model=ToggleResponse, dependencies=[Depends(verify_api_key)])
async def toggle_log(request: LogToggleRequest, db: Session = Depends(get_db)):
    """Advance a tracker cell to its next status"""
    try:
        return LogService(db).toggle_log(request.task_id, request.date)
    except TaskNotFoundException:
        raise HTTPException(status_code=404, detail="Task not found")

@app.put("/api/logs", response_model=ToggleResponse, dependencies=[Depends(verify_api_key)])
async def set_log(request: LogSetRequest, db: Session = Depends(get_db)):
    """Force a cell status without the rest affordability check"""
    try:
        return LogService(db).set_log_status(request.task_id, request.date, request.status)
    except TaskNotFoundException:
        raise HTTPException(status_code=404, detail="Task not found")
    except InvalidLogStatusException as e:
        raise HTTPException(status_code=400, detail=str(e))


# Derived state
@app.get("/api/engine", response_model=EngineResponse, dependencies=[Depends(verify_api_key)])
async def get_engine_state(db: Session = Depends(get_db)):
    """Replay all logs into streaks, ledger and balance"""
    return LogService(db).compute_state()

@app.get("/api/balance", response_model=BalanceResponse, dependencies=[Depends(verify_api_key)])
async def get_balance(db: Session = Depends(get_db)):
    """Get the current Rest Point balance"""
    return LogService(db).get_balance()

@app.get("/api/tracker", response_model=TrackerResponse, dependencies=[Depends(verify_api_key)])
async def get_tracker(week_of: Optional[date] = None, today: Optional[date] = None, db: Session = Depends(get_db)):
    """Get the weekly tracker grid"""
    return TrackerService(db).get_week(week_of, today)

@app.get("/api/dashboard", response_model=DashboardResponse, dependencies=[Depends(verify_api_key)])
async def get_dashboard(today: Optional[date] = None, db: Session = Depends(get_db)):
    """Get dashboard statistics"""
    return StatsService(db).get_dashboard(today)


# Snapshot
@app.get("/api/snapshot", dependencies=[Depends(verify_api_key)])
async def export_snapshot(db: Session = Depends(get_db)):
    """Export raw tasks and logs"""
    return SnapshotService(db).export_snapshot()

@app.put("/api/snapshot", response_model=SnapshotImportResponse, dependencies=[Depends(verify_api_key)])
async def import_snapshot(payload: Dict[str, Any], db: Session = Depends(get_db)):
    """Replace raw tasks and logs with a snapshot"""
    try:
        return SnapshotService(db).import_snapshot(payload)
    except SnapshotException as e:
        raise HTTPException(status_code=400, detail=str(e))

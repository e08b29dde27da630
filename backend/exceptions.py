"""
Custom exceptions for the habit tracker application.
Provides specific exception types for the service layer; routes map them to HTTP errors.
"""


class StreakForgeException(Exception):
    """Base exception for habit tracker application"""
    pass


class TaskNotFoundException(StreakForgeException):
    """Raised when a task is not found"""
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task with ID {task_id} not found")


class InvalidLogStatusException(StreakForgeException):
    """Raised when a log status is not one of the known outcomes"""
    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Invalid log status: {status}")


class SnapshotException(StreakForgeException):
    """Raised when a snapshot cannot be imported"""
    def __init__(self, message: str):
        super().__init__(f"Snapshot import failed: {message}")

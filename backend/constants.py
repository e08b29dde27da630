"""
Application-wide constants.
Status values, categories, Rest Point economy parameters and config defaults.
"""

# Task lifecycle status
TASK_STATUS_ACTIVE = "active"
TASK_STATUS_PAUSED = "paused"
TASK_STATUSES = (TASK_STATUS_ACTIVE, TASK_STATUS_PAUSED)

# Task categories (closed set)
TASK_CATEGORIES = ("Gym", "Content", "Study", "Health", "Business", "Other")
DEFAULT_CATEGORY = "Other"

# Daily log outcomes. PENDING is never stored: it is the absence of a row.
LOG_STATUS_COMPLETED = "COMPLETED"
LOG_STATUS_MISSED = "MISSED"
LOG_STATUS_REST_USED = "REST_USED"
LOG_STATUS_PENDING = "PENDING"
LOG_STATUSES = (
    LOG_STATUS_COMPLETED,
    LOG_STATUS_MISSED,
    LOG_STATUS_REST_USED,
    LOG_STATUS_PENDING,
)

# Rest Point ledger
TRANSACTION_EARNED = "EARNED"
TRANSACTION_SPENT = "SPENT"

REST_COST_PER_MULTIPLIER = 10

# Milestone schedule: fixed rewards up to 60 days, doubling every 30 days after
MILESTONE_REWARDS = {15: 3, 30: 6, 60: 9}
MILESTONE_DOUBLING_START = 60
MILESTONE_DOUBLING_INTERVAL = 30

# Task input bounds
MULTIPLIER_MIN = 1
MULTIPLIER_MAX = 10
DEFAULT_MULTIPLIER = 1
DEFAULT_ACTIVE_DAYS = [1, 2, 3, 4, 5]  # Mon-Fri

# Dashboard windows
WEEKLY_TREND_DAYS = 7
RP_TREND_DAYS = 14
LEADERBOARD_SIZE = 5

# Snapshot slot names (raw collections, stored verbatim)
SNAPSHOT_TASKS_SLOT = "sf_tasks"
SNAPSHOT_LOGS_SLOT = "sf_logs"

# Config defaults (overridable via environment)
DEFAULT_DATABASE_URL = "sqlite:///./streak_forge.db"
DEFAULT_API_KEY = "your-secret-key-change-me"
DEFAULT_LOG_DIRECTORY_PROD = "/var/log/streak-forge"
DEFAULT_LOG_DIRECTORY_DEV = "./logs"
DEFAULT_LOG_FILE = "app.log"

CORS_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

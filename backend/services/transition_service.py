"""
Tracker cell transitions.
Pending -> Completed -> Rest (if affordable) or Missed -> Missed -> Pending.
"""
from typing import Optional

from backend.services.engine import calculate_rest_cost
from backend.constants import (
    LOG_STATUS_COMPLETED, LOG_STATUS_MISSED, LOG_STATUS_PENDING, LOG_STATUS_REST_USED
)


def can_afford_rest(multiplier: int, balance: int) -> bool:
    """Check whether the balance covers resting a task with this multiplier"""
    return balance >= calculate_rest_cost(multiplier)


def resolve_next_status(current_status: Optional[str], multiplier: int, balance: int) -> str:
    """
    Next status of a (task, date) cell when the user clicks it.

    The balance must come from a replay of the logs as they are *before* this
    transition. A PENDING result means the caller deletes the log row.

    Args:
        current_status: Stored status, or None/PENDING when no row exists
        multiplier: Task multiplier (sets the rest cost)
        balance: Current Rest Point balance

    Returns:
        Next status
    """
    if current_status == LOG_STATUS_COMPLETED:
        if can_afford_rest(multiplier, balance):
            return LOG_STATUS_REST_USED
        return LOG_STATUS_MISSED
    if current_status == LOG_STATUS_REST_USED:
        return LOG_STATUS_MISSED
    if current_status == LOG_STATUS_MISSED:
        return LOG_STATUS_PENDING
    return LOG_STATUS_COMPLETED

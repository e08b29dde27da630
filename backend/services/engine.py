"""
Rest Point engine.
Pure, deterministic replay of daily logs into streak statistics and the Rest Point ledger.

Milestone rewards:
    15  -> +3 RP
    30  -> +6 RP
    60  -> +9 RP
    90  -> +18 RP
    120 -> +36 RP
    150 -> +72 RP
    After 60 the reward doubles every 30 days; any other streak length earns nothing.

Resting costs 10 RP per multiplier point, keeps the streak alive and does not extend it.
"""
import logging
from typing import Dict, Iterable, List

from backend.schemas import EngineResponse, RestTransaction, StreakInfo
from backend.constants import (
    LOG_STATUS_COMPLETED, LOG_STATUS_MISSED, LOG_STATUS_REST_USED,
    MILESTONE_DOUBLING_INTERVAL, MILESTONE_DOUBLING_START, MILESTONE_REWARDS,
    REST_COST_PER_MULTIPLIER, TRANSACTION_EARNED, TRANSACTION_SPENT
)

logger = logging.getLogger("streak_forge.engine")


def calculate_milestone_reward(streak: int) -> int:
    """
    Reward earned when a streak reaches the given length.

    Args:
        streak: Streak length right after a completion

    Returns:
        Rest Points awarded (0 when the length is not a milestone)
    """
    if streak in MILESTONE_REWARDS:
        return MILESTONE_REWARDS[streak]
    if streak > MILESTONE_DOUBLING_START and streak % MILESTONE_DOUBLING_INTERVAL == 0:
        steps = (streak - MILESTONE_DOUBLING_START) // MILESTONE_DOUBLING_INTERVAL
        return MILESTONE_REWARDS[MILESTONE_DOUBLING_START] * 2 ** steps
    return 0


def calculate_rest_cost(multiplier: int) -> int:
    """Rest Points needed to rest a task of the given importance"""
    return REST_COST_PER_MULTIPLIER * multiplier


def compute_engine(tasks: Iterable, logs: Iterable) -> EngineResponse:
    """
    Rebuild streaks, the transaction ledger and the balance from scratch.

    Tasks need `id`, `name` and `multiplier`; logs need `task_id`, `date` and
    `status`. ORM rows and schema objects both work. Inputs are only read.

    Logs are replayed in ascending date order (stable, so same-day logs keep
    their input order). Logs whose task no longer exists are skipped.

    Args:
        tasks: All task definitions
        logs: All daily logs, in any order

    Returns:
        EngineResponse with per-task streaks, chronological ledger and balance
    """
    tasks_by_id = {}
    streaks: Dict[str, StreakInfo] = {}
    for task in tasks:
        tasks_by_id[task.id] = task
        streaks[task.id] = StreakInfo(task_id=task.id)

    transactions: List[RestTransaction] = []
    balance = 0

    for log in sorted(logs, key=lambda entry: entry.date):
        task = tasks_by_id.get(log.task_id)
        if task is None:
            logger.debug(f"Skipping orphan log for task {log.task_id} on {log.date}")
            continue

        streak = streaks[task.id]
        day = log.date.isoformat()

        if log.status == LOG_STATUS_COMPLETED:
            streak.current_streak += 1
            streak.total_completed += 1
            if streak.current_streak > streak.longest_streak:
                streak.longest_streak = streak.current_streak

            reward = calculate_milestone_reward(streak.current_streak)
            if reward > 0:
                transactions.append(RestTransaction(
                    id=f"earn-{task.id}-{day}",
                    amount=reward,
                    type=TRANSACTION_EARNED,
                    reason=f"Milestone: {streak.current_streak} day streak ({task.name})",
                    date=log.date
                ))
                balance += reward

        elif log.status == LOG_STATUS_REST_USED:
            streak.total_rest_used += 1
            cost = calculate_rest_cost(task.multiplier)
            transactions.append(RestTransaction(
                id=f"spend-{task.id}-{day}",
                amount=cost,
                type=TRANSACTION_SPENT,
                reason=f"Rest usage: {task.name}",
                date=log.date
            ))
            balance -= cost

        elif log.status == LOG_STATUS_MISSED:
            streak.total_missed += 1
            streak.current_streak = 0

    return EngineResponse(streaks=streaks, transactions=transactions, balance=balance)


def summarize_ledger(transactions: Iterable[RestTransaction]) -> tuple[int, int]:
    """Total earned and total spent across a ledger"""
    earned = 0
    spent = 0
    for transaction in transactions:
        if transaction.type == TRANSACTION_EARNED:
            earned += transaction.amount
        else:
            spent += transaction.amount
    return earned, spent

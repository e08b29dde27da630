"""
Dashboard statistics service.
Read-only figures and chart series derived from the replayed engine state.
"""
from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from backend.models import DailyLog, Task
from backend.schemas import (
    CategoryCount, CompletionTrendPoint, DashboardResponse, EngineResponse,
    LeaderboardEntry, RestPointTrendPoint
)
from backend.repositories.task_repository import TaskRepository
from backend.repositories.log_repository import DailyLogRepository
from backend.services.date_service import DateService
from backend.services.engine import compute_engine, summarize_ledger
from backend.constants import (
    LEADERBOARD_SIZE, LOG_STATUS_COMPLETED, RP_TREND_DAYS,
    TRANSACTION_EARNED, TRANSACTION_SPENT, WEEKLY_TREND_DAYS
)


class StatsService:
    """Service for dashboard statistics"""

    def __init__(self, db: Session):
        self.db = db
        self.task_repo = TaskRepository()
        self.log_repo = DailyLogRepository()
        self.date_service = DateService()

    def get_dashboard(self, today: Optional[date] = None) -> DashboardResponse:
        """
        Build the dashboard for the given day.

        Args:
            today: Last day of the trend windows (defaults to today)

        Returns:
            Dashboard figures, category split, trends and leaderboard
        """
        today = today or self.date_service.today()
        tasks = self.task_repo.get_all(self.db)
        logs = self.log_repo.get_all(self.db)
        state = compute_engine(tasks, logs)
        earned, spent = summarize_ledger(state.transactions)

        return DashboardResponse(
            total_rp=state.balance,
            earned_rp=earned,
            spent_rp=spent,
            completion_rate=self.completion_rate(logs),
            productivity_score=self.productivity_score(tasks, state),
            hottest_streak=max((s.current_streak for s in state.streaks.values()), default=0),
            category_breakdown=self.category_breakdown(tasks, state),
            weekly_trend=self.weekly_trend(logs, today),
            rp_trend=self.rest_point_trend(state, today),
            leaderboard=self.leaderboard(tasks, state)
        )

    @staticmethod
    def completion_rate(logs: Sequence[DailyLog]) -> float:
        """Percentage of logged outcomes that are completions"""
        if not logs:
            return 0.0
        completed = sum(1 for log in logs if log.status == LOG_STATUS_COMPLETED)
        return completed / len(logs) * 100

    @staticmethod
    def productivity_score(tasks: Sequence[Task], state: EngineResponse) -> int:
        """Completions weighted by task importance"""
        return sum(
            state.streaks[task.id].total_completed * task.multiplier
            for task in tasks
        )

    @staticmethod
    def category_breakdown(tasks: Sequence[Task], state: EngineResponse) -> List[CategoryCount]:
        """Lifetime completions per category, in order of first appearance"""
        counts: Dict[str, int] = {}
        for task in tasks:
            counts[task.category] = counts.get(task.category, 0) + state.streaks[task.id].total_completed
        return [CategoryCount(name=name, value=value) for name, value in counts.items()]

    def weekly_trend(self, logs: Sequence[DailyLog], today: date) -> List[CompletionTrendPoint]:
        """Completions per day over the last week"""
        completed_per_day: Dict[date, int] = defaultdict(int)
        for log in logs:
            if log.status == LOG_STATUS_COMPLETED:
                completed_per_day[log.date] += 1

        return [
            CompletionTrendPoint(
                date=day,
                label=self.date_service.short_weekday(day),
                completed=completed_per_day[day]
            )
            for day in self.date_service.last_n_days(WEEKLY_TREND_DAYS, today)
        ]

    def rest_point_trend(self, state: EngineResponse, today: date) -> List[RestPointTrendPoint]:
        """Rest Points earned and spent per day over the last two weeks"""
        earned: Dict[date, int] = defaultdict(int)
        spent: Dict[date, int] = defaultdict(int)
        for transaction in state.transactions:
            if transaction.type == TRANSACTION_EARNED:
                earned[transaction.date] += transaction.amount
            elif transaction.type == TRANSACTION_SPENT:
                spent[transaction.date] += transaction.amount

        return [
            RestPointTrendPoint(
                date=day,
                label=self.date_service.short_month_day(day),
                earned=earned[day],
                spent=spent[day]
            )
            for day in self.date_service.last_n_days(RP_TREND_DAYS, today)
        ]

    @staticmethod
    def leaderboard(tasks: Sequence[Task], state: EngineResponse) -> List[LeaderboardEntry]:
        """Top tasks by current streak"""
        ranked = sorted(tasks, key=lambda task: state.streaks[task.id].current_streak, reverse=True)
        return [
            LeaderboardEntry(
                task_id=task.id,
                name=task.name,
                streak=state.streaks[task.id].current_streak,
                longest=state.streaks[task.id].longest_streak
            )
            for task in ranked[:LEADERBOARD_SIZE]
        ]

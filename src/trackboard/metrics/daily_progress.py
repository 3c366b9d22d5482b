"""
Daily Progress Aggregator

Per-calendar-day completed points and task counts within one sprint.

Weekends get buckets too: completions can be logged on any day, so a task
finished on a Saturday shows up on the Saturday. The burndown ideal line
stays flat over the same weekend.

Usage:
    aggregator = DailyProgressAggregator()
    series = aggregator.aggregate(sprint)
    per_dev = aggregator.developer_daily_points(sprint)
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from trackboard.models import Sprint
from trackboard.metrics.base import (
    MetricsCalculatorBase,
    coerce_points,
    completion_date,
    degrade_to,
    round_points,
)
from trackboard.metrics.calendar import enumerate_days


@dataclass(frozen=True)
class DailyProgressPoint:
    date: date
    points: float
    tasks_completed: int

    @property
    def label(self) -> str:
        return self.date.strftime("%m/%d")


@dataclass
class DeveloperDailyRow:
    """Points each developer completed on one day."""
    date: date
    points: Dict[str, float] = field(default_factory=dict)


class DailyProgressAggregator(MetricsCalculatorBase):
    """Buckets Done tasks of a sprint by completion day."""

    def run(self, sprint: Sprint) -> List[DailyProgressPoint]:
        return self.aggregate(sprint)

    @degrade_to(list)
    def aggregate(self, sprint: Optional[Sprint]) -> List[DailyProgressPoint]:
        """
        Aggregate completed work per day.

        Returns:
            One point per calendar day of the sprint in chronological order;
            empty when the sprint dates are missing or invalid
        """
        if sprint is None:
            return []
        days = enumerate_days(sprint.start_date, sprint.end_date)
        if not days:
            self.logger.debug("daily_progress_empty", sprint=sprint.sprint_number)
            return []

        points = {day: 0.0 for day in days}
        counts = {day: 0 for day in days}

        for task in sprint.all_tasks:
            completed = completion_date(task)
            if completed not in points:
                continue
            points[completed] += coerce_points(task.story_points)
            counts[completed] += 1

        return [
            DailyProgressPoint(date=day, points=round_points(points[day]), tasks_completed=counts[day])
            for day in days
        ]

    @degrade_to(list)
    def developer_daily_points(self, sprint: Optional[Sprint]) -> List[DeveloperDailyRow]:
        """
        Completed points per developer per day.

        Only days with at least one completion get a row; every row carries
        every developer seen in the sprint, with 0 for idle days.
        """
        if sprint is None:
            return []
        days = enumerate_days(sprint.start_date, sprint.end_date)
        if not days:
            return []
        in_range = set(days)

        by_day: Dict[date, Dict[str, float]] = {}
        developers: List[str] = []
        for task in sprint.all_tasks:
            completed = completion_date(task)
            if completed not in in_range or not task.assignee:
                continue
            if task.assignee not in developers:
                developers.append(task.assignee)
            bucket = by_day.setdefault(completed, {})
            bucket[task.assignee] = bucket.get(task.assignee, 0.0) + coerce_points(task.story_points)

        rows = []
        for day in sorted(by_day):
            rows.append(DeveloperDailyRow(
                date=day,
                points={dev: round_points(by_day[day].get(dev, 0.0)) for dev in developers},
            ))
        return rows

"""
Burndown Projector

Computes the ideal and actual remaining-points series for one sprint.

Ideal line:
- Total points are burned evenly between the first and last working day
- Weekends repeat the most recent working-day value
- The last working day is pinned to exactly 0 to absorb rounding drift

Actual line:
- Starts at the total and drops by the points of tasks completed each day
- Stops (no value) after min(now, sprint end) so the line never flattens
  at a level that has not been observed yet

Usage:
    projector = BurndownProjector()
    series = projector.project(sprint, now=date.today())
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from trackboard.models import Sprint, Task
from trackboard.metrics.base import (
    MetricsCalculatorBase,
    coerce_points,
    completion_date,
    degrade_to,
    round_points,
    sum_points,
)
from trackboard.metrics.calendar import enumerate_days, is_working_day, parse_date


@dataclass(frozen=True)
class BurndownPoint:
    """One calendar day of a burndown chart."""
    date: date
    ideal: float
    actual: Optional[float]  # None after the cutoff day

    @property
    def label(self) -> str:
        return self.date.strftime("%m/%d")


class BurndownProjector(MetricsCalculatorBase):
    """
    Projects remaining work for a single sprint.

    ``now`` is always supplied by the caller; the projector never reads a
    clock, so the same inputs always produce the same series.
    """

    def run(self, sprint: Sprint, now: Any) -> List[BurndownPoint]:
        return self.project(sprint, now)

    @degrade_to(list)
    def project(self, sprint: Optional[Sprint], now: Any) -> List[BurndownPoint]:
        """
        Build the burndown series for a sprint.

        Args:
            sprint: Sprint whose new and spillover tasks are burned down
            now: Current date (or datetime) supplied by the host application

        Returns:
            One point per calendar day of the sprint, or an empty list when
            the sprint has unusable dates, no points or no working days
        """
        if sprint is None:
            return []
        return self.project_tasks(sprint.start_date, sprint.end_date, sprint.all_tasks, now)

    @degrade_to(list)
    def project_tasks(
        self,
        start: Any,
        end: Any,
        tasks: List[Task],
        now: Any,
    ) -> List[BurndownPoint]:
        """Build the burndown series from a raw date range and task list."""
        sprint_start = parse_date(start)
        sprint_end = parse_date(end)
        today = parse_date(now)
        if sprint_start is None or sprint_end is None or today is None:
            self.logger.debug("burndown_empty", reason="invalid_dates")
            return []

        total_points = sum_points(tasks)
        if total_points <= 0:
            self.logger.debug("burndown_empty", reason="no_points")
            return []

        days = enumerate_days(sprint_start, sprint_end)
        working = [day for day in days if is_working_day(day)]
        if not working:
            self.logger.debug("burndown_empty", reason="no_working_days")
            return []

        ideal = self._ideal_line(days, working, total_points)
        actual = self._actual_line(days, tasks, total_points, cutoff=min(today, sprint_end))

        return [
            BurndownPoint(date=day, ideal=ideal_value, actual=actual_value)
            for day, ideal_value, actual_value in zip(days, ideal, actual)
        ]

    def _ideal_line(
        self,
        days: List[date],
        working: List[date],
        total_points: float,
    ) -> List[float]:
        # The line reaches 0 on the last working day, so the points are spread
        # over the gaps between working days
        per_working_day = total_points / max(1, len(working) - 1)
        last_working_day = working[-1]

        values: List[float] = []
        remaining = total_points
        last_emitted: Optional[float] = None

        for day in days:
            if day >= last_working_day:
                # Pinned: no drift past the final working day
                values.append(0.0)
            elif is_working_day(day):
                last_emitted = round_points(max(0.0, remaining))
                values.append(last_emitted)
                remaining -= per_working_day
            else:
                values.append(total_points if last_emitted is None else last_emitted)

        return values

    def _actual_line(
        self,
        days: List[date],
        tasks: List[Task],
        total_points: float,
        cutoff: date,
    ) -> List[Optional[float]]:
        burned_by_day: Dict[date, float] = {}
        for task in tasks:
            completed = completion_date(task)
            if completed is None:
                continue
            burned_by_day[completed] = burned_by_day.get(completed, 0.0) + coerce_points(task.story_points)

        values: List[Optional[float]] = []
        remaining = total_points
        for day in days:
            if day > cutoff:
                values.append(None)
                continue
            remaining = max(0.0, remaining - burned_by_day.get(day, 0.0))
            values.append(round_points(remaining))

        return values

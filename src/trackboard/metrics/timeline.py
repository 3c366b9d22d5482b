"""
Sprint timeline: per-task development bars positioned on the sprint's day axis.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from trackboard.models import Task
from trackboard.metrics.base import MetricsCalculatorBase, degrade_to
from trackboard.metrics.calendar import add_working_days, parse_date, parse_estimated_time_to_days


@dataclass(frozen=True)
class TimelineBar:
    task_id: str
    description: str
    assignee: Optional[str]
    status: Optional[str]
    start_index: int
    end_index: int  # exclusive

    @property
    def length(self) -> int:
        return self.end_index - self.start_index


class SprintTimelineBuilder(MetricsCalculatorBase):
    """
    Lays out task bars for the sprint timeline chart.

    A bar starts on the task's ``startDate`` and covers ``devEstimatedTime``
    working days, skipping weekends. Indices count calendar days from the
    sprint start; bars starting before the sprint are clamped to day 0.
    """

    def run(self, tasks: Sequence[Task], sprint_start: Any, sprint_end: Any) -> List[TimelineBar]:
        return self.task_timeline(tasks, sprint_start, sprint_end)

    @degrade_to(list)
    def task_timeline(self, tasks: Sequence[Task], sprint_start: Any, sprint_end: Any) -> List[TimelineBar]:
        start = parse_date(sprint_start)
        end = parse_date(sprint_end)
        if not tasks or start is None or end is None:
            return []

        bars = []
        for task in tasks:
            task_start = parse_date(task.start_date)
            dev_days = parse_estimated_time_to_days(task.dev_estimated_time)
            if task_start is None or dev_days is None:
                continue

            dev_end = add_working_days(task_start, dev_days)
            end_index = (dev_end - start).days + 1
            if end_index <= 0:
                # Finished before the sprint began
                continue

            bars.append(TimelineBar(
                task_id=task.id,
                description=task.description,
                assignee=task.assignee,
                status=task.status,
                start_index=max(0, (task_start - start).days),
                end_index=end_index,
            ))
        return bars

"""
Sprint statistics: point totals recorded on sprint transitions and bug figures.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from trackboard.models import SEVERITIES, Sprint, SprintStatus
from trackboard.metrics.base import MetricsCalculatorBase, degrade_to, round_points, sum_points

BUG_TASK_TYPE = "Bug"


@dataclass(frozen=True)
class BugCountEntry:
    sprint_number: int
    sprint_label: str
    bugs: int


@dataclass
class BugSeverityBreakdown:
    total_tasks: int = 0
    total_bugs: int = 0
    bug_percentage: int = 0
    by_severity: Dict[str, int] = field(default_factory=lambda: {s: 0 for s in SEVERITIES})


class SprintStatsCalculator(MetricsCalculatorBase):

    ELIGIBLE_STATUSES = (SprintStatus.ACTIVE.value, SprintStatus.COMPLETED.value)

    def run(self, sprint: Sprint) -> float:
        return self.completed_points(sprint)

    @degrade_to(float)
    def committed_points(self, sprint: Optional[Sprint]) -> float:
        """Points planned into the sprint, new and spillover tasks together."""
        if sprint is None:
            return 0.0
        return round_points(sum_points(sprint.all_tasks))

    @degrade_to(float)
    def completed_points(self, sprint: Optional[Sprint]) -> float:
        """Points of Done tasks, recorded when the sprint is closed."""
        if sprint is None:
            return 0.0
        return round_points(sum_points(t for t in sprint.all_tasks if t.is_done))

    @degrade_to(list)
    def bug_counts(self, sprints: Sequence[Sprint]) -> List[BugCountEntry]:
        """Bug tasks per numbered Active/Completed sprint, in input order."""
        return [
            BugCountEntry(
                sprint_number=sprint.sprint_number,
                sprint_label=sprint.label,
                bugs=sum(1 for task in sprint.all_tasks if task.task_type == BUG_TASK_TYPE),
            )
            for sprint in sprints or []
            if sprint.status in self.ELIGIBLE_STATUSES and sprint.sprint_number is not None
        ]

    @degrade_to(BugSeverityBreakdown)
    def bug_severity(self, sprint: Optional[Sprint]) -> BugSeverityBreakdown:
        """
        Severity distribution of bugs among the sprint's new tasks.

        Spillover tasks are not counted; their bugs belong to the sprint
        they were planned in. Bugs without a recognized severity count
        toward the bug total only.
        """
        breakdown = BugSeverityBreakdown()
        if sprint is None:
            return breakdown

        tasks = sprint.planning.new_tasks
        breakdown.total_tasks = len(tasks)
        for task in tasks:
            if task.task_type != BUG_TASK_TYPE:
                continue
            breakdown.total_bugs += 1
            if task.severity in breakdown.by_severity:
                breakdown.by_severity[task.severity] += 1

        if breakdown.total_tasks:
            breakdown.bug_percentage = round(breakdown.total_bugs / breakdown.total_tasks * 100)
        return breakdown

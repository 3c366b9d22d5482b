"""
Contribution Aggregator

Per-developer completed story points, in three views:
- developer_trend: one developer across the last N completed sprints
- sprint_breakdown: every Software Engineer in one sprint, split by task type
- team_trend: every Software Engineer across the last N completed sprints

Each view reports an explicit status so the caller can tell "no sprints",
"no such developer", "no engineers" and "nothing completed" apart; the
rows are empty in every non-OK state.

Usage:
    aggregator = ContributionAggregator()
    result = aggregator.developer_trend(project.sprints, project.members, member_id)
    if result.status is ContributionStatus.OK:
        render(result.rows)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from trackboard.models import Member, Sprint, SprintStatus
from trackboard.metrics.base import MetricsCalculatorBase, coerce_points, degrade_to, parse_points, round_points


class ContributionStatus(str, Enum):
    OK = "ok"
    NO_SPRINTS = "no_sprints"
    NO_DEVELOPER = "no_developer"
    NO_ENGINEERS = "no_engineers"
    NO_CONTRIBUTION = "no_contribution"


@dataclass
class ContributionResult:
    """Rows for one contribution chart plus the state that produced them."""
    status: ContributionStatus
    rows: List[Dict[str, Any]] = field(default_factory=list)
    # Numeric columns present in every row, in first-seen order
    series: List[str] = field(default_factory=list)
    message: str = ""

    @property
    def is_empty(self) -> bool:
        return self.status is not ContributionStatus.OK


def _empty(status: ContributionStatus, message: str) -> ContributionResult:
    return ContributionResult(status=status, message=message)


class ContributionAggregator(MetricsCalculatorBase):
    """Aggregates completed points by developer."""

    COMPLETED = SprintStatus.COMPLETED.value

    def run(self, sprints: Sequence[Sprint], members: Sequence[Member], developer_id: str) -> ContributionResult:
        return self.developer_trend(sprints, members, developer_id)

    def _engineers(self, members: Sequence[Member]) -> List[Member]:
        return [m for m in members or [] if m.role == self.settings.ENGINEER_ROLE and m.name]

    def _recent_completed(self, sprints: Sequence[Sprint], window: Optional[int]) -> List[Sprint]:
        limit = self.settings.CONTRIBUTION_SPRINT_WINDOW if window is None else window
        return self.latest_sprints(sprints or [], (self.COMPLETED,), limit)

    @degrade_to(lambda: _empty(ContributionStatus.NO_SPRINTS, "Contribution data unavailable."))
    def developer_trend(
        self,
        sprints: Sequence[Sprint],
        members: Sequence[Member],
        developer_id: str,
        window: Optional[int] = None,
    ) -> ContributionResult:
        """
        Completed points of one developer per recent completed sprint.

        Tasks are matched on the developer's display name, which is what
        the task ``assignee`` field stores.

        Args:
            sprints: All sprints of the project
            members: Project members used to resolve ``developer_id``
            developer_id: Member id of the developer
            window: Number of completed sprints; defaults to CONTRIBUTION_SPRINT_WINDOW

        Returns:
            Rows ``{"sprint": label, "sprint_number": n, "points": x}``
        """
        recent = self._recent_completed(sprints, window)
        if not recent:
            return _empty(ContributionStatus.NO_SPRINTS, "No completed sprints to display.")

        developer = next((m for m in members or [] if m.id == developer_id), None)
        if developer is None:
            return _empty(ContributionStatus.NO_DEVELOPER, f"Developer with ID {developer_id} not found.")

        rows = []
        for sprint in recent:
            points = sum(
                coerce_points(task.story_points)
                for task in sprint.all_tasks
                if task.is_done and task.assignee == developer.name
            )
            rows.append({
                "sprint": sprint.label,
                "sprint_number": sprint.sprint_number,
                "points": round_points(points),
            })

        if all(row["points"] == 0 for row in rows):
            return _empty(
                ContributionStatus.NO_CONTRIBUTION,
                f"No completed story points by {developer.name} in the last {len(recent)} completed sprints.",
            )

        return ContributionResult(status=ContributionStatus.OK, rows=rows, series=["points"])

    @degrade_to(lambda: _empty(ContributionStatus.NO_SPRINTS, "Contribution data unavailable."))
    def sprint_breakdown(
        self,
        sprint: Optional[Sprint],
        members: Sequence[Member],
    ) -> ContributionResult:
        """
        Completed points of every Software Engineer in one sprint, by task type.

        Task-type columns are created as types are encountered, so custom
        types surface without configuration. Done tasks whose assignee is
        not a Software Engineer, or whose story points are not a number,
        are left out.

        Returns:
            Rows ``{"developer": name, <task type>: points, ...}``, one per engineer
        """
        if sprint is None:
            return _empty(ContributionStatus.NO_SPRINTS, "No sprint selected.")

        engineers = self._engineers(members)
        if not engineers:
            return _empty(ContributionStatus.NO_ENGINEERS, "No Software Engineers found in the project.")

        totals: Dict[str, Dict[str, float]] = {member.name: {} for member in engineers}
        task_types: List[str] = []
        for task in sprint.all_tasks:
            if not task.is_done or task.assignee not in totals:
                continue
            if parse_points(task.story_points) is None:
                continue
            task_type = task.task_type or self.settings.DEFAULT_TASK_TYPE
            if task_type not in task_types:
                task_types.append(task_type)
            bucket = totals[task.assignee]
            bucket[task_type] = bucket.get(task_type, 0.0) + coerce_points(task.story_points)

        rows = []
        for member in engineers:
            row: Dict[str, Any] = {"developer": member.name}
            for task_type in task_types:
                row[task_type] = round_points(totals[member.name].get(task_type, 0.0))
            rows.append(row)

        if all(row[t] == 0 for row in rows for t in task_types):
            return _empty(
                ContributionStatus.NO_CONTRIBUTION,
                f"No completed story points by developers in {sprint.label}.",
            )

        return ContributionResult(status=ContributionStatus.OK, rows=rows, series=task_types)

    @degrade_to(lambda: _empty(ContributionStatus.NO_SPRINTS, "Contribution data unavailable."))
    def team_trend(
        self,
        sprints: Sequence[Sprint],
        members: Sequence[Member],
        window: Optional[int] = None,
    ) -> ContributionResult:
        """
        Completed points of every Software Engineer per recent completed sprint.

        Returns:
            Rows ``{"sprint": label, "sprint_number": n, <engineer>: points, ...}``
        """
        engineers = self._engineers(members)
        if not engineers:
            return _empty(ContributionStatus.NO_ENGINEERS, "No Software Engineers found in the project.")

        recent = self._recent_completed(sprints, window)
        if not recent:
            return _empty(ContributionStatus.NO_SPRINTS, "No completed sprints to display.")

        names = [member.name for member in engineers]
        rows = []
        for sprint in recent:
            totals = {name: 0.0 for name in names}
            for task in sprint.all_tasks:
                if task.is_done and task.assignee in totals:
                    totals[task.assignee] += coerce_points(task.story_points)
            row: Dict[str, Any] = {"sprint": sprint.label, "sprint_number": sprint.sprint_number}
            row.update({name: round_points(points) for name, points in totals.items()})
            rows.append(row)

        if all(row[name] == 0 for row in rows for name in names):
            return _empty(
                ContributionStatus.NO_CONTRIBUTION,
                f"No completed story points by developers in the last {len(recent)} completed sprints.",
            )

        return ContributionResult(status=ContributionStatus.OK, rows=rows, series=names)

"""
Velocity Calculator

Tracks committed vs. completed story points across recent sprints.

Metrics Tracked:
- Committed points (new tasks planned into the sprint)
- Completed points (new tasks marked Done)

Spillover tasks are excluded on both sides so carried-over work is not
counted twice across consecutive sprints.

Usage:
    calculator = VelocityCalculator()
    series = calculator.calculate_velocity(project.sprints)
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from trackboard.models import Sprint, SprintStatus
from trackboard.metrics.base import MetricsCalculatorBase, degrade_to, round_points, sum_points


@dataclass(frozen=True)
class VelocityEntry:
    """Velocity figures for one sprint."""
    sprint_number: int
    sprint_label: str
    committed: float
    completed: float


class VelocityCalculator(MetricsCalculatorBase):
    """
    Aggregates committed vs. completed points per sprint.

    Only Active and Completed sprints count; Planned sprints have not
    produced any throughput yet.
    """

    ELIGIBLE_STATUSES = (SprintStatus.ACTIVE.value, SprintStatus.COMPLETED.value)

    def run(self, sprints: Sequence[Sprint]) -> List[VelocityEntry]:
        return self.calculate_velocity(sprints)

    @degrade_to(list)
    def calculate_velocity(
        self,
        sprints: Sequence[Sprint],
        window: Optional[int] = None,
    ) -> List[VelocityEntry]:
        """
        Calculate the velocity series for a project.

        Args:
            sprints: All sprints of the project, any order
            window: Maximum number of sprints; defaults to VELOCITY_SPRINT_WINDOW

        Returns:
            Entries in ascending sprint order, empty when no sprint qualifies
        """
        limit = self.settings.VELOCITY_SPRINT_WINDOW if window is None else window
        recent = self.latest_sprints(sprints or [], self.ELIGIBLE_STATUSES, limit)

        entries = []
        for sprint in recent:
            new_tasks = sprint.planning.new_tasks
            entries.append(VelocityEntry(
                sprint_number=sprint.sprint_number,
                sprint_label=sprint.label,
                committed=round_points(sum_points(new_tasks)),
                completed=round_points(sum_points(t for t in new_tasks if t.is_done)),
            ))

        if not entries:
            self.logger.debug("velocity_empty", sprint_count=len(sprints or []))
        return entries

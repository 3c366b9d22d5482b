"""
Priority Rebalancer

Relabels backlog priorities after a manual reorder.

The backlog arrives in its final order (the drag interaction is finished by
the time this runs). The list is cut into ceil(count / P) sized chunks for
P priority labels; the first chunk gets the highest label and any remainder
lands in the last chunk used. Items are never reordered, only relabeled.

Example (12 items, 5 labels):
    chunk size 3 -> Highest x3, High x3, Medium x3, Low x3, Lowest unused

Usage:
    rebalancer = PriorityRebalancer()
    backlog = rebalancer.rebalance(reordered_backlog)
"""

import math
import re
from datetime import date
from typing import Dict, List, Optional, Sequence

from trackboard.models import TASK_PRIORITIES, Task
from trackboard.metrics.base import MetricsCalculatorBase, degrade_to


class PriorityRebalancer(MetricsCalculatorBase):
    """Assigns priority tiers from backlog position."""

    def run(self, items: Sequence[Task]) -> List[Task]:
        return self.rebalance(items)

    @staticmethod
    def priority_for_position(index: int, count: int, priorities: Sequence[str]) -> Optional[str]:
        """
        Label for the item at ``index`` in a backlog of ``count`` items.

        None when there are no labels; out-of-range positions are clamped.
        """
        if not priorities:
            return None
        if count <= 0:
            return priorities[0]
        index = max(0, min(index, count - 1))
        chunk_size = math.ceil(count / len(priorities))
        return priorities[min(index // chunk_size, len(priorities) - 1)]

    @degrade_to(list)
    def rebalance(
        self,
        items: Sequence[Task],
        priorities: Optional[Sequence[str]] = None,
    ) -> List[Task]:
        """
        Rewrite ``priority`` on every item according to its position.

        Args:
            items: Backlog in its new manual order
            priorities: Ordered labels, highest first; defaults to TASK_PRIORITIES

        Returns:
            New Task objects in the same order, identical except for ``priority``
        """
        labels = list(priorities) if priorities is not None else list(TASK_PRIORITIES)
        items = list(items or [])
        if not labels:
            self.logger.debug("rebalance_skipped", reason="no_priorities")
            return [item.model_copy() for item in items]

        count = len(items)
        return [
            item.model_copy(update={"priority": self.priority_for_position(index, count, labels)})
            for index, item in enumerate(items)
        ]

    @degrade_to(list)
    def sort_by_priority(
        self,
        items: Sequence[Task],
        priorities: Optional[Sequence[str]] = None,
    ) -> List[Task]:
        """
        Order a backlog by priority rank, keeping relative order within a tier.

        Missing or unknown labels rank as DEFAULT_PRIORITY.
        """
        labels = list(priorities) if priorities is not None else list(TASK_PRIORITIES)
        rank: Dict[str, int] = {label: position for position, label in enumerate(labels)}
        default_rank = rank.get(self.settings.DEFAULT_PRIORITY, len(labels))
        return sorted(items or [], key=lambda item: rank.get(item.priority, default_rank))

    @degrade_to(lambda: "")
    def next_backlog_id(self, items: Sequence[Task], today: date) -> str:
        """
        Next free backlog id for the year of ``today``.

        Ids look like ``BL-240012``: prefix, two-digit year and a four-digit
        sequence. Suffixed ids such as ``BL-240012-a`` count toward their
        base number; ids from other years are ignored.
        """
        prefix = f"{self.settings.BACKLOG_ID_PREFIX}-{today.year % 100:02d}"
        pattern = re.compile(rf"^{re.escape(prefix)}(\d{{4}})(?:-.*)?$")

        highest = 0
        for item in items or []:
            match = pattern.match(item.backlog_id or "")
            if match:
                highest = max(highest, int(match.group(1)))

        return f"{prefix}{highest + 1:04d}"

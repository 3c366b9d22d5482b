"""
Trackboard - Metrics Engine

Pure, deterministic calculators that turn project records into chart
series and tables:

Core:
- BurndownProjector: Ideal vs. actual remaining points for one sprint
- VelocityCalculator: Committed vs. completed points per recent sprint
- DailyProgressAggregator: Completed points and tasks per calendar day
- ContributionAggregator: Completed points per developer
- PriorityRebalancer: Priority labels from manual backlog order
- RiskScorer: Risk scores and likelihood x impact heat map

Supporting:
- SprintStatsCalculator: Sprint point totals and bug figures
- SprintTimelineBuilder: Task bars for the sprint timeline
- calendar: Working-day arithmetic shared by the calculators
"""

from .burndown import BurndownPoint, BurndownProjector
from .velocity import VelocityCalculator, VelocityEntry
from .daily_progress import DailyProgressAggregator, DailyProgressPoint, DeveloperDailyRow
from .contribution import ContributionAggregator, ContributionResult, ContributionStatus
from .priority import PriorityRebalancer
from .risk import RiskCell, RiskMatrix, RiskScorer, RiskSummary
from .sprint_stats import BugCountEntry, BugSeverityBreakdown, SprintStatsCalculator
from .timeline import SprintTimelineBuilder, TimelineBar

__all__ = [
    # Core
    "BurndownProjector",
    "BurndownPoint",
    "VelocityCalculator",
    "VelocityEntry",
    "DailyProgressAggregator",
    "DailyProgressPoint",
    "DeveloperDailyRow",
    "ContributionAggregator",
    "ContributionResult",
    "ContributionStatus",
    "PriorityRebalancer",
    "RiskScorer",
    "RiskMatrix",
    "RiskCell",
    "RiskSummary",
    # Supporting
    "SprintStatsCalculator",
    "BugCountEntry",
    "BugSeverityBreakdown",
    "SprintTimelineBuilder",
    "TimelineBar",
]

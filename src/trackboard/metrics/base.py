"""
Base class for the metrics calculators.

Provides configuration access, logging, story-point coercion and the
degrade-don't-raise guard shared by every calculator.
"""

import functools
import math
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Callable, Iterable, List, Optional

from trackboard.models import Task
from trackboard.platform.config import Settings, get_settings
from trackboard.platform.logging import get_logger
from trackboard.metrics.calendar import parse_date


logger = get_logger(__name__)


def parse_points(value: Any) -> Optional[float]:
    """Numeric value of a story-point field; None when it is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        points = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(points):
        return None
    return points


def coerce_points(value: Any) -> float:
    """
    Read a story-point value for aggregation.

    Numbers and numeric strings are accepted; anything non-numeric,
    negative, NaN or infinite counts as 0.
    """
    points = parse_points(value)
    if points is None or points < 0:
        return 0.0
    return points


def sum_points(tasks: Iterable[Task]) -> float:
    """Total coerced story points of the given tasks."""
    return sum(coerce_points(task.story_points) for task in tasks)


def completion_date(task: Task) -> Optional[date]:
    """Completion day of a Done task; None when not done or the date is unusable."""
    if not task.is_done:
        return None
    return parse_date(task.completed_date)


def round_points(value: float) -> float:
    return round(value, 2)


def degrade_to(fallback: Callable[[], Any]):
    """
    Guard a public metrics operation so it never raises.

    Unexpected exceptions are logged with the operation name and replaced by
    a fresh value from ``fallback``, so a single malformed record can only
    shrink a chart, never break it.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception:
                logger.exception("metric_computation_failed", operation=func.__qualname__)
                return fallback()

        return wrapper

    return decorator


class MetricsCalculatorBase(ABC):
    """
    Base class for all metrics calculators.

    Calculators hold configuration only. Every operation is a pure function
    of its arguments: inputs are never mutated and no state is kept between
    calls, so instances can be shared freely.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the calculator.

        Args:
            settings: Configuration; defaults to the cached application settings
        """
        self.settings = settings or get_settings()
        self.logger = get_logger(self.__class__.__name__)

    @staticmethod
    def latest_sprints(sprints, statuses, limit: int) -> List:
        """
        Pick the ``limit`` most recent sprints with one of ``statuses``.

        Sprints without a readable number cannot be ordered and are skipped.

        Returned in ascending sprint-number order for display.
        """
        if limit <= 0:
            return []
        selected = [s for s in sprints if s.status in statuses and s.sprint_number is not None]
        selected.sort(key=lambda s: s.sprint_number, reverse=True)
        return sorted(selected[:limit], key=lambda s: s.sprint_number)

    @abstractmethod
    def run(self, *args, **kwargs) -> Any:
        """
        Main entry point for the calculator.

        Must be implemented by subclasses.
        """
        pass

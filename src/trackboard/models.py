"""
Project record schemas consumed by the metrics engine.

Records are owned by the persistence/sync layer and arrive as JSON documents
with camelCase keys. The schemas are deliberately lenient: story points and
dates are kept as raw values and coerced at aggregation time, so a single
malformed document never prevents a project from loading.

Missing or null fields fall back to their defaults, an unreadable sprint
number becomes None, and child records that still fail validation are
dropped (and logged) instead of failing the parent.
"""

from enum import Enum
from typing import Any, List, Optional, Type

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from trackboard.platform.logging import get_logger


logger = get_logger(__name__)


class SprintStatus(str, Enum):
    """Lifecycle states of a sprint."""

    PLANNED = "Planned"
    ACTIVE = "Active"
    COMPLETED = "Completed"


class TaskStatus(str, Enum):
    """Common task states. Only DONE carries meaning for the engine."""

    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    IN_REVIEW = "In Review"
    QA = "QA"
    DONE = "Done"
    BLOCKED = "Blocked"


class RiskStatus(str, Enum):
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    MITIGATED = "Mitigated"
    CLOSED = "Closed"


# Ordered scales, highest priority / lowest likelihood / lowest impact first
TASK_PRIORITIES: List[str] = ["Highest", "High", "Medium", "Low", "Lowest"]
RISK_LIKELIHOODS: List[str] = ["Rare", "Unlikely", "Possible", "Likely", "Almost Certain"]
RISK_IMPACTS: List[str] = ["Insignificant", "Minor", "Moderate", "Major", "Catastrophic"]
SEVERITIES: List[str] = ["Critical", "High", "Medium", "Low"]

OPEN_RISK_STATUSES = (RiskStatus.OPEN.value, RiskStatus.IN_PROGRESS.value)


def valid_records(model: Type[BaseModel], values: Any, field: str) -> List[Any]:
    """
    Validate child records one by one, dropping those that fail.

    A non-list value yields an empty list.
    """
    if values is None:
        return []
    if not isinstance(values, (list, tuple)):
        logger.warning("records_dropped", record_type=model.__name__, field=field, reason="not_a_list")
        return []

    records = []
    for index, raw in enumerate(values):
        try:
            records.append(model.model_validate(raw))
        except ValidationError as exc:
            logger.warning(
                "record_dropped",
                record_type=model.__name__,
                field=field,
                index=index,
                errors=exc.error_count(),
            )
    return records


class RecordModel(BaseModel):
    """Base for all project records: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # Stored documents use null for "not set"; let the defaults apply
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Task(RecordModel):
    id: str = ""
    description: str = ""
    # Raw value from the store: number, numeric string, empty string or junk
    story_points: Any = None
    status: Optional[str] = None
    completed_date: Any = None
    assignee: Optional[str] = None
    task_type: Optional[str] = None
    priority: Optional[str] = None
    backlog_id: Optional[str] = None
    severity: Optional[str] = None
    start_date: Any = None
    dev_estimated_time: Optional[str] = None
    qa_estimated_time: Optional[str] = None
    buffer_time: Optional[str] = None

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE.value


class SprintPlanning(RecordModel):
    goal: str = ""
    new_tasks: List[Task] = Field(default_factory=list)
    spillover_tasks: List[Task] = Field(default_factory=list)
    definition_of_done: str = ""
    testing_strategy: str = ""

    @field_validator("new_tasks", "spillover_tasks", mode="before")
    @classmethod
    def _valid_tasks(cls, values: Any, info: ValidationInfo) -> List[Task]:
        return valid_records(Task, values, info.field_name)


class Sprint(RecordModel):
    # None when the stored number cannot be read; such sprints are never
    # picked for cross-sprint charts
    sprint_number: Optional[int] = None
    start_date: Any = None
    end_date: Any = None
    status: str = SprintStatus.PLANNED.value
    committed_points: Any = 0
    completed_points: Any = 0
    total_days: Any = None
    duration: Optional[str] = None
    planning: SprintPlanning = Field(default_factory=SprintPlanning)

    @field_validator("sprint_number", mode="before")
    @classmethod
    def _lenient_number(cls, value: Any) -> Optional[int]:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(value) if value.is_integer() else None
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                return None
        return None

    @property
    def label(self) -> str:
        if self.sprint_number is None:
            return "Sprint"
        return f"Sprint {self.sprint_number}"

    @property
    def all_tasks(self) -> List[Task]:
        """New tasks followed by spillover tasks (a fresh list)."""
        return [*self.planning.new_tasks, *self.planning.spillover_tasks]


class Member(RecordModel):
    id: str = ""
    name: str = ""
    role: Optional[str] = None


class RiskItem(RecordModel):
    id: str = ""
    title: str = ""
    likelihood: Optional[str] = None
    impact: Optional[str] = None
    # Derived; recomputed by the risk scorer, never trusted as input
    risk_score: Any = 0
    status: Optional[str] = None
    category: Optional[str] = None
    owner: Optional[str] = None


class Project(RecordModel):
    id: str = ""
    name: str = ""
    sprints: List[Sprint] = Field(default_factory=list)
    members: List[Member] = Field(default_factory=list)
    backlog: List[Task] = Field(default_factory=list)
    risks: List[RiskItem] = Field(default_factory=list)

    @field_validator("sprints", "members", "backlog", "risks", mode="before")
    @classmethod
    def _valid_children(cls, values: Any, info: ValidationInfo) -> List[Any]:
        model = {"sprints": Sprint, "members": Member, "backlog": Task, "risks": RiskItem}[info.field_name]
        return valid_records(model, values, info.field_name)

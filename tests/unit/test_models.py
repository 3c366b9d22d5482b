"""
Unit tests for the project record schemas.
"""

import pytest

from trackboard.metrics import VelocityCalculator
from trackboard.models import (
    OPEN_RISK_STATUSES,
    TASK_PRIORITIES,
    Project,
    RiskItem,
    Sprint,
    SprintStatus,
    Task,
)


class TestRecordParsing:
    """Documents arrive from the store with camelCase keys."""

    def test_sprint_from_document(self):
        sprint = Sprint.model_validate({
            "sprintNumber": 4,
            "startDate": "2024-02-05",
            "endDate": "2024-02-16",
            "status": "Active",
            "committedPoints": 21,
            "totalDays": 10,
            "planning": {
                "goal": "Checkout flow",
                "newTasks": [
                    {"id": "t1", "storyPoints": 5, "status": "Done", "completedDate": "2024-02-07", "taskType": "Feature"},
                ],
                "spilloverTasks": [{"id": "t0", "storyPoints": "3"}],
                "definitionOfDone": "Merged and deployed",
            },
            "createdBy": "someone",
        })

        assert sprint.sprint_number == 4
        assert sprint.status == SprintStatus.ACTIVE.value
        assert sprint.label == "Sprint 4"
        assert sprint.planning.goal == "Checkout flow"
        assert sprint.planning.new_tasks[0].task_type == "Feature"
        assert sprint.planning.new_tasks[0].is_done
        assert [t.id for t in sprint.all_tasks] == ["t1", "t0"]

    def test_snake_case_names_accepted(self):
        task = Task(id="t", story_points=3, completed_date="2024-01-01", backlog_id="BL-240001")
        assert task.backlog_id == "BL-240001"
        assert task.model_dump(by_alias=True)["backlogId"] == "BL-240001"

    def test_malformed_values_load(self):
        task = Task.model_validate({"id": "t", "storyPoints": "lots", "completedDate": 42})
        assert task.story_points == "lots"
        assert task.completed_date == 42
        assert not task.is_done

    def test_sprint_defaults(self):
        sprint = Sprint(sprint_number=1)
        assert sprint.status == "Planned"
        assert sprint.all_tasks == []

    def test_all_tasks_is_a_fresh_list(self):
        sprint = Sprint(sprint_number=1, planning={"new_tasks": [{"id": "a"}]})
        sprint.all_tasks.append(Task(id="b"))
        assert len(sprint.all_tasks) == 1

    def test_project_document(self):
        project = Project.model_validate({
            "id": "p1",
            "name": "Storefront",
            "sprints": [{"sprintNumber": 1}],
            "members": [{"id": "m1", "name": "Alice Chen", "role": "Software Engineer"}],
            "backlog": [{"id": "b1", "priority": "High"}],
            "risks": [{"id": "r1", "likelihood": "Likely", "impact": "Major", "riskScore": "16"}],
        })
        assert project.members[0].role == "Software Engineer"
        assert project.backlog[0].priority == "High"
        assert isinstance(project.risks[0], RiskItem)


class TestEnumerations:

    def test_priority_scale_highest_first(self):
        assert TASK_PRIORITIES[0] == "Highest"
        assert TASK_PRIORITIES[-1] == "Lowest"

    def test_open_risk_statuses(self):
        assert OPEN_RISK_STATUSES == ("Open", "In Progress")


class TestMalformedRecords:
    """One bad record must not stop the rest of a project from loading."""

    @pytest.fixture
    def ragged_project(self):
        return Project.model_validate({
            "id": "p1",
            "name": "Storefront",
            "sprints": [
                {"sprintNumber": 1, "status": "Completed", "planning": {"newTasks": [{"id": "t1", "storyPoints": 3}]}},
                {"sprintNumber": "two", "status": "Completed"},
                {"sprintNumber": 3, "status": "Completed", "planning": {"newTasks": [{"storyPoints": 2}, "junk"]}},
                "not a sprint",
            ],
            "members": [{"id": "m1", "role": "Software Engineer"}],
            "backlog": [{"id": "b1", "description": None, "priority": None}],
            "risks": [{"id": "r1", "likelihood": "Likely"}, 42],
        })

    def test_project_still_loads(self, ragged_project):
        assert [s.sprint_number for s in ragged_project.sprints] == [1, None, 3]
        assert len(ragged_project.risks) == 1

    def test_task_without_id_is_kept(self, ragged_project):
        tasks = ragged_project.sprints[2].planning.new_tasks
        assert len(tasks) == 1
        assert tasks[0].id == ""
        assert tasks[0].story_points == 2

    def test_nulls_fall_back_to_defaults(self, ragged_project):
        item = ragged_project.backlog[0]
        assert item.description == ""
        assert item.priority is None
        assert ragged_project.members[0].name == ""

    def test_unnumbered_sprint_left_out_of_velocity(self, ragged_project):
        entries = VelocityCalculator().calculate_velocity(ragged_project.sprints)
        assert [e.sprint_number for e in entries] == [1, 3]

    @pytest.mark.parametrize("raw,expected", [
        (7, 7), ("7", 7), (" 8 ", 8), (4.0, 4), (4.5, None), (True, None), ("two", None), ([1], None),
    ])
    def test_sprint_number_coercion(self, raw, expected):
        assert Sprint.model_validate({"sprintNumber": raw}).sprint_number == expected

    def test_non_list_children_become_empty(self):
        sprint = Sprint.model_validate({"sprintNumber": 1, "planning": {"newTasks": "none yet"}})
        assert sprint.planning.new_tasks == []

"""
Tests for VelocityCalculator.
"""

import pytest

from trackboard.metrics import VelocityCalculator, VelocityEntry
from trackboard.platform.config import Settings


@pytest.fixture
def calculator():
    return VelocityCalculator()


class TestVelocityCalculator:
    """Tests for VelocityCalculator."""

    def test_committed_and_completed_from_new_tasks(self, calculator, make_sprint, make_task, make_done_task):
        sprint = make_sprint(
            3,
            new_tasks=[make_done_task(5, "2024-01-03"), make_task(story_points=3, status="In Progress")],
            spillover_tasks=[make_done_task(8, "2024-01-02")],
        )
        result = calculator.calculate_velocity([sprint])

        assert result == [VelocityEntry(sprint_number=3, sprint_label="Sprint 3", committed=8, completed=5)]

    def test_excludes_planned_sprints(self, calculator, make_sprint, make_task):
        sprints = [
            make_sprint(1, status="Completed", new_tasks=[make_task(story_points=1)]),
            make_sprint(2, status="Active", new_tasks=[make_task(story_points=2)]),
            make_sprint(3, status="Planned", new_tasks=[make_task(story_points=3)]),
        ]
        result = calculator.calculate_velocity(sprints)
        assert [e.sprint_number for e in result] == [1, 2]

    def test_keeps_ten_most_recent_in_ascending_order(self, calculator, make_sprint):
        sprints = [make_sprint(n, status="Completed") for n in (14, 2, 9, 1, 12, 5, 7, 3, 11, 13, 6, 4, 8, 10)]
        result = calculator.calculate_velocity(sprints)

        assert len(result) == 10
        assert [e.sprint_number for e in result] == list(range(5, 15))

    def test_window_override(self, calculator, make_sprint):
        sprints = [make_sprint(n) for n in range(1, 6)]
        assert [e.sprint_number for e in calculator.calculate_velocity(sprints, window=2)] == [4, 5]

    def test_window_from_settings(self, make_sprint):
        calculator = VelocityCalculator(Settings(VELOCITY_SPRINT_WINDOW=3))
        sprints = [make_sprint(n) for n in range(1, 6)]
        assert [e.sprint_number for e in calculator.calculate_velocity(sprints)] == [3, 4, 5]

    def test_no_qualifying_sprints_is_empty(self, calculator, make_sprint):
        assert calculator.calculate_velocity([]) == []
        assert calculator.calculate_velocity(None) == []
        assert calculator.calculate_velocity([make_sprint(1, status="Planned")]) == []

    def test_non_numeric_points_count_as_zero(self, calculator, make_sprint, make_task, make_done_task):
        sprint = make_sprint(1, new_tasks=[make_done_task("n/a", "2024-01-02"), make_done_task("2.5", "2024-01-02")])
        entry = calculator.calculate_velocity([sprint])[0]
        assert entry.committed == 2.5
        assert entry.completed == 2.5

    def test_input_order_is_untouched(self, calculator, make_sprint):
        sprints = [make_sprint(3), make_sprint(1), make_sprint(2)]
        calculator.calculate_velocity(sprints)
        assert [s.sprint_number for s in sprints] == [3, 1, 2]

    def test_never_more_than_ten_entries(self, calculator, make_sprint):
        sprints = [make_sprint(n, status="Active" if n % 2 else "Completed") for n in range(1, 40)]
        assert len(calculator.run(sprints)) == 10

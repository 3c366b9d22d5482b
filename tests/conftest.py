"""
Pytest configuration and shared fixtures.
"""

import os
import sys
from datetime import date

import pytest

sys.path.append(os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from trackboard.models import Member, RiskItem, Sprint, Task  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> None:
    """Set up test environment variables."""
    os.environ.setdefault("APP_ENV", "test")
    os.environ.setdefault("LOG_LEVEL", "debug")


# =============================================================================
# Record Builders
# =============================================================================

_task_counter = {"value": 0}


def create_task(**fields) -> Task:
    """Build a Task, generating an id when none is given."""
    if "id" not in fields:
        _task_counter["value"] += 1
        fields["id"] = f"task_{_task_counter['value']}"
    return Task(**fields)


def done_task(points, completed, **fields) -> Task:
    return create_task(story_points=points, status="Done", completed_date=completed, **fields)


def create_sprint(
    number: int,
    start="2024-01-01",
    end="2024-01-12",
    status: str = "Completed",
    new_tasks=None,
    spillover_tasks=None,
    **fields,
) -> Sprint:
    return Sprint(
        sprint_number=number,
        start_date=start,
        end_date=end,
        status=status,
        planning={
            "new_tasks": new_tasks or [],
            "spillover_tasks": spillover_tasks or [],
        },
        **fields,
    )


@pytest.fixture
def make_task():
    return create_task


@pytest.fixture
def make_done_task():
    return done_task


@pytest.fixture
def make_sprint():
    return create_sprint


# =============================================================================
# Test Data Fixtures
# =============================================================================

@pytest.fixture
def one_week_sprint():
    """Mon 2024-01-01 .. Fri 2024-01-05, one 10 point task done on Wednesday."""
    return create_sprint(
        1,
        start="2024-01-01",
        end="2024-01-05",
        status="Active",
        new_tasks=[done_task(10, "2024-01-03")],
    )


@pytest.fixture
def members():
    return [
        Member(id="m1", name="Alice Chen", role="Software Engineer"),
        Member(id="m2", name="Bob Rivera", role="Software Engineer"),
        Member(id="m3", name="Carol Singh", role="QA Engineer"),
        Member(id="m4", name="Dan Okafor", role="Product Owner"),
    ]


@pytest.fixture
def sample_risks():
    return [
        RiskItem(id="r1", title="Vendor delay", likelihood="Likely", impact="Major", status="Open"),
        RiskItem(id="r2", title="Key person leaves", likelihood="Rare", impact="Catastrophic", status="Closed"),
        RiskItem(id="r3", title="Scope creep", likelihood="Almost Certain", impact="Moderate", status="In Progress"),
        RiskItem(id="r4", title="Infra outage", likelihood="Unlikely", impact="Minor", status="Open"),
        RiskItem(id="r5", title="Untriaged", likelihood=None, impact="Major", status="Open"),
    ]


@pytest.fixture
def today() -> date:
    return date(2024, 1, 5)


# =============================================================================
# Test Markers
# =============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")

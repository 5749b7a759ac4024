"""
Pytest Configuration and Shared Fixtures for Outreach Analytics Tests.

This module provides fixtures and configuration for all tests, supporting:
- Async test execution with pytest-asyncio (route handlers are called directly)
- A record factory mirroring the metrics sheet (all fields as text)
- A small single-agent series with exact, hand-checkable trend values
- A two-agent team dataset covering every aggregation dimension, an
  unparseable numeric cell and empty location/audience values
- Settings isolated from any local .env file

Team dataset (weekEnd, agent, campaign, location, audience, invited, accepted):
    2025-01-03  Dana  Q1 Brokers  Texas  Independent agents  1,000  400
    2025-01-03  Lee   Renewals    Ohio   Carriers              500   50
    2025-01-10  Dana  Renewals    Texas  Independent agents    800  320
    2025-02-07  Lee   Q1 Brokers  ""     ""                    200  "abc"
"""

from typing import Any, Callable, Dict, List

import pytest

from outreach_analytics.core.config import Settings
from outreach_analytics.models import RawMetricRecord


# ============================================================
# PYTEST HOOKS
# ============================================================

def pytest_configure(config) -> None:
    """
    Configure custom pytest markers for test organization.

    Custom markers defined:
    - slow: Marks tests as slow (deselect with -m "not slow")
    - parity: Marks tests pinning values shown by the existing dashboard

    Args:
        config: Pytest configuration object
    """
    config.addinivalue_line(
        'markers',
        'slow: marks tests as slow (deselect with -m "not slow")'
    )
    config.addinivalue_line(
        'markers',
        'parity: marks tests pinning values shown by the existing dashboard'
    )


# ============================================================
# SETTINGS FIXTURE
# ============================================================

@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any .env file in the working directory."""
    return Settings(_env_file=None)


# ============================================================
# RECORD FACTORY
# ============================================================

def build_record(index: int = 0, **fields: Any) -> RawMetricRecord:
    """
    Build a RawMetricRecord the way the sheet delivers it.

    Numeric keyword values are converted to text so tests can pass plain
    numbers.

    Example:
        >>> build_record(0, agent="Dana", totalInvited=100).totalInvited
        '100'
    """
    text_fields: Dict[str, Any] = {
        name: value if value is None or isinstance(value, str) else str(value)
        for name, value in fields.items()
    }
    return RawMetricRecord(id=f"metric-{index}", rowIndex=index + 2, **text_fields)


@pytest.fixture
def make_record() -> Callable[..., RawMetricRecord]:
    """Expose build_record as a fixture."""
    return build_record


# ============================================================
# DATASET FIXTURES
# ============================================================

@pytest.fixture
def linear_agent_records() -> List[RawMetricRecord]:
    """
    Three weeks for agent "A" with acceptance rates 20, 30, 40.

    Overall acceptance is 90 / 300 = 30%, the weekly acceptance trend has
    slope 10 with r2 = 1, and the next period forecasts 50.
    """
    weeks = ["2025-01-03", "2025-01-10", "2025-01-17"]
    accepted = [20, 30, 40]
    replies = [2, 3, 4]
    return [
        build_record(
            i,
            agent="A",
            campaign="Spring",
            weekEnd=weeks[i],
            totalInvited=100,
            totalAccepted=accepted[i],
            totalMessaged=accepted[i],
            replies=replies[i],
        )
        for i in range(3)
    ]


@pytest.fixture
def team_records() -> List[RawMetricRecord]:
    """Two agents, two campaigns, two months (see module docstring)."""
    return [
        build_record(
            0, agent="Dana", campaign="Q1 Brokers", location="Texas",
            audience="Independent agents", weekEnd="2025-01-03",
            totalInvited="1,000", totalAccepted="400", totalMessaged="300",
            replies="30", netNewConnects="400", startingConnects="500",
            endingConnections="900", totalActions="50", acceptanceRate="40%",
        ),
        build_record(
            1, agent="Lee", campaign="Renewals", location="Ohio",
            audience="Carriers", weekEnd="2025-01-03",
            totalInvited="500", totalAccepted="50", totalMessaged="100",
            replies="3", netNewConnects="50", startingConnects="300",
            endingConnections="350", totalActions="10", acceptanceRate="10%",
        ),
        build_record(
            2, agent="Dana", campaign="Renewals", location="Texas",
            audience="Independent agents", weekEnd="2025-01-10",
            totalInvited="800", totalAccepted="320", totalMessaged="200",
            replies="24", netNewConnects="320", startingConnects="900",
            endingConnections="1,220", totalActions="40", acceptanceRate="40%",
        ),
        build_record(
            3, agent="Lee", campaign="Q1 Brokers", location="",
            audience="", weekEnd="2025-02-07",
            totalInvited="200", totalAccepted="abc", totalMessaged="50",
            replies="2", netNewConnects="30", startingConnects="350",
            endingConnections="380", totalActions="", acceptanceRate="",
        ),
    ]


@pytest.fixture
def sheet_rows() -> List[List[str]]:
    """Two data rows as returned by the spreadsheet values API (columns A-U)."""
    return [
        [
            "Active", "Q1 Brokers", "Intro v2", "Independent agents", "Dana",
            "40%", "30", "10%", "Yes", "Brokers", "Standard", "2025-01-03",
            "Texas", "Queue 1", "1,000", "400", "400", "500", "900", "300", "50",
        ],
        # Trailing empty cells are dropped by the sheet API
        ["Paused", "Renewals", "", "Carriers", "Lee"],
    ]

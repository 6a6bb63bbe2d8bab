"""Pytest fixtures for royalty settlement tests.

Common fixtures for wiring the settlement core to in-memory collaborators.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env before any tests run
load_dotenv()

import pytest

from src.config_schema import AppConfig, validate_config_dict
from src.settlement import (
    BlockHeight,
    EventLogger,
    OwnershipTable,
    RoyaltySettlement,
    ScripLedger,
)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "feature(name): mark test as belonging to a feature. "
        "Usage: @pytest.mark.feature('settlement')"
    )


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add custom command-line options."""
    parser.addoption(
        "--feature",
        action="store",
        type=str,
        default=None,
        help="Run tests for a specific feature (e.g., --feature settlement)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Filter tests based on command-line options."""
    feature_filter = config.getoption("--feature")
    if feature_filter is None:
        return
    selected = []
    deselected = []
    for item in items:
        marker = item.get_closest_marker("feature")
        if marker is not None:
            feature_name = marker.args[0] if marker.args else ""
            if feature_name == feature_filter:
                selected.append(item)
                continue
        deselected.append(item)
    config.hook.pytest_deselected(items=deselected)
    items[:] = selected


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    """Validated config with the event log redirected to tmp_path."""
    return validate_config_dict({
        "settlement": {"max_contributors": 5, "escrow_id": "escrow"},
        "logging": {"output_file": str(tmp_path / "events.jsonl")},
    })


@pytest.fixture
def scrip() -> ScripLedger:
    """Value ledger with funded payers.

    - alice: 10_000
    - dave: 500
    """
    return ScripLedger({"alice": 10_000, "dave": 500})


@pytest.fixture
def owners() -> OwnershipTable:
    return OwnershipTable()


@pytest.fixture
def height() -> BlockHeight:
    return BlockHeight(100)


@pytest.fixture
def event_logger(app_config: AppConfig) -> EventLogger:
    return EventLogger(app_config.logging.output_file)


@pytest.fixture
def settlement(
    app_config: AppConfig,
    scrip: ScripLedger,
    owners: OwnershipTable,
    height: BlockHeight,
    event_logger: EventLogger,
) -> RoyaltySettlement:
    """Fully wired settlement over in-memory collaborators."""
    return RoyaltySettlement.from_config(
        app_config,
        transfer=scrip,
        ownership=owners,
        context=height,
        event_logger=event_logger,
    )

"""Pytest configuration and shared fixtures for cutplan tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from cutplan.domain.value_objects import PartRequest

FIXTURES_PATH = Path(__file__).parent / "fixtures" / "configs"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


@pytest.fixture
def fixtures_path() -> Path:
    """Directory holding JSON job files used by the tests."""
    return FIXTURES_PATH


@pytest.fixture
def scenario_a_requests() -> list[PartRequest]:
    """Mixed furniture job on a 2440 x 1220 board."""
    return [
        PartRequest(1000, 500, 10),
        PartRequest(700, 500, 10),
        PartRequest(500, 400, 35),
    ]

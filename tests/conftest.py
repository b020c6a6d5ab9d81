"""Pytest configuration and shared fixtures for foil planning tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from poolfoil.application import PlanFoilLayoutCommand
from poolfoil.domain.value_objects import (
    FoilMaterial,
    PoolGeometry,
    PoolShape,
    SplashPoolSpec,
    StairsDirection,
    StairsShape,
    StairsSpec,
)

FIXTURES_PATH = Path(__file__).parent / "fixtures" / "configs"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Pool fixtures
# =============================================================================


@pytest.fixture
def fixtures_path() -> Path:
    """Directory holding the JSON configuration fixtures."""
    return FIXTURES_PATH


@pytest.fixture
def rectangle_pool() -> PoolGeometry:
    """8m x 4m rectangular pool, 1.5m deep (1.4m water with a skimmer)."""
    return PoolGeometry(shape=PoolShape.RECTANGLE, length=8.0, width=4.0, depth=1.5)


@pytest.fixture
def corner_splash_pool() -> SplashPoolSpec:
    """2m x 1.5m splash pool in corner A, width along the long wall."""
    return SplashPoolSpec(
        width=2.0,
        length=1.5,
        depth=0.5,
        corner_index=0,
        direction=StairsDirection.ALONG_LENGTH,
    )


@pytest.fixture
def corner_b_stairs() -> StairsSpec:
    """Four 0.3m rectangular steps from corner B, 1.5m wide along the short wall."""
    return StairsSpec(
        shape=StairsShape.RECTANGULAR,
        corner_index=1,
        direction=StairsDirection.ALONG_WIDTH,
        width=1.5,
        step_count=4,
        step_depth=0.3,
        step_height=0.2,
    )


# =============================================================================
# Command fixtures
# =============================================================================


@pytest.fixture
def plan_command() -> PlanFoilLayoutCommand:
    """Planner with default settings and solid foil."""
    return PlanFoilLayoutCommand()


@pytest.fixture
def printed_plan_command() -> PlanFoilLayoutCommand:
    """Planner for printed foil, which only comes on narrow rolls."""
    return PlanFoilLayoutCommand(material=FoilMaterial.printed())

"""Test configuration for local imports without installing the package."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure():
    """Ensure the src/ directory is importable for tests."""
    root = Path(__file__).resolve().parents[1] / "src"
    sys.path.insert(0, str(root))


@pytest.fixture
def make_session():
    """Build a session with explicit timings and an optional gear layout."""
    from gearbot.economy import Wallet
    from gearbot.engine.context import CpuParameters, SessionContext
    from gearbot.engine.session import Session
    from gearbot.program import Program
    from gearbot.world import Level

    def _make(*, tick=0.1, multiplier=1.0, bomb=10.0, capacity=8, balance=0, gears=None, spawn=(0, 0), facing=(1, 0)):
        context = SessionContext(
            wallet=Wallet(balance),
            cpu=CpuParameters(tick, multiplier),
            program=Program(capacity=capacity),
            bomb_duration=bomb,
        )
        return Session(context, Level(spawn=spawn, facing=facing, gears=gears))

    return _make

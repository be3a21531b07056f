"""Shared fixtures for the rpncalc test suite."""

import io

import pytest
from rich.console import Console

from rpncalc.backends import DecimalBackend, FloatBackend
from rpncalc.engine import RPNEngine
from rpncalc.session import Session


@pytest.fixture
def engine():
    """Engine on the exact decimal backend."""
    return RPNEngine(backend=DecimalBackend())


@pytest.fixture
def float_engine():
    return RPNEngine(backend=FloatBackend())


@pytest.fixture(params=["decimal", "float"])
def any_engine(request):
    """Engine on each backend in turn; tests compare values, not types."""
    backend = DecimalBackend() if request.param == "decimal" else FloatBackend()
    return RPNEngine(backend=backend)


@pytest.fixture
def session(engine):
    return Session(engine=engine)


@pytest.fixture
def console():
    """Plain-text console writing to a buffer (read it back via .file.getvalue())."""
    return Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False)

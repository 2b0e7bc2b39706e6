"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from doublebuffer import BufferSettings, DoubleBuffer


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep DOUBLEBUFFER_* variables from the host out of tests."""
    monkeypatch.delenv("DOUBLEBUFFER_TRACK_ORIGINS", raising=False)
    monkeypatch.delenv("DOUBLEBUFFER_ORIGIN_DEPTH", raising=False)


@pytest.fixture
def settings():
    """Default settings, independent of the environment."""
    return BufferSettings(track_origins=False, origin_depth=1)


@pytest.fixture
def tracking_settings():
    """Settings with borrow origin tracking on."""
    return BufferSettings(track_origins=True, origin_depth=2)


@pytest.fixture
def scalar_buffer(settings):
    """DoubleBuffer(0, 0)."""
    return DoubleBuffer(0, 0, settings=settings)


@pytest.fixture
def list_buffer(settings):
    """DoubleBuffer([2, 4, 6], [])."""
    return DoubleBuffer([2, 4, 6], [], settings=settings)

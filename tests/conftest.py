# tests/conftest.py

"""Shared pytest fixtures for all swipeshop tests."""

from collections.abc import Generator
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def fast_password_hashing() -> Generator[None, None, None]:
    """Lower PBKDF2 rounds so local sign-ups run instantly."""
    with patch("src.auth.local_session._PBKDF2_ROUNDS", 1_000):
        yield


@pytest.fixture(autouse=True)
def no_browser() -> Generator[None, None, None]:
    """Never open a browser from chart exports."""
    with patch("src.storage.chart_exporter.webbrowser"):
        yield

"""
Shared test fixtures for trelli-cli tests.
Points config at a missing .env and clears TRELLO_*/TRELLI_* variables so
no test reads real credentials or makes real API calls.
"""

import os
import sys

import pytest

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from trelli_cli import config  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path):
    """Ensure every test starts without a .env file or credential variables."""
    monkeypatch.setattr(config, "ENV_PATH", str(tmp_path / "missing.env"))
    for key in config.KNOWN_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def cfg():
    """A Config with fake credentials and a fake default board."""
    return config.Config(api_key="fake-key-123456", token="fake-token-abcdef", board_id="board1")

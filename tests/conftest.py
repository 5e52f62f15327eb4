"""
Test configuration and fixtures for podcomplete tests.

This module provides pytest fixtures for unit tests.
"""

import logging
import os
import sys

import pytest

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from podcomplete.core.accounts import AccountDatabase
from podcomplete.cli.completions import CompletionRouter
from tests.common import AccountFileFactory, sample_backend


@pytest.fixture
def backend():
    """Return a fake backend populated with sample records."""
    return sample_backend()


@pytest.fixture
def account_database(tmp_path):
    """Return an AccountDatabase reading small passwd and group files."""
    passwd = AccountFileFactory.write(
        tmp_path / "passwd", [("root", 0), ("alice", 1000), ("bob", 1001)]
    )
    group = AccountFileFactory.write(tmp_path / "group", [("root", 0), ("wheel", 10)])
    return AccountDatabase(passwd, group)


@pytest.fixture
def router(backend, account_database):
    """Return a CompletionRouter over the sample backend."""
    return CompletionRouter(backend, account_database)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests away from the user's settings file and engine override."""
    monkeypatch.delenv("PODCOMPLETE_CONFIG", raising=False)
    monkeypatch.delenv("PODCOMPLETE_ENGINE", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture(autouse=True)
def podcomplete_logger():
    """Return the package logger and restore its handlers and level afterwards."""
    logger = logging.getLogger("podcomplete")
    handlers = logger.handlers[:]
    level = logger.level
    yield logger
    for handler in logger.handlers[:]:
        if handler not in handlers:
            handler.close()
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)

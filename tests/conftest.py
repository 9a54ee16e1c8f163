"""Shared pytest fixtures: a transport double and a ready client built on it."""

import sys
from pathlib import Path

import pytest

TESTS_DIR = Path(__file__).resolve().parent
ROOT_DIR = TESTS_DIR.parent
for path in (str(ROOT_DIR), str(TESTS_DIR)):
    if path not in sys.path:
        sys.path.insert(0, path)

import config
from EmailnatorAPI import Emailnator, Session

from fakes import TOKEN, FakeAsyncSession


@pytest.fixture(autouse=True)
def quiet_logger(monkeypatch: pytest.MonkeyPatch):
    """Keep progress lines out of test output."""
    monkeypatch.setattr(config, "VERBOSE", False)


@pytest.fixture
def http() -> FakeAsyncSession:
    return FakeAsyncSession()


@pytest.fixture
def client(http: FakeAsyncSession) -> Emailnator:
    return Emailnator(Session(http=http, xsrf_token=TOKEN))

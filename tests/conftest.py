"""Shared fixtures for internhub tests."""

import pytest


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep DISPATCH_POLICY / API_KEY from the developer's shell out of the tests."""
    for name in ("DISPATCH_POLICY", "API_KEY", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield


class Recorder:
    """Observer that appends (name, context) to a shared call log."""

    def __init__(self, name, calls):
        self.name = name
        self.calls = calls

    def update(self, context):
        self.calls.append((self.name, context))

    def __repr__(self):
        return f"Recorder({self.name!r})"


@pytest.fixture
def calls():
    return []


@pytest.fixture
def make_recorder(calls):
    def _make(name):
        return Recorder(name, calls)
    return _make

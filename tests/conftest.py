"""Shared fixtures: a throwaway app per test backed by a temporary SQLite file."""

import pytest

from wichtel import create_app
from wichtel.services.rounds import RoundManager


MEMBERS = ["A", "B", "C"]


class MemoryStore:
    """Round store that keeps the payload in memory; no app context needed."""

    def __init__(self, payload=None):
        self.payload = payload
        self.saves = 0

    def load(self):
        return self.payload

    def save(self, payload):
        self.payload = payload
        self.saves += 1


class NoShuffle:
    """An rng whose shuffle never moves anything, so every draw has fixed points."""

    def __init__(self):
        self.calls = 0

    def shuffle(self, seq):
        self.calls += 1


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'test.db'}",
        "SANTA_MEMBERS": MEMBERS,
        "SANTA_SEED": 1234,
        "SANTA_DEBUG_ENDPOINT": True,
    })
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield


@pytest.fixture
def manager(app, app_ctx) -> RoundManager:
    return app.extensions["round_manager"]


@pytest.fixture
def memory_store():
    return MemoryStore()

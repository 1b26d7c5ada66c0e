"""Shared fixtures"""
import pytest

from passguard.models.policy import PolicyConfiguration
from passguard.services.engine import PasswordEngine
from passguard.services.history import HistoryTracker
from passguard.services.persistence import InMemoryPersistence
from passguard.utils.security import DigestHasher
from run import create_app


@pytest.fixture
def app():
    """Application using the testing configuration and an in-memory database"""
    app = create_app('testing')
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def policy():
    return PolicyConfiguration()


@pytest.fixture
def hasher():
    return DigestHasher(iterations=1000, rounds=4)


@pytest.fixture
def tracker(hasher):
    return HistoryTracker(InMemoryPersistence(), hasher)


@pytest.fixture
def engine(hasher):
    return PasswordEngine(persistence=InMemoryPersistence(), hasher=hasher)

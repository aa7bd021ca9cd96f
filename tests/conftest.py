import mongomock
import pytest
from fastapi.testclient import TestClient

import database
from main import app


@pytest.fixture
def mongo_db(monkeypatch):
    """Fresh in-memory database swapped in for the real handle."""
    test_db = mongomock.MongoClient(tz_aware=True)["taxi_test"]
    monkeypatch.setattr(database, "db", test_db)
    return test_db


@pytest.fixture
def client(mongo_db):
    # Entering the client runs the app lifespan, which creates the indexes
    with TestClient(app) as c:
        yield c


@pytest.fixture
def no_db(monkeypatch):
    monkeypatch.setattr(database, "db", None)
    with TestClient(app) as c:
        yield c

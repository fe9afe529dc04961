"""TestClient wired to the in-memory store and a switchable caller."""
import pytest
from fastapi.testclient import TestClient

from learnhub.core.dependencies import get_current_user
from learnhub.database.document_store import get_document_store
from learnhub.main import app


class Caller:
    def __init__(self):
        self.user = None


@pytest.fixture
def caller():
    return Caller()


@pytest.fixture
def client(store, caller):
    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_current_user] = lambda: caller.user
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()

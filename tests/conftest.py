"""Shared fixtures: temp contact store, fake provider clients, test app."""
import pytest
from fastapi.testclient import TestClient

from fakes import FakeModelClient, FakeSpeechClient, text_response
from guardian.deps import get_model_client, get_speech_client
from guardian.main import app
from guardian.services import contacts


@pytest.fixture(autouse=True)
def temp_db(tmp_path, monkeypatch):
    db_path = str(tmp_path / "safety.db")
    monkeypatch.setattr(contacts, "DB_PATH", db_path)
    contacts.init_db()
    return db_path


@pytest.fixture
def model_client():
    return FakeModelClient(response=text_response("hello"))


@pytest.fixture
def speech_client():
    return FakeSpeechClient()


@pytest.fixture
def client(model_client, speech_client):
    app.dependency_overrides[get_model_client] = lambda: model_client
    app.dependency_overrides[get_speech_client] = lambda: speech_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

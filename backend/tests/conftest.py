"""Shared fixtures and fakes for the notekeeper test suite."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import httpx
import pytest
from fastapi.testclient import TestClient

from notekeeper.config import get_settings
from notekeeper.core.exceptions import AuthError
from notekeeper.core.storage import MemoryKeyValueStorage
from notekeeper.features.assist.client import TextAssistClient
from notekeeper.features.notes.schemas import Note
from notekeeper.features.notes.store import NoteStore

BASE_DATE = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)
VALID_TOKEN = "valid-token"


def make_note(note_id: str, title: str = "Title", content: str = "Body", minutes: int = 0, **extra) -> Note:
    return Note(
        id=note_id,
        title=title,
        content=content,
        date=BASE_DATE + timedelta(minutes=minutes),
        **extra,
    )


def completion(text: str) -> dict:
    """Chat-completion response body carrying one answer."""
    return {
        "id": "cmpl-1",
        "object": "chat.completion",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": text}}],
    }


class FakeIdentity:
    """Stands in for IdentityClient; accepts exactly one token."""

    def __init__(self):
        self.signed_out = False

    def get_user(self, access_token: str):
        if access_token != VALID_TOKEN:
            raise AuthError("Invalid or expired session")
        return SimpleNamespace(id="user-1", email="ada@example.com")

    def sign_out(self) -> None:
        self.signed_out = True


@pytest.fixture
def storage() -> MemoryKeyValueStorage:
    return MemoryKeyValueStorage()


@pytest.fixture
def store(storage) -> NoteStore:
    return NoteStore(storage)


@pytest.fixture
def settings_env(monkeypatch, tmp_path):
    """Minimal valid environment for get_settings()."""
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "anon-key")
    monkeypatch.setenv("TEXT_ASSIST_API_KEY", "sk-test")
    monkeypatch.setenv("NOTES_STORAGE_DIR", str(tmp_path / "storage"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def assist_handler():
    """Mutable handler for the mocked chat-completion endpoint."""
    state = SimpleNamespace(requests=[], response=httpx.Response(200, json=completion("OK")))

    def handler(request: httpx.Request) -> httpx.Response:
        state.requests.append(request)
        if isinstance(state.response, Exception):
            raise state.response
        return state.response

    state.handler = handler
    return state


@pytest.fixture
def client(settings_env, store, assist_handler):
    """API client with in-memory storage, fake identity and mocked text assist."""
    from notekeeper.core.dependencies import (
        get_identity_client,
        get_note_store,
        get_text_assist_client,
    )
    from notekeeper.main import create_app

    app = create_app()
    identity = FakeIdentity()
    app.dependency_overrides[get_note_store] = lambda: store
    app.dependency_overrides[get_identity_client] = lambda: identity
    app.dependency_overrides[get_text_assist_client] = lambda: TextAssistClient(
        api_key="sk-test",
        base_url="https://assist.test/v1",
        transport=httpx.MockTransport(assist_handler.handler),
    )
    test_client = TestClient(app)
    test_client.headers["Authorization"] = f"Bearer {VALID_TOKEN}"
    test_client.identity = identity
    return test_client

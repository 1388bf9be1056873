import asyncio

import pytest
from fastapi.testclient import TestClient

from memo_api.app.core.config import settings
from memo_api.app.core.db import init_db
from memo_api.app.core.security import create_access_token
from memo_api.app.main import app
from memo_api.app.services.user_service import UserService


def _token_for(user) -> str:
    return create_access_token({"sub": user.email})


@pytest.fixture
def token_for():
    """Issue session tokens the way the login service would"""
    return _token_for


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the app at a fresh SQLite file with all migrations applied"""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "memo_test.db"))
    init_db()
    return settings.database_url


@pytest.fixture
def alice(database):
    return asyncio.run(UserService.create_user("alice@example.com"))


@pytest.fixture
def bob(database):
    return asyncio.run(UserService.create_user("bob@example.com"))


@pytest.fixture
def anonymous_client(database):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def alice_client(alice):
    with TestClient(app, cookies={settings.session_cookie_name: _token_for(alice)}) as client:
        yield client


@pytest.fixture
def bob_client(bob):
    with TestClient(app, cookies={settings.session_cookie_name: _token_for(bob)}) as client:
        yield client

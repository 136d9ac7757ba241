"""
Integration fixtures: the FastAPI app against a fresh SQLite file.
"""
import os
from typing import List, Tuple

import pytest
from fastapi.testclient import TestClient

from stock_panel.config import settings

TEST_DB_PATH = settings.database_url.split(":///", 1)[1]


class RecordingEmailService:
    """Configured email service that keeps messages instead of sending them."""

    def __init__(self):
        self.reset_links: List[Tuple[str, str]] = []
        self.test_emails: List[str] = []

    def is_configured(self) -> bool:
        return True

    async def send_password_reset_email(self, to_email: str, reset_link: str) -> bool:
        self.reset_links.append((to_email, reset_link))
        return True

    async def send_test_email(self, to_email: str) -> bool:
        self.test_emails.append(to_email)
        return True


@pytest.fixture
def app():
    from stock_panel.main import app as application
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """TestClient with lifespan (tables, token stores, sweeper) on an empty database."""
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def email_outbox(app) -> RecordingEmailService:
    from stock_panel.dependencies import get_email_service
    outbox = RecordingEmailService()
    app.dependency_overrides[get_email_service] = lambda: outbox
    return outbox


@pytest.fixture
def register_and_login(client):
    """Create an account and return its Authorization header."""

    def _register_and_login(username: str = "alice", email: str = "a@x.com", password: str = "longpass1") -> dict:
        response = client.post(
            "/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        response = client.post("/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register_and_login

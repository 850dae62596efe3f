"""
Pytest configuration and shared fixtures.

The backend is replaced by `FakeBackend` (see fake_backend.py).

Fixtures available to all tests:
  • fake_backend   : seeded FakeBackend (admins of each role plus a plain user)
  • backend_client : BackendClient wired to the fake
  • secure_api     : SecureAPI over backend_client
  • gate           : SessionGate over backend_client / secure_api
  • client         : FastAPI TestClient (lifespan running, redirects not followed)
  • login          : helper that signs a seeded account in through the API
"""

import os

import pytest

# Settings se instancian al importar app.config.settings
os.environ.setdefault("SUPABASE_URL", "https://backend.test")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-test-key")

from fastapi.testclient import TestClient  # noqa: E402

from app.main import create_app  # noqa: E402
from app.core.auth.service import SessionGate  # noqa: E402
from app.shared.services.backend_client import BackendClient  # noqa: E402
from app.shared.services.secure_api import SecureAPI  # noqa: E402
from fake_backend import (  # noqa: E402
    PASSWORD, PLAIN_USER, READ_ONLY, SUPER_ADMIN, SUPPORT_ADMIN,
    FakeBackend, make_backend_client,
)


@pytest.fixture
def fake_backend() -> FakeBackend:
    fake = FakeBackend()
    fake.add_account(SUPER_ADMIN, role="SuperAdmin")
    fake.add_account(SUPPORT_ADMIN, role="SupportAdmin")
    fake.add_account(READ_ONLY, role="ReadOnly")
    fake.add_account(PLAIN_USER)
    return fake


@pytest.fixture
def backend_client(fake_backend) -> BackendClient:
    return make_backend_client(fake_backend)


@pytest.fixture
def secure_api(backend_client) -> SecureAPI:
    return SecureAPI(backend_client)


@pytest.fixture
def gate(backend_client, secure_api) -> SessionGate:
    return SessionGate(backend_client, secure_api)


@pytest.fixture
def client(fake_backend):
    app = create_app(backend=make_backend_client(fake_backend))
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client


@pytest.fixture
def login(client):
    def _login(email: str = SUPER_ADMIN, password: str = PASSWORD):
        return client.post("/api/v1/auth/login", json={"email": email, "password": password})
    return _login

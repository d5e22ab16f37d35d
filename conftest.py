from pathlib import Path
import sys

import pytest

# Ensure project root is on sys.path before tests import modules
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient

from components.adminapi import AdminSettings, create_app

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "changeme123"


class ManualClock:
    def __init__(self, start: int = 1_700_000_000):
        self.now = start

    def now_utc_ts(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += int(seconds)


class FakeTransport:
    """Records what the dispatcher hands over; optionally fails."""

    def __init__(self):
        self.sent = []
        self.verified = []
        self.fail_with = None

    async def send(self, settings, message):
        if self.fail_with:
            raise self.fail_with
        self.sent.append((settings, message))

    async def verify(self, settings):
        if self.fail_with:
            raise self.fail_with
        self.verified.append(settings)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def settings():
    return AdminSettings(
        AUTH_SECRET="test-secret",
        ADMIN_EMAIL=ADMIN_EMAIL,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        STORE_BACKEND="memory",
        PASSWORD_HASH_ITERATIONS=1_000,
    )


@pytest.fixture
def app(settings, transport, clock):
    return create_app(settings, transport=transport, clock=clock)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_headers(client):
    res = client.post("/api/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['token']}"}

import os
import uuid
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL

from billy_bingo.api.v1.deps import get_setlist_service
from billy_bingo.core import db as db_module
from billy_bingo.main import app
from billy_bingo.models.user import User
from billy_bingo.services.setlistfm import SetlistFmClient
from billy_bingo.services.setlists import SetlistService

db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def db():
    """
    Fresh database for tests that use the ORM without the HTTP client.
    """
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client():
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    """
    await _init_test_db()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    app.dependency_overrides.clear()
    await Tortoise.close_connections()


@pytest.fixture
def setlist_client():
    """
    A SetlistFmClient whose network methods are AsyncMocks, wired into the app
    in place of the real setlist service.
    """
    fake = SetlistFmClient(api_key="test-key")
    for name in (
        "get_configured_artist_setlists",
        "get_configured_artist",
        "get_setlist",
        "search_setlists",
    ):
        setattr(fake, name, AsyncMock())
    app.dependency_overrides[get_setlist_service] = lambda: SetlistService(fake, page_delay=0)
    yield fake
    app.dependency_overrides.pop(get_setlist_service, None)


@pytest_asyncio.fixture
async def create_user():
    """
    Factory fixture to create users directly via ORM.
    """

    async def _create_user(password: str = "UserPass123") -> tuple[User, str]:
        suffix = uuid.uuid4().hex[:6]
        user = User(name=f"user{suffix}", email=f"{suffix}@example.com")
        user.set_password(password)
        await user.save()
        return user, password

    return _create_user


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Helper fixture to obtain Authorization headers via the login endpoint.
    """

    async def _get_headers(email: str, password: str) -> dict[str, str]:
        resp = await client.post(
            "/api/users/login",
            json={"email": email, "password": password},
        )
        assert resp.status_code == 200, resp.text
        token = resp.json()["data"]["token"]
        return {"Authorization": f"Bearer {token}"}

    return _get_headers

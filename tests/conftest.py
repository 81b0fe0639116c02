"""Pytest configuration and fixtures for the fragments service.

Uses app.main:app for HTTP tests with a fresh in-memory store per test,
and parametrized store fixtures for backend contract tests. All imports use app.*.
"""

import os

os.environ.setdefault("STORAGE_BACKEND", "memory")

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.v1.dependencies import hash_owner
from app.core.config import get_settings
from app.infrastructure.external.storage import LocalFragmentStore, MemoryFragmentStore
from app.main import app

OWNER_HEADER = get_settings().owner_header_name


@pytest.fixture
def memory_store() -> MemoryFragmentStore:
    return MemoryFragmentStore()


@pytest.fixture(params=["memory", "local"])
def store(request: pytest.FixtureRequest, tmp_path):
    """Each fragment store backend, empty."""
    if request.param == "local":
        return LocalFragmentStore(storage_root=str(tmp_path / "fragments"))
    return MemoryFragmentStore()


@pytest.fixture
async def client(memory_store: MemoryFragmentStore) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with an empty store."""
    app.state.fragment_store = memory_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.state.fragment_store = None


@pytest.fixture
def owner_headers() -> dict[str, str]:
    """Headers for an authenticated owner."""
    return {OWNER_HEADER: "user1@example.com"}


@pytest.fixture
def other_owner_headers() -> dict[str, str]:
    return {OWNER_HEADER: "user2@example.com"}


@pytest.fixture
def owner_id() -> str:
    """Owner id the API derives from owner_headers."""
    return hash_owner("user1@example.com")

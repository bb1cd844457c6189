"""Shared fixtures: an app container wired to in-memory fakes.

The FastAPI lifespan does not run under ASGITransport, so the `client`
fixture starts and stops the session controller itself.
"""

from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.bootstrap import AppContainer, build_container
from src.cm_gateway.auth.local_storage import LocalStorage
from src.main import create_app
from tests.fakes import FakeAuthProvider, FakeListingRepository


@pytest.fixture
def provider() -> FakeAuthProvider:
    return FakeAuthProvider()


@pytest.fixture
def repo(provider: FakeAuthProvider) -> FakeListingRepository:
    return FakeListingRepository(viewer=lambda: provider.current_email)


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorage:
    return LocalStorage(tmp_path / "local_storage.json")


@pytest.fixture
def container(
    provider: FakeAuthProvider, repo: FakeListingRepository, storage: LocalStorage
) -> AppContainer:
    return build_container(provider, repo, storage)


@pytest_asyncio.fixture
async def client(container: AppContainer) -> AsyncClient:  # type: ignore[override]
    app = create_app(container)
    await container.controller.start()
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await container.controller.stop()

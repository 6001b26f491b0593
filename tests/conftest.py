"""Root conftest: shared test infrastructure.

Provides:
- anyio backend pinned to asyncio
- Autouse reset of GitHub caches and loaded static assets
- In-memory GitHub fake and settings fixtures
- API client with dependency overrides
"""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from app.config.settings import Settings
from app.services.assets import reset_assets
from app.services.github.cache import clear_all_caches
from tests.helpers.fake_github import FakeGitHub


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _reset_module_state():
    """Clear process-wide caches so tests never see each other's data."""
    clear_all_caches()
    reset_assets()
    yield
    clear_all_caches()
    reset_assets()


# ─────────────────────────────────────────────────────────────────────────────
# Site fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def fake_github() -> FakeGitHub:
    """Empty repository host; tests add repos and files as needed."""
    return FakeGitHub()


@pytest.fixture
def site_settings() -> Settings:
    """Settings serving octo/blog at the root, isolated from the environment."""
    return Settings(
        _env_file=None,
        site_owner="octo",
        site_repo="blog",
    )


@pytest.fixture
async def api_client(fake_github: FakeGitHub, site_settings: Settings):
    """AsyncClient against the app with GitHub and settings overridden."""
    from app.api.deps import get_content_source, get_settings
    from app.main import app

    app.dependency_overrides[get_content_source] = lambda: fake_github
    app.dependency_overrides[get_settings] = lambda: site_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()

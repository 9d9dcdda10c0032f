"""API test fixtures — isolated app + in-memory container per test.

Invariants:
    - Every test builds its own app and ServiceContainer (no shared state)
    - httpx ASGITransport skips the lifespan: the container is attached directly

Design Decisions:
    - Settings passed explicitly (collapse_seed fixed) so decisions are deterministic
    - settings_overrides fixture lets a test flip feature flags before the app is built
"""

import pytest
from httpx import ASGITransport, AsyncClient

from attune.config import Settings
from attune.main import create_app
from attune.services.container import build_container


@pytest.fixture
def settings_overrides() -> dict:
    return {}


@pytest.fixture
def settings(settings_overrides) -> Settings:
    return Settings(
        store_backend="memory", collapse_seed=1, log_format="text",
        **settings_overrides,
    )


@pytest.fixture
async def client(settings):
    app = create_app(settings)
    app.state.container = build_container(settings)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

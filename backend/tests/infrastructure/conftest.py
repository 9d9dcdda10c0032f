"""Infrastructure test fixtures — a throwaway SQLite database per test.

Invariants:
    - Every test gets a fresh file-backed SQLite database under tmp_path
    - Tables created from model metadata (no alembic in tests)
"""

import pytest

from attune.infrastructure.database import DatabaseSessionManager


@pytest.fixture
async def db(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    await manager.create_all()
    yield manager
    await manager.dispose()

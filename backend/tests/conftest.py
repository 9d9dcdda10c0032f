"""Root conftest — shared test configuration."""

import os

# Tests never touch a real database unless a test builds one explicitly
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("LOG_FORMAT", "text")

"""Root conftest — shared test configuration."""

import os

# Tests never talk to a real database or remote provider
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("PROVIDER", "local")
os.environ.setdefault("LOG_FORMAT", "text")

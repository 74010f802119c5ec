"""Root conftest — shared test configuration."""

import os

# Never reach real infrastructure from tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ORACLE_SERVICE_URL", "http://oracle.test")
os.environ.setdefault("REDIS_HOST", "localhost")
os.environ.setdefault("LOG_FORMAT", "text")

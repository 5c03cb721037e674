"""Root conftest — shared test configuration."""

import os

# Keep tests off real databases and away from a running relay
os.environ.setdefault("BOOKSTORE_DATABASE_URL", "sqlite+aiosqlite:///./test_bookstore.db")
os.environ.setdefault("BYTEDEFENCE_DATABASE_URL", "sqlite+aiosqlite:///./test_bytedefence.db")
os.environ.setdefault("BYTEDEFENCE_NOTIFICATION_MODE", "None")

"""ByteDefence database singleton — one DatabaseSessionManager per process.

Invariants:
    - init_db() is called once from the app lifespan
    - get_db_manager() raises until init_db() ran, so misuse fails loudly
"""

from graphql_demos.common.database import DatabaseSessionManager

db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


def get_db_manager() -> DatabaseSessionManager:
    if not db_manager:
        raise RuntimeError("Database not initialized")
    return db_manager


def peek_db_manager() -> DatabaseSessionManager | None:
    return db_manager

"""SQLite schema management (code-first approach)."""

import logging

from src.core.db_client import Database


logger = logging.getLogger(__name__)


# Central list of all collections in the schema
COLLECTIONS = ["tasks"]


def _get_collection_schema(*, collection_name: str) -> list[str]:
    """Get the DDL statements that create a collection and its indexes.

    Every statement is idempotent so the schema can be applied on each startup.
    """
    schemas = {
        "tasks": [
            """
            CREATE TABLE IF NOT EXISTS tasks (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL CHECK (length(title) > 0),
                description TEXT NOT NULL CHECK (length(description) > 0),
                due_date TEXT NOT NULL,
                date_created TEXT NOT NULL,
                completed INTEGER NOT NULL DEFAULT 0 CHECK (completed IN (0, 1))
            )
            """,
            # Ascending indexes backing the two supported sort orders
            "CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks (due_date ASC)",
            "CREATE INDEX IF NOT EXISTS idx_tasks_date_created ON tasks (date_created ASC)",
        ],
    }
    return schemas[collection_name]


async def init_db(database: Database) -> None:
    """Create all collections and indexes that do not exist yet."""
    logger.info("Starting schema sync...")

    for collection_name in COLLECTIONS:
        await database.execute_script(_get_collection_schema(collection_name=collection_name))
        logger.info("Collection %s schema is up to date", collection_name)

    logger.info("Schema sync complete")

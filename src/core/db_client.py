"""SQLite database client wrapper with CRUD operations."""

import json
import logging
import re
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import aiosqlite

from src.core.config import constants


logger = logging.getLogger(__name__)

# The year is formatted separately; strftime("%Y") does not zero-pad years before 1000.
TIMESTAMP_FORMAT = "-%m-%dT%H:%M:%S.%f+00:00"

# Largest value an SQLite INTEGER PRIMARY KEY can hold
MAX_RECORD_ID = 2**63 - 1


class DatabaseError(RuntimeError):
    """Raised when a statement cannot be executed against the store."""


class RecordNotFoundError(KeyError):
    """Raised when no record matches the requested id."""


def _validate_identifier(name: str) -> None:
    """Validate that a table or column name contains only alphanumeric characters and underscores."""
    if not re.match(r"^[a-zA-Z_][a-zA-Z0-9_]*$", name):
        msg = f"Invalid identifier: {name}. Only alphanumeric characters and underscores are allowed."
        raise ValueError(msg)


def _parse_record_id(collection: str, record_id: str) -> int:
    """Convert an opaque record id to the integer primary key.

    Only the canonical form the store issues is accepted (ASCII digits, no sign, no leading zero,
    within the 64-bit key range). Anything else cannot name a record and is reported as missing.
    """
    if (
        not isinstance(record_id, str)
        or not record_id.isascii()
        or not record_id.isdigit()
        or record_id.startswith("0")
        or len(record_id) > len(str(MAX_RECORD_ID))
        or int(record_id) > MAX_RECORD_ID
    ):
        msg = f"Record not found in {collection}: {record_id}"
        raise RecordNotFoundError(msg)
    return int(record_id)


def _convert_record_ids(record: dict[str, Any]) -> dict[str, Any]:
    """Convert the integer primary key to a string for Pydantic compatibility."""
    converted = record.copy()
    if isinstance(converted.get("id"), int):
        converted["id"] = str(converted["id"])
    return converted


def format_timestamp(value: datetime) -> str:
    """Format a datetime as a fixed-width UTC ISO-8601 string.

    Naive datetimes are taken to be UTC. Fixed width keeps lexical and chronological order identical,
    which the sorted indexes rely on.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    return f"{value.year:04d}" + value.strftime(TIMESTAMP_FORMAT)


def _to_db_value(value: Any) -> Any:
    """Convert a Python value to the representation stored in SQLite."""
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, dict | list):
        return json.dumps(value)
    return value


def _rows_to_records(cursor: aiosqlite.Cursor, rows: list[Any]) -> list[dict[str, Any]]:
    columns = [description[0] for description in cursor.description]
    return [_convert_record_ids(dict(zip(columns, row, strict=True))) for row in rows]


def get_db_path(db_path: str) -> str:
    """Resolve a database path, leaving the in-memory marker untouched."""
    if db_path == constants.IN_MEMORY_DATABASE:
        return db_path
    return str(Path(db_path).resolve())


class Database:
    """Handle on an open SQLite store.

    One instance is opened per process and passed to whoever needs it.
    The connection runs in autocommit mode, so each statement is its own transaction.
    """

    def __init__(self, conn: aiosqlite.Connection, *, path: str) -> None:
        self._conn = conn
        self.path = path

    @classmethod
    async def connect(cls, db_path: str) -> "Database":
        """Open a connection to the SQLite database at db_path."""
        path = get_db_path(db_path)
        try:
            if path != constants.IN_MEMORY_DATABASE:
                Path(path).parent.mkdir(parents=True, exist_ok=True)

            conn = await aiosqlite.connect(path, isolation_level=None)
            await conn.execute("PRAGMA journal_mode = WAL")
        except Exception as e:
            logger.error("database_connect_failed", extra={"db_path": path, "error": str(e)})
            msg = f"Failed to open database at {path}: {e}"
            raise DatabaseError(msg) from e

        logger.info("Created new SQLite connection", extra={"db_path": path})
        return cls(conn, path=path)

    async def close(self) -> None:
        """Close the underlying connection."""
        try:
            await self._conn.close()
            logger.info("Closed SQLite connection", extra={"db_path": self.path})
        except Exception as e:
            logger.warning("Error closing SQLite connection", extra={"db_path": self.path, "error": str(e)})

    async def execute_script(self, statements: list[str]) -> None:
        """Run DDL statements in order."""
        try:
            for statement in statements:
                await self._conn.execute(statement)
        except Exception as e:
            logger.error("execute_script_failed", extra={"db_path": self.path, "error": str(e)})
            msg = f"Failed to execute schema statements: {e}"
            raise DatabaseError(msg) from e

    async def create_record(self, *, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a new record and return it with its assigned id."""
        try:
            _validate_identifier(collection)
            for column in data:
                _validate_identifier(column)

            columns_str = ", ".join(data)
            placeholders_str = ", ".join("?" for _ in data)
            values = [_to_db_value(val) for val in data.values()]

            query = f"INSERT INTO {collection} ({columns_str}) VALUES ({placeholders_str}) RETURNING *"  # noqa: S608 - identifiers are validated
            cursor = await self._conn.execute(query, values)
            records = _rows_to_records(cursor, await cursor.fetchall())
        except Exception as e:
            logger.error("create_record_failed", extra={"collection": collection, "error": str(e)})
            msg = f"Failed to create record in {collection}: {e}"
            raise DatabaseError(msg) from e

        record = records[0]
        logger.info("Created record", extra={"collection": collection, "record_id": record["id"]})
        return record

    async def get_record(self, *, collection: str, record_id: str) -> dict[str, Any]:
        """Fetch a single record by ID, raising RecordNotFoundError if not found."""
        pk = _parse_record_id(collection, record_id)
        try:
            _validate_identifier(collection)
            query = f"SELECT * FROM {collection} WHERE id = ?"  # noqa: S608 - collection is validated
            cursor = await self._conn.execute(query, (pk,))
            records = _rows_to_records(cursor, await cursor.fetchall())
        except Exception as e:
            logger.error("get_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)})
            msg = f"Failed to get record from {collection}: {e}"
            raise DatabaseError(msg) from e

        if not records:
            msg = f"Record not found in {collection}: {record_id}"
            raise RecordNotFoundError(msg)

        logger.info("Retrieved record", extra={"collection": collection, "record_id": record_id})
        return records[0]

    async def update_record(self, *, collection: str, record_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Update a record by ID and return the record as it stands after the update."""
        if not data:
            msg = "Empty update payload"
            raise ValueError(msg)

        pk = _parse_record_id(collection, record_id)
        try:
            _validate_identifier(collection)
            for column in data:
                _validate_identifier(column)

            set_clause = ", ".join(f"{key} = ?" for key in data)
            values = [_to_db_value(val) for val in data.values()]
            values.append(pk)

            query = f"UPDATE {collection} SET {set_clause} WHERE id = ? RETURNING *"  # noqa: S608 - identifiers are validated
            cursor = await self._conn.execute(query, values)
            records = _rows_to_records(cursor, await cursor.fetchall())
        except Exception as e:
            logger.error(
                "update_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)}
            )
            msg = f"Failed to update record in {collection}: {e}"
            raise DatabaseError(msg) from e

        if not records:
            msg = f"Record not found in {collection}: {record_id}"
            raise RecordNotFoundError(msg)

        logger.info("Updated record", extra={"collection": collection, "record_id": record_id})
        return records[0]

    async def delete_record(self, *, collection: str, record_id: str) -> dict[str, Any]:
        """Delete a record by ID and return its state prior to deletion."""
        pk = _parse_record_id(collection, record_id)
        try:
            _validate_identifier(collection)
            query = f"DELETE FROM {collection} WHERE id = ? RETURNING *"  # noqa: S608 - collection is validated
            cursor = await self._conn.execute(query, (pk,))
            records = _rows_to_records(cursor, await cursor.fetchall())
        except Exception as e:
            logger.error(
                "delete_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)}
            )
            msg = f"Failed to delete record from {collection}: {e}"
            raise DatabaseError(msg) from e

        if not records:
            msg = f"Record not found in {collection}: {record_id}"
            raise RecordNotFoundError(msg)

        logger.info("Deleted record", extra={"collection": collection, "record_id": record_id})
        return records[0]

    async def list_records(self, *, collection: str, sort: str = "") -> list[dict[str, Any]]:
        """List all records, ascending by the sort column or in insertion order when sort is empty."""
        try:
            _validate_identifier(collection)
            order_by = "id ASC"
            if sort:
                _validate_identifier(sort)
                order_by = f"{sort} ASC, id ASC"

            query = f"SELECT * FROM {collection} ORDER BY {order_by}"  # noqa: S608 - identifiers are validated
            cursor = await self._conn.execute(query)
            records = _rows_to_records(cursor, await cursor.fetchall())
        except Exception as e:
            logger.error("list_records_failed", extra={"collection": collection, "sort": sort, "error": str(e)})
            msg = f"Failed to list records from {collection}: {e}"
            raise DatabaseError(msg) from e

        logger.info("Listed records", extra={"collection": collection, "count": len(records)})
        return records

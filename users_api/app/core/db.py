"""
SQLite database integration and simple migration system.

This module opens non‑blocking connections through ``aiosqlite``
(``Database.connect``) and prepares the schema on application start
(``init_db``).  ``aiosqlite`` runs each SQLite connection on its own
helper thread, so awaiting a statement suspends the calling coroutine
without blocking the event loop.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, List, Tuple

import aiosqlite

from .config import Settings

logger = logging.getLogger(__name__)

USER_TABLE = "User"

# Each migration is a list of single statements.  They run through
# ``execute`` rather than ``executescript``, which would commit the
# surrounding transaction.
MIGRATIONS: List[Tuple[int, List[str]]] = [
    # Migration 1: the User table.  Ids are supplied by clients, so the
    # primary key is not autoincremented.
    (
        1,
        [
            """
            CREATE TABLE IF NOT EXISTS User (
                id INTEGER PRIMARY KEY,
                name VARCHAR(80) NOT NULL UNIQUE
            )
            """,
        ],
    ),
]

DEMO_USERS: List[Tuple[int, str]] = [(1, "Mimi"), (2, "Mickey")]


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are returned unchanged; relative paths are
    resolved against the project root.  Every store operation opens
    its own connection, so ``:memory:`` databases are not supported.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


class Database:
    """Factory for short‑lived ``aiosqlite`` connections to one database file."""

    def __init__(self, path: str) -> None:
        self.path = path

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(get_database_path(settings.database_url))

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield an open connection and close it on exit.

        Rows are returned as ``sqlite3.Row`` so columns can be accessed
        by name.  Uncommitted work is rolled back when the connection is
        closed, so writers must commit explicitly.
        """
        conn = await aiosqlite.connect(self.path)
        conn.row_factory = aiosqlite.Row
        try:
            yield conn
        finally:
            await conn.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield a connection whose work is committed on success and rolled back on error."""
        async with self.connect() as conn:
            try:
                yield conn
            except Exception:
                await conn.rollback()
                raise
            else:
                await conn.commit()


async def init_db(database: Database, settings: Settings) -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version and applies newer entries of ``MIGRATIONS``.
    When ``settings.reset_database`` is set, the ``User`` table is
    dropped and recreated first.  When ``settings.seed_demo_data`` is
    set, the demo users are inserted unless their ids are taken.

    Everything runs in one explicit transaction, DDL included, so a
    failing migration leaves the database as it was.
    """
    async with database.transaction() as conn:
        await conn.execute("BEGIN")
        await conn.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        if settings.reset_database:
            logger.warning("Dropping table %s", USER_TABLE)
            await conn.execute(f"DROP TABLE IF EXISTS {USER_TABLE}")
            await conn.execute("DELETE FROM migrations")

        cursor = await conn.execute("SELECT MAX(version) AS version FROM migrations")
        row = await cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, statements in MIGRATIONS:
            if version > current_version:
                logger.info("Applying migration %d", version)
                for statement in statements:
                    await conn.execute(statement)
                await conn.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                current_version = version

        if settings.seed_demo_data:
            await conn.executemany(
                f"INSERT OR IGNORE INTO {USER_TABLE} (id, name) VALUES (?, ?)",
                DEMO_USERS,
            )
            logger.info("Seeded demo users %s", [name for _, name in DEMO_USERS])

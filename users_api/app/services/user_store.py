"""
Persistence for users.

``UserStore`` issues every statement against the ``User`` table.  The
expected alternatives of each write (created or already there, updated
or missing, deleted or missing) are returned as enum members so the
HTTP layer can map each of them to a response.  Only conditions that
should never happen, such as an update touching two rows, are raised.
"""

import enum
import logging
from typing import AsyncIterator, Optional, TypeVar

from ..core.db import USER_TABLE, Database
from ..schemas.user import User

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=enum.Enum)


class CreateResult(enum.Enum):
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


class UpdateResult(enum.Enum):
    UPDATED = "updated"
    NOT_FOUND = "not_found"


class DeleteResult(enum.Enum):
    DELETED = "deleted"
    NOT_FOUND = "not_found"


class UnexpectedRowCountError(RuntimeError):
    """A statement keyed on the primary key affected more than one row."""

    def __init__(self, operation: str, target: object, row_count: int) -> None:
        super().__init__(
            f"{operation} for user {target} affected {row_count} rows "
            "when at most 1 row was expected"
        )
        self.operation = operation
        self.target = target
        self.row_count = row_count


def outcome_for_row_count(
    row_count: int, one: R, none: R, operation: str, target: object
) -> R:
    """Map the number of affected rows to an outcome.

    ``1`` maps to ``one`` and ``0`` to ``none``.  Any other count means
    the primary key is no longer unique and raises
    :class:`UnexpectedRowCountError`.
    """
    if row_count == 1:
        return one
    if row_count == 0:
        return none
    logger.error("%s for user %s affected %d rows", operation, target, row_count)
    raise UnexpectedRowCountError(operation, target, row_count)


def _to_user(row) -> User:
    return User(id=row["id"], name=row["name"])


class UserStore:
    """CRUD operations on the ``User`` table."""

    def __init__(self, database: Database) -> None:
        self.database = database

    async def list_all(self) -> AsyncIterator[User]:
        """Yield every stored user, in no particular order.

        Each call runs a fresh query, so the iterator can be restarted by
        calling ``list_all`` again.
        """
        async with self.database.connect() as conn:
            async with conn.execute(f"SELECT id, name FROM {USER_TABLE}") as cursor:
                async for row in cursor:
                    yield _to_user(row)

    async def find_by_id(self, user_id: int) -> Optional[User]:
        """Return the user with ``user_id`` or ``None`` if there is none."""
        async with self.database.connect() as conn:
            cursor = await conn.execute(
                f"SELECT id, name FROM {USER_TABLE} WHERE id = ?", (user_id,)
            )
            row = await cursor.fetchone()
        return _to_user(row) if row is not None else None

    async def create(self, user: User) -> CreateResult:
        """Insert ``user`` unless a row with its id already exists.

        The lookup spares a write for the common duplicate case.  The
        insert itself is conditional on the id, so two concurrent creates
        of the same fresh id yield exactly one ``CREATED``.  A name that
        is already taken by another id violates the unique constraint
        and propagates as ``sqlite3.IntegrityError``.
        """
        if await self.find_by_id(user.id) is not None:
            logger.info("User %d already exists", user.id)
            return CreateResult.ALREADY_EXISTS

        async with self.database.transaction() as conn:
            cursor = await conn.execute(
                f"INSERT INTO {USER_TABLE} (id, name) VALUES (?, ?) "
                "ON CONFLICT(id) DO NOTHING",
                (user.id, user.name),
            )
            result = outcome_for_row_count(
                cursor.rowcount,
                CreateResult.CREATED,
                CreateResult.ALREADY_EXISTS,
                "create",
                user,
            )
        logger.info("Create user %d: %s", user.id, result.value)
        return result

    async def update(self, user: User) -> UpdateResult:
        """Set the name of the user with ``user.id``."""
        async with self.database.transaction() as conn:
            cursor = await conn.execute(
                f"UPDATE {USER_TABLE} SET name = ? WHERE id = ?", (user.name, user.id)
            )
            result = outcome_for_row_count(
                cursor.rowcount,
                UpdateResult.UPDATED,
                UpdateResult.NOT_FOUND,
                "update",
                user,
            )
        logger.info("Update user %d: %s", user.id, result.value)
        return result

    async def delete(self, user_id: int) -> DeleteResult:
        async with self.database.transaction() as conn:
            cursor = await conn.execute(
                f"DELETE FROM {USER_TABLE} WHERE id = ?", (user_id,)
            )
            result = outcome_for_row_count(
                cursor.rowcount,
                DeleteResult.DELETED,
                DeleteResult.NOT_FOUND,
                "delete",
                user_id,
            )
        logger.info("Delete user %d: %s", user_id, result.value)
        return result

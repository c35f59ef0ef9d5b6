"""
Pydantic model for user data.

The same shape is used for request bodies and responses: clients
choose the ``id`` themselves, so there is no separate create schema.
"""

from pydantic import BaseModel, ConfigDict, Field

# SQLite stores INTEGER values as signed 64‑bit numbers.
USER_ID_MIN = -(2**63)
USER_ID_MAX = 2**63 - 1


class User(BaseModel):
    """A user as stored in the ``User`` table and exchanged as JSON."""

    id: int = Field(..., ge=USER_ID_MIN, le=USER_ID_MAX, examples=[1])
    name: str = Field(..., min_length=1, max_length=80, examples=["Mimi"])

    model_config = ConfigDict(frozen=True)

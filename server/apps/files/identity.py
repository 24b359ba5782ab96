"""Identifier generation and primary key strategies for file records.

A record's identity doubles as the object key in blob storage, so the
textual form produced by ``serialize`` must stay stable.
"""

import uuid
from abc import ABC, abstractmethod
from typing import Final, final, overload, override

from django.db import models

# Shown for records whose database-assigned key does not exist yet
_UNASSIGNED: Final = 'N/A'


def new_id() -> uuid.UUID:
    """Generate a random (version 4) UUID.

    Returns:
        New UUID. Uniqueness relies on the 122 random bits alone.
    """
    return uuid.uuid4()


def serialize(identifier: object) -> str:
    """Convert identifier to its canonical string form.

    Args:
        identifier: UUID or any other primary key value.

    Returns:
        Lowercase hyphenated string for UUIDs, ``str()`` otherwise.
    """
    # str(UUID) is already the lowercase hyphenated RFC 4122 form
    return str(identifier)


@overload
def to_binary(ids: str) -> bytes: ...


@overload
def to_binary(ids: list[str]) -> list[bytes]: ...


def to_binary(ids: str | list[str]) -> bytes | list[bytes]:
    """Convert UUID string(s) to 16-byte binary form.

    Args:
        ids: UUID string or list of UUID strings.

    Returns:
        Binary representation(s), in input order.

    Raises:
        ValueError: If a string is not a valid UUID.
    """
    if isinstance(ids, str):
        return uuid.UUID(ids).bytes
    return [uuid.UUID(identifier).bytes for identifier in ids]


def from_binary(raw: bytes) -> str:
    """Convert 16-byte binary UUID back to string form.

    Args:
        raw: Binary UUID.

    Returns:
        Canonical UUID string.

    Raises:
        ValueError: If ``raw`` is not 16 bytes long.
    """
    return str(uuid.UUID(bytes=raw))


class IdentityStrategy(ABC):
    """How a record type obtains and renders its primary key."""

    @abstractmethod
    def primary_key_field(self) -> models.Field:  # type: ignore[type-arg]
        """Build a fresh primary key field for a model."""

    @abstractmethod
    def serialize(self, value: object) -> str:
        """Render a primary key value as a storage key."""


@final
class UuidIdentity(IdentityStrategy):
    """Random UUID assigned when the instance is constructed."""

    @override
    def primary_key_field(self) -> models.UUIDField:  # type: ignore[type-arg]
        return models.UUIDField(
            primary_key=True,
            default=new_id,
            editable=False,
        )

    @override
    def serialize(self, value: object) -> str:
        return serialize(value)


@final
class AutoIncrementIdentity(IdentityStrategy):
    """Sequential integer assigned by the database on insert."""

    @override
    def primary_key_field(self) -> models.BigAutoField:  # type: ignore[type-arg]
        return models.BigAutoField(primary_key=True)

    @override
    def serialize(self, value: object) -> str:
        if value is None:
            return _UNASSIGNED
        return str(value)

"""Reference types accepted by the role permission mutators."""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from attrs import define, field
from django.db import models

__all__ = [
    "InvalidPermissionReference",
    "PermissionKey",
    "PermissionKeySource",
]


class InvalidPermissionReference(ValueError):
    """Raised when a value cannot be resolved to a permission primary key."""


class PermissionKeySource(Enum):
    """Shapes a permission reference may take before it is resolved.

    Attributes:
        IDENTIFIER: A bare primary key (e.g., ``7`` or ``"7"``).
        ENTITY: A saved model instance exposing its primary key (e.g., a ``Permission``).
        MAPPING: A mapping carrying the primary key under ``"id"`` (e.g., ``{"id": 7}``).
    """

    IDENTIFIER = "identifier"
    ENTITY = "entity"
    MAPPING = "mapping"


@define(frozen=True)
class PermissionKey:
    """A permission primary key resolved from one of the accepted reference shapes.

    Attributes:
        value: The primary key passed to the many-to-many manager.
        source: Which shape the key was resolved from.

    Examples:
        >>> PermissionKey.from_reference(7)
        PermissionKey(value=7, source=<PermissionKeySource.IDENTIFIER: 'identifier'>)
        >>> PermissionKey.from_reference({"id": 7}).value
        7
    """

    value: int | str = field()
    source: PermissionKeySource = field(default=PermissionKeySource.IDENTIFIER)

    @classmethod
    def from_reference(cls, reference: Any) -> "PermissionKey":
        """Resolve a permission reference to its primary key.

        Args:
            reference: A primary key, a saved model instance or a mapping with an ``"id"`` entry.

        Returns:
            PermissionKey: The resolved key.

        Raises:
            InvalidPermissionReference: If the reference has none of the accepted shapes.
        """
        if isinstance(reference, PermissionKey):
            return reference

        if isinstance(reference, models.Model):
            if reference.pk is None:
                raise InvalidPermissionReference(f"Unsaved {type(reference).__name__} has no primary key.")
            return cls(value=reference.pk, source=PermissionKeySource.ENTITY)

        if isinstance(reference, Mapping):
            if "id" not in reference:
                raise InvalidPermissionReference(f"Permission mapping has no 'id' entry: {reference!r}")
            return cls(value=cls._check_identifier(reference["id"]), source=PermissionKeySource.MAPPING)

        return cls(value=cls._check_identifier(reference), source=PermissionKeySource.IDENTIFIER)

    @staticmethod
    def _check_identifier(value: Any) -> int | str:
        # bool is an int subclass but never a primary key
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise InvalidPermissionReference(f"Invalid permission reference: {value!r}")
        return value

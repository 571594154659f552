"""Attribute value classification."""

from enum import Enum
from typing import Any


class ValueKind(Enum):
    """Kind of a Jolokia attribute value."""

    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    SEQUENCE = "sequence"
    NULL = "null"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def of(cls, value: Any) -> "ValueKind":
        """
        Classify a decoded JSON value.

        Args:
            value: Value as produced by json.loads

        Returns:
            ValueKind: Kind of the value
        """
        if value is None:
            return cls.NULL
        # bool is a subclass of int, check it first
        if isinstance(value, bool):
            return cls.UNRECOGNIZED
        if isinstance(value, int):
            return cls.INTEGER
        if isinstance(value, float):
            return cls.FLOAT
        if isinstance(value, str):
            return cls.TEXT
        if isinstance(value, (list, tuple)):
            return cls.SEQUENCE
        return cls.UNRECOGNIZED

    @property
    def is_numeric(self) -> bool:
        """True for kinds that take part in zero suppression."""
        return self in (ValueKind.INTEGER, ValueKind.FLOAT)

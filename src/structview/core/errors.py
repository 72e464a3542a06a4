"""
Core exception types raised by field descriptors and the record wrapper.

Two families are kept apart:
- FieldError and its subclasses are recoverable. They are raised by
  Field.set/Field.zero when a mutation cannot be performed; storage is left
  untouched.
- PreconditionFailed and its subclasses signal caller bugs (reading an
  unexported field, descending into something that is not a record).

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Lookup misses in Field.field() are not errors; they return None.

Examples:
    Catch a rejected assignment.

    >>> from structview.core.errors import TypeMismatchError
    >>> err = TypeMismatchError("str", "int")
    >>> str(err)
    "can't assign str to int"
    >>> isinstance(err, TypeError)
    True
"""

from __future__ import annotations

__all__ = [
    "StructViewError",
    "FieldError",
    "NotExportedError",
    "NotSettableError",
    "TypeMismatchError",
    "PreconditionFailed",
    "NotExportedAccessError",
    "NotAStructError",
    "FieldNotFoundError",
]


class StructViewError(Exception):
    """Base class for every error raised by structview."""


class FieldError(StructViewError):
    """Recoverable failure of a field mutation."""


class NotExportedError(FieldError):
    """Attempted set/zero on a field that is not exported."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        super().__init__("field is not exported" + (f": {name!r}" if name else ""))


class NotSettableError(FieldError):
    """Attempted set/zero on a field whose storage is not addressable."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        super().__init__("field is not settable" + (f": {name!r}" if name else ""))


class TypeMismatchError(FieldError, TypeError):
    """
    Offered value's type is not assignable to the field's type.

    Attributes:
        offered (str): Description of the offered value's type.
        required (str): Description of the field's declared type.
    """

    def __init__(self, offered: str, required: str) -> None:
        self.offered = offered
        self.required = required
        super().__init__(f"can't assign {offered} to {required}")


class PreconditionFailed(StructViewError, RuntimeError):
    """Contract violation by the caller; not a recoverable condition."""


class NotExportedAccessError(PreconditionFailed):
    """Value of an unexported field was read."""


class NotAStructError(PreconditionFailed, TypeError):
    """Record traversal was requested on a value that is not a structured record."""


class FieldNotFoundError(StructViewError, KeyError):
    """Struct.field() was asked for a name the record does not declare."""

    def __str__(self) -> str:
        # KeyError repr-quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""

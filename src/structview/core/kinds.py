"""
Coarse value classification returned by Field.kind().

Naming follows the usual enum policy:
   - Enum class: PascalCase
   - Enum member names: UPPER_SNAKE
   - Enum serialized values: lower_snake

Callers use the kind to decide whether recursive descent via Field.fields()
applies (Kind.STRUCT) before calling it.

Examples
--------
>>> from structview.core.kinds import Kind, kind_of, kind_from_value
>>> kind_of("abc") is Kind.STRING
True
>>> kind_of(True) is Kind.BOOL
True
>>> kind_from_value("STRUCT") is Kind.STRUCT
True
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping, Set
from typing import Any

from .errors import StructViewError
from .records import is_record

__all__ = [
    "Kind",
    "kind_of",
    "kind_from_value",
]


class Kind(enum.Enum):
    """
    Coarse runtime classification of a field value.

    Notes:
        BOOL is checked before INT (bool subclasses int) and ENUM before the
        scalar kinds (IntEnum/StrEnum subclass int/str).
    """

    NONE = "none"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    COMPLEX = "complex"
    STRING = "string"
    BYTES = "bytes"
    ENUM = "enum"
    LIST = "list"
    TUPLE = "tuple"
    SET = "set"
    MAP = "map"
    STRUCT = "struct"
    FUNC = "func"
    OBJECT = "object"


# Order matters: first match wins.
_KIND_CHECKS: tuple[tuple[Kind, Callable[[Any], bool]], ...] = (
    (Kind.NONE, lambda v: v is None),
    (Kind.STRUCT, is_record),
    (Kind.ENUM, lambda v: isinstance(v, enum.Enum)),
    (Kind.BOOL, lambda v: isinstance(v, bool)),
    (Kind.INT, lambda v: isinstance(v, int)),
    (Kind.FLOAT, lambda v: isinstance(v, float)),
    (Kind.COMPLEX, lambda v: isinstance(v, complex)),
    (Kind.STRING, lambda v: isinstance(v, str)),
    (Kind.BYTES, lambda v: isinstance(v, (bytes, bytearray, memoryview))),
    (Kind.TUPLE, lambda v: isinstance(v, tuple)),
    (Kind.LIST, lambda v: isinstance(v, list)),
    (Kind.SET, lambda v: isinstance(v, Set)),
    (Kind.MAP, lambda v: isinstance(v, Mapping)),
    (Kind.FUNC, callable),
)


def kind_of(value: Any) -> Kind:
    """
    Classify a runtime value.

    Args:
        value (Any): Any Python object.

    Returns:
        Kind: First matching kind; Kind.OBJECT when nothing more specific applies.
    """
    for kind, check in _KIND_CHECKS:
        if check(value):
            return kind
    return Kind.OBJECT


def kind_from_value(s: str) -> Kind:
    """
    Parse a serialized kind (case-insensitive).

    Raises:
        StructViewError: If the value does not name a Kind.
    """
    try:
        return Kind(s.strip().lower())
    except ValueError as exc:
        raise StructViewError(f"unknown kind: {s!r}") from exc

"""
structview.record: root wrapper and conveniences over structview.core.

## Public API
- Struct: wraps one record; builds root Field descriptors.
- RecordSettings: tag name / detached / flatten defaults (env > TOML > defaults).
- fields, names, values, to_map, is_zero, has_zero, is_struct, struct_name:
  one-shot helpers that wrap a fresh Struct.

## Import DAG discipline
- Depends only on stdlib, python-dotenv and structview.core.*.

## Examples
```python
from dataclasses import dataclass, field
from structview.record import to_map, names

@dataclass
class Person:
    name: str = ""
    age: int = field(default=0, metadata={"structs": "-"})

names(Person(name="Ann", age=30))   # ['name']
to_map(Person(name="Ann", age=30))  # {'name': 'Ann'}
```
"""

from __future__ import annotations

from typing import Any

from structview.core.field import Field
from structview.core.records import is_record
from structview.core.typing import JsonDict

from .config import RecordSettings
from .struct import Struct

__all__ = [
    "Struct",
    "RecordSettings",
    "fields",
    "names",
    "values",
    "to_map",
    "is_zero",
    "has_zero",
    "is_struct",
    "struct_name",
]


def fields(record: Any, tag_name: str | None = None) -> list[Field]:
    """Field descriptors of record (see Struct.fields)."""
    return Struct(record, tag_name=tag_name).fields()


def names(record: Any, tag_name: str | None = None) -> list[str]:
    """Exported, visible field names of record."""
    return Struct(record, tag_name=tag_name).names()


def values(record: Any, tag_name: str | None = None) -> list[Any]:
    """Exported, visible field values of record."""
    return Struct(record, tag_name=tag_name).values()


def to_map(record: Any, tag_name: str | None = None) -> JsonDict:
    """Mapping of record's exported, visible fields."""
    return Struct(record, tag_name=tag_name).to_map()


def is_zero(record: Any, tag_name: str | None = None) -> bool:
    """True when every exported, visible field of record is zero."""
    return Struct(record, tag_name=tag_name).is_zero()


def has_zero(record: Any, tag_name: str | None = None) -> bool:
    """True when any exported, visible field of record is zero."""
    return Struct(record, tag_name=tag_name).has_zero()


def is_struct(value: Any) -> bool:
    """True for dataclass and pydantic model instances."""
    return is_record(value)


def struct_name(record: Any) -> str:
    """Class name of record."""
    return Struct(record).name()

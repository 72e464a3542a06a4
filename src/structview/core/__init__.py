"""
Core package aggregator for structview (field descriptors, record metadata, tags, kinds, types, errors).

## Contracts
- Field: descriptor over one record field: tag/value/name/kind accessors,
  set/zero mutation, fields()/field() recursive descent.
- Records: dataclass and pydantic reflection (ordered RecordField metadata,
  frozen flags, record construction).
- Tags: StructTag key -> value lookup and `name,option` value parsing.
- Kinds: coarse Kind classification of runtime values.
- Types: assignability, zero values, display names for annotations.
- Errors: FieldError (recoverable) vs PreconditionFailed (caller bugs).

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- Descriptors are transient views over live records; nothing is cached
  except per-class field metadata.

## Downstream usage
- structview.record: builds root descriptors for a record (Struct) and the
  conveniences layered on them (to_map, names, values, is_zero, has_zero).

## Examples
```python
from dataclasses import dataclass
from structview.core import descriptor_for

@dataclass
class Address:
    city: str = ""

@dataclass
class User:
    name: str = ""
    address: Address | None = None

u = User(name="Ann", address=Address(city="Oslo"))
addr = descriptor_for(u, "address", "structs")
addr.field("city").set("Bergen")
u.address.city  # 'Bergen'
```
"""

from __future__ import annotations

from .constants import DEFAULT_TAG_NAME, SKIP_MARKER
from .errors import (
    FieldError,
    FieldNotFoundError,
    NotAStructError,
    NotExportedAccessError,
    NotExportedError,
    NotSettableError,
    PreconditionFailed,
    StructViewError,
    TypeMismatchError,
)
from .field import Field, Handle, descriptor_for, descriptors_of
from .kinds import Kind, kind_of
from .records import RecordField, is_record, is_record_type, record_fields
from .tags import StructTag, TagOptions, parse_tag_value

__all__ = [
    "DEFAULT_TAG_NAME",
    "SKIP_MARKER",
    "Field",
    "Handle",
    "descriptor_for",
    "descriptors_of",
    "Kind",
    "kind_of",
    "RecordField",
    "is_record",
    "is_record_type",
    "record_fields",
    "StructTag",
    "TagOptions",
    "parse_tag_value",
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

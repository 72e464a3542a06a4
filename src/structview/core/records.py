"""
Runtime record metadata: the reflection layer behind Field descriptors.

A structured record is an instance of a dataclass or of a pydantic BaseModel.
For either flavour this module answers three questions:

- which fields does the record declare, in order (record_fields);
- what static metadata does each field carry (RecordField);
- can its fields be assigned at all (is_frozen).

Conventions
- Exported: names without a leading underscore. Pydantic private attributes
  (PrivateAttr) are listed after the model fields as unexported fields.
- Embedded: ``metadata={"embedded": True}`` (dataclass) or
  ``json_schema_extra={"embedded": True}`` (pydantic).
- Annotations are resolved with typing.get_type_hints; an annotation that
  cannot be resolved stays a string and is treated as accepting any value.

Examples:
    >>> from dataclasses import dataclass, field
    >>> from structview.core.records import record_fields
    >>> @dataclass
    ... class Point:
    ...     x: int = 0
    ...     _y: int = field(default=0, metadata={"structs": "-"})
    >>> [(f.name, f.exported, f.tag.get("structs")) for f in record_fields(Point)]
    [('x', True, ''), ('_y', False, '-')]
"""

from __future__ import annotations

import dataclasses
import typing
import weakref
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from pydantic_core import PydanticUndefined

from .constants import EMBEDDED_METADATA_KEY
from .tags import StructTag

__all__ = [
    "MISSING",
    "RecordField",
    "is_record",
    "is_record_type",
    "is_frozen",
    "record_fields",
    "find_field",
    "build_record",
]

class _Missing:
    """Marker for "no declared default"."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@dataclass(frozen=True)
class RecordField:
    """
    Static description of one declared field.

    Attributes:
        name (str): Attribute name on the record instance.
        annotation (Any): Resolved type hint (a string when unresolvable).
        exported (bool): False for names starting with an underscore.
        embedded (bool): Field flagged as an embedded (anonymous) record.
        tag (StructTag): Parsed tag metadata.
        frozen (bool): Field-level immutability (pydantic ``Field(frozen=True)``).
        default (Any): Declared default, or MISSING.
        default_factory (Callable[[], Any] | None): Declared default factory.
    """

    name: str
    annotation: Any
    exported: bool
    embedded: bool = False
    tag: StructTag = StructTag()
    frozen: bool = False
    default: Any = MISSING
    default_factory: Callable[[], Any] | None = None

    def has_default(self) -> bool:
        return self.default is not MISSING or self.default_factory is not None


def is_record_type(tp: Any) -> bool:
    """True for dataclass classes and pydantic model classes."""
    if not isinstance(tp, type):
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def is_record(value: Any) -> bool:
    """True for dataclass instances and pydantic model instances (not the classes)."""
    return not isinstance(value, type) and is_record_type(type(value))


def _record_type(record: Any) -> type:
    return record if isinstance(record, type) else type(record)


def is_frozen(record: Any) -> bool:
    """True when instances of the record's class reject attribute assignment."""
    cls = _record_type(record)
    if issubclass(cls, BaseModel):
        return bool(cls.model_config.get("frozen", False))
    params = getattr(cls, "__dataclass_params__", None)
    return bool(params is not None and params.frozen)


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        # Forward references to names not visible from the class's module.
        return {}


def _dataclass_fields(cls: type) -> tuple[RecordField, ...]:
    hints = _type_hints(cls)
    out: list[RecordField] = []
    for f in dataclasses.fields(cls):
        metadata = f.metadata or {}
        default = MISSING if f.default is dataclasses.MISSING else f.default
        factory = None if f.default_factory is dataclasses.MISSING else f.default_factory
        out.append(
            RecordField(
                name=f.name,
                annotation=hints.get(f.name, f.type),
                exported=not f.name.startswith("_"),
                embedded=bool(metadata.get(EMBEDDED_METADATA_KEY, False)),
                tag=StructTag.from_metadata(metadata),
                default=default,
                default_factory=factory,
            )
        )
    return tuple(out)


def _pydantic_fields(cls: type[BaseModel]) -> tuple[RecordField, ...]:
    out: list[RecordField] = []
    for name, info in cls.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, Mapping) else {}
        default = MISSING if info.default is PydanticUndefined else info.default
        out.append(
            RecordField(
                name=name,
                annotation=info.annotation,
                exported=not name.startswith("_"),
                embedded=bool(extra.get(EMBEDDED_METADATA_KEY, False)),
                tag=StructTag.from_metadata(extra),
                frozen=bool(info.frozen),
                default=default,
                default_factory=info.default_factory,
            )
        )

    hints = _type_hints(cls)
    for name, attr in (cls.__private_attributes__ or {}).items():
        default = MISSING if attr.default is PydanticUndefined else attr.default
        out.append(
            RecordField(
                name=name,
                annotation=hints.get(name, Any),
                exported=False,
                default=default,
                default_factory=attr.default_factory,
            )
        )
    return tuple(out)


# Keyed weakly so classes built at runtime can still be collected.
_FIELDS_CACHE: weakref.WeakKeyDictionary[type, tuple[RecordField, ...]] = weakref.WeakKeyDictionary()


def _fields_of(cls: type) -> tuple[RecordField, ...]:
    cached = _FIELDS_CACHE.get(cls)
    if cached is None:
        if issubclass(cls, BaseModel):
            cached = _pydantic_fields(cls)
        else:
            cached = _dataclass_fields(cls)
        _FIELDS_CACHE[cls] = cached
    return cached


def record_fields(record: Any) -> tuple[RecordField, ...]:
    """
    Declared fields of a record instance or record class, in declaration order.

    Args:
        record (Any): Dataclass/pydantic instance or class.

    Returns:
        tuple[RecordField, ...]: Field metadata; inherited fields come first.

    Raises:
        TypeError: If record is neither a dataclass nor a pydantic model.
    """
    cls = _record_type(record)
    if not is_record_type(cls):
        raise TypeError(f"{cls.__name__} is not a dataclass or pydantic model")
    return _fields_of(cls)


def find_field(record: Any, name: str) -> RecordField | None:
    """Metadata of the field called name, or None."""
    for f in record_fields(record):
        if f.name == name:
            return f
    return None


def build_record(cls: type, values: Mapping[str, Any]) -> Any:
    """
    Instantiate a record class from per-field values.

    Pydantic models are built with model_construct (no validation); private
    attributes are assigned afterwards. Dataclasses go through ``__init__``,
    then ``init=False`` fields are overwritten directly (frozen classes too).
    """
    if issubclass(cls, BaseModel):
        public = {k: v for k, v in values.items() if k in cls.model_fields}
        record = cls.model_construct(**public)
        for name in cls.__private_attributes__ or {}:
            if name in values:
                setattr(record, name, values[name])
        return record
    init_names = {f.name for f in dataclasses.fields(cls) if f.init}
    record = cls(**{k: v for k, v in values.items() if k in init_names})
    for f in dataclasses.fields(cls):
        if not f.init and f.name in values:
            object.__setattr__(record, f.name, values[f.name])
    return record

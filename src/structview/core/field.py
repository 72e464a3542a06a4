"""
Field descriptor: read, write, zero-check, tag lookup and recursive descent for
one field of a structured record.

A Field pairs a storage Handle (the record instance that owns the attribute,
the attribute name, and whether writes are allowed) with the field's static
RecordField metadata and the tag key used to recognise the skip marker.

Settability
- Field.set/Field.zero require an exported field and an addressable handle.
- A handle is addressable when the root record was wrapped in place (not a
  detached copy), every record on the path is mutable (not a frozen dataclass
  or frozen pydantic model), every field on the path is exported, and the
  field itself is not declared frozen.
- Nested records are reached through the parent's attribute, never through a
  copy, so writes through a child descriptor land in the real record.

Contract violations
- value()/is_zero()/fields()/field() on an unexported field raise
  NotExportedAccessError.
- fields()/field() on a value that is not a record raise NotAStructError.
Both are PreconditionFailed subclasses; callers that cannot guarantee the
precondition use is_exported()/kind() first, or value_or().

Examples:
    >>> from dataclasses import dataclass, field
    >>> from structview.core.field import descriptors_of
    >>> @dataclass
    ... class Person:
    ...     name: str = ""
    ...     age: int = field(default=0, metadata={"structs": "-"})
    >>> p = Person(name="Ann", age=30)
    >>> [f.name() for f in descriptors_of(p, "structs")]
    ['name']
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .constants import SKIP_MARKER
from .errors import (
    NotAStructError,
    NotExportedAccessError,
    NotExportedError,
    NotSettableError,
    TypeMismatchError,
)
from .kinds import Kind, kind_of
from .records import RecordField, find_field, is_frozen, is_record, record_fields
from .types import is_assignable, type_name, zero_for_type

__all__ = [
    "Handle",
    "Field",
    "descriptors_of",
    "descriptor_for",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Handle:
    """
    Live storage location of a field: attribute `name` of record `owner`.

    Attributes:
        owner (Any): Record instance holding the attribute (borrowed, not copied).
        name (str): Attribute name.
        addressable (bool): Whether writes through this handle are permitted.
    """

    owner: Any
    name: str
    addressable: bool = True

    def get(self) -> Any:
        return getattr(self.owner, self.name)

    def put(self, value: Any) -> None:
        setattr(self.owner, self.name, value)


def _make(owner: Any, meta: RecordField, default_tag: str, addressable: bool) -> Field:
    writable = addressable and not is_frozen(owner) and not meta.frozen
    return Field(Handle(owner, meta.name, writable), meta, default_tag)


def descriptors_of(
    record: Any, default_tag: str, addressable: bool = True, *, skip: bool = True
) -> list[Field]:
    """
    Wrap the immediate fields of a record instance, in declaration order.

    Args:
        record (Any): Dataclass or pydantic model instance.
        default_tag (str): Tag key carrying the skip marker; inherited by children.
        addressable (bool): Whether the record itself may be written through.
        skip (bool): Drop fields whose tag under default_tag is exactly "-".

    Returns:
        list[Field]: One descriptor per visible field.

    Raises:
        NotAStructError: If record is not a structured record instance.
    """
    if not is_record(record):
        raise NotAStructError(f"{type(record).__qualname__} is not a structured record")
    out: list[Field] = []
    for meta in record_fields(record):
        if skip and meta.tag.get(default_tag) == SKIP_MARKER:
            continue
        out.append(_make(record, meta, default_tag, addressable))
    return out


def descriptor_for(
    record: Any, name: str, default_tag: str, addressable: bool = True
) -> Field | None:
    """Descriptor for the field called name (skip marker ignored), or None."""
    if not is_record(record):
        raise NotAStructError(f"{type(record).__qualname__} is not a structured record")
    meta = find_field(record, name)
    if meta is None:
        return None
    return _make(record, meta, default_tag, addressable)


@dataclass(frozen=True, eq=False, repr=False)
class Field:
    """
    Descriptor for a single record field.

    Attributes:
        handle (Handle): Storage location of the field.
        metadata (RecordField): Static declaration metadata.
        default_tag (str): Tag key used by fields() to find the skip marker.
    """

    handle: Handle
    metadata: RecordField
    default_tag: str

    def __repr__(self) -> str:
        owner = type(self.handle.owner).__qualname__
        return f"Field({owner}.{self.metadata.name}, kind={self.kind().value})"

    # -- metadata -----------------------------------------------------------

    def tag(self, key: str) -> str:
        """Tag value for key; "" when the key is absent."""
        return self.metadata.tag.get(key)

    def name(self) -> str:
        return self.metadata.name

    def is_embedded(self) -> bool:
        return self.metadata.embedded

    def is_exported(self) -> bool:
        return self.metadata.exported

    def kind(self) -> Kind:
        """Coarse classification of the field's current value."""
        return kind_of(self.handle.get())

    def can_set(self) -> bool:
        """True when set() would pass the exportedness and addressability checks."""
        return self.metadata.exported and self.handle.addressable

    # -- reads --------------------------------------------------------------

    def value(self) -> Any:
        """
        Current value of the field.

        Raises:
            NotExportedAccessError: If the field is not exported.
        """
        if not self.metadata.exported:
            raise NotExportedAccessError(
                f"cannot read unexported field {self.metadata.name!r}"
            )
        return self.handle.get()

    def value_or(self, default: Any = None) -> Any:
        """Current value, or default when the field is not exported."""
        if not self.metadata.exported:
            return default
        return self.handle.get()

    def is_zero(self) -> bool:
        """
        True when the current value equals the zero value of the field's type.

        The zero comes from the annotation alone (see zero_for_type); declared
        defaults and default factories are not consulted. Equality is
        structural (==), so nested records, lists and mappings are compared
        by content.

        Raises:
            NotExportedAccessError: If the field is not exported.
        """
        return self.value() == zero_for_type(self.metadata.annotation)

    # -- writes -------------------------------------------------------------

    def _check_settable(self) -> None:
        name = self.metadata.name
        if not self.metadata.exported:
            raise NotExportedError(name)
        if not self.handle.addressable:
            raise NotSettableError(name)

    def _store(self, value: Any) -> None:
        self.handle.put(value)
        logger.debug("set %s.%s", type(self.handle.owner).__qualname__, self.metadata.name)

    def set(self, value: Any) -> None:
        """
        Store value in the field.

        Raises:
            NotExportedError: If the field is not exported.
            NotSettableError: If the handle is not addressable.
            TypeMismatchError: If value is not assignable to the field's type.
        """
        self._check_settable()
        if not is_assignable(value, self.metadata.annotation):
            raise TypeMismatchError(type_name(type(value)), type_name(self.metadata.annotation))
        self._store(value)

    def zero(self) -> None:
        """
        Reset the field to the zero value of its type.

        The zero is always accepted, even where it falls outside the
        annotation (None for a required datetime, say), so only the
        exportedness and settability checks of set() apply.

        Raises:
            NotExportedError: If the field is not exported.
            NotSettableError: If the handle is not addressable.
        """
        self._check_settable()
        self._store(zero_for_type(self.metadata.annotation))

    # -- nested records -----------------------------------------------------

    def _nested(self) -> Any:
        current = self.value()
        if not is_record(current):
            raise NotAStructError(
                f"field {self.metadata.name!r} holds {kind_of(current).value}, not a struct"
            )
        return current

    def fields(self) -> list[Field]:
        """
        Descriptors for the nested record's immediate fields.

        Fields tagged with the skip marker under default_tag are omitted.

        Raises:
            NotExportedAccessError: If this field is not exported.
            NotAStructError: If the current value is not a structured record.
        """
        return descriptors_of(self._nested(), self.default_tag, self.handle.addressable)

    def field(self, name: str) -> Field | None:
        """
        Descriptor for one immediate field of the nested record, or None.

        The skip marker does not hide a field from this lookup.

        Raises:
            NotExportedAccessError: If this field is not exported.
            NotAStructError: If the current value is not a structured record.
        """
        return descriptor_for(self._nested(), name, self.default_tag, self.handle.addressable)

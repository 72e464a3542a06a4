"""
Struct: root wrapper that builds Field descriptors for one record.

The wrapper is the only place root descriptors are created; everything below
the root is reached through Field.fields()/Field.field().

Wrapping modes
- In place (default): descriptors write into the given record.
- Detached: the record is deep-copied first and every descriptor is read-only,
  so Field.set raises NotSettableError.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from structview.core.errors import FieldNotFoundError, NotAStructError
from structview.core.field import Field, descriptor_for, descriptors_of
from structview.core.records import is_record
from structview.core.tags import parse_tag_value
from structview.core.typing import JsonDict

from .config import RecordSettings, default_settings
from .mapping import to_map

__all__ = ["Struct"]

logger = logging.getLogger(__name__)


def _values(record: Any, tag_name: str) -> list[Any]:
    out: list[Any] = []
    for f in descriptors_of(record, tag_name, addressable=False):
        if not f.is_exported():
            continue
        _, opts = parse_tag_value(f.tag(tag_name))
        if opts.has("omitempty") and f.is_zero():
            continue
        value = f.value()
        if is_record(value) and not opts.has("omitnested"):
            value = _values(value, tag_name)
        out.append(value)
    return out


class Struct:
    """
    Wrapper around one structured record.

    Args:
        record (Any): Dataclass or pydantic model instance.
        tag_name (str | None): Tag key for the skip marker and tag options;
            defaults to settings.tag_name.
        detached (bool | None): Wrap a deep copy (read-only descriptors);
            defaults to settings.detached.
        settings (RecordSettings | None): Defaults source; default_settings()
            (loaded once per process) when None.

    Raises:
        NotAStructError: If record is not a structured record instance.

    Examples:
        >>> from dataclasses import dataclass
        >>> from structview.record import Struct
        >>> @dataclass
        ... class Point:
        ...     x: int = 0
        ...     y: int = 0
        >>> p = Point(1, 2)
        >>> s = Struct(p, tag_name="structs")
        >>> s.names()
        ['x', 'y']
        >>> s.field("y").set(5)
        >>> p.y
        5
    """

    def __init__(
        self,
        record: Any,
        *,
        tag_name: str | None = None,
        detached: bool | None = None,
        settings: RecordSettings | None = None,
    ) -> None:
        if not is_record(record):
            raise NotAStructError(f"{type(record).__qualname__} is not a structured record")
        if settings is None:
            settings = default_settings()
        self.tag_name = tag_name or settings.tag_name
        self.detached = settings.detached if detached is None else detached
        self.flatten_embedded = settings.flatten_embedded
        self.record = copy.deepcopy(record) if self.detached else record
        logger.debug(
            "wrapped %s (tag=%s, detached=%s)",
            type(record).__qualname__,
            self.tag_name,
            self.detached,
        )

    def __repr__(self) -> str:
        return f"Struct({type(self.record).__qualname__}, tag_name={self.tag_name!r})"

    def name(self) -> str:
        """Class name of the wrapped record."""
        return type(self.record).__name__

    def fields(self) -> list[Field]:
        """Descriptors for the record's fields, skip-marked fields excluded."""
        return descriptors_of(self.record, self.tag_name, not self.detached)

    def field_ok(self, name: str) -> Field | None:
        """Descriptor for the field called name, or None."""
        return descriptor_for(self.record, name, self.tag_name, not self.detached)

    def field(self, name: str) -> Field:
        """
        Descriptor for the field called name.

        Raises:
            FieldNotFoundError: If the record declares no such field.
        """
        f = self.field_ok(name)
        if f is None:
            raise FieldNotFoundError(f"{self.name()} has no field {name!r}")
        return f

    def _visible(self) -> list[Field]:
        return [f for f in self.fields() if f.is_exported()]

    def names(self) -> list[str]:
        """Names of exported, visible fields."""
        return [f.name() for f in self._visible()]

    def values(self) -> list[Any]:
        """
        Values of exported, visible fields.

        Honors ``omitempty`` and ``omitnested``; nested records become their
        own values list.
        """
        return _values(self.record, self.tag_name)

    def to_map(self) -> JsonDict:
        """Mapping of exported, visible fields; see structview.record.mapping."""
        return to_map(self.record, self.tag_name, self.flatten_embedded)

    def is_zero(self) -> bool:
        """True when every exported, visible field holds its zero value."""
        return all(f.is_zero() for f in self._visible())

    def has_zero(self) -> bool:
        """True when at least one exported, visible field holds its zero value."""
        return any(f.is_zero() for f in self._visible())

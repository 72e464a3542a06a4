"""
Field tag metadata: pre-parsed key -> value lookup.

A field's tag comes from its declaration metadata:

- ``dataclasses.field(metadata={...})``
- ``pydantic.Field(json_schema_extra={...})``

Two spellings are accepted and merged (explicit entries win):

1. String-valued entries are used directly, e.g. ``{"structs": "-"}``.
2. A raw tag string under the ``"tag"`` entry, written in the conventional
   ``key:"value"`` form separated by spaces, e.g.
   ``{"tag": 'structs:"name,omitempty" json:"name"'}``.

Parsing is lenient: it stops at the first malformed pair and keeps what was
read so far. The grammar is not validated.

Examples
--------
>>> from structview.core.tags import StructTag, parse_tag_value
>>> tag = StructTag.parse('structs:"user_name,omitempty" json:"name"')
>>> tag.get("json")
'name'
>>> tag.get("missing")
''
>>> name, opts = parse_tag_value(tag.get("structs"))
>>> name, opts.has("omitempty")
('user_name', True)
"""

from __future__ import annotations

import ast
import json
import warnings
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .constants import TAG_METADATA_KEY

__all__ = [
    "StructTag",
    "TagOptions",
    "parse_tag_value",
]


def _scan_pairs(raw: str) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    rest = raw
    while rest:
        rest = rest.lstrip(" ")
        if not rest:
            break
        i = 0
        while i < len(rest) and rest[i] > " " and rest[i] not in ':"\x7f':
            i += 1
        if i == 0 or i + 1 >= len(rest) or rest[i] != ":" or rest[i + 1] != '"':
            break
        key = rest[:i]
        rest = rest[i + 1 :]

        # Quoted value; backslash escapes the next character.
        j = 1
        while j < len(rest) and rest[j] != '"':
            if rest[j] == "\\":
                j += 1
            j += 1
        if j >= len(rest):
            break
        quoted = rest[: j + 1]
        rest = rest[j + 1 :]
        value = _unquote(quoted)
        if value is None:
            break
        pairs.append((key, value))
    return pairs


def _unquote(quoted: str) -> str | None:
    """
    Decode a double-quoted value with backslash escapes, or None if malformed.

    Accepts the usual escapes (``\\n``, ``\\t``, ``\\"``, ``\\'``, ``\\\\``,
    ``\\xHH``, ``\\uHHHH``, ``\\UHHHHHHHH``, 3-digit octal). Unknown escapes such
    as ``\\d`` are rejected rather than kept literally.
    """
    if "\n" in quoted:
        return None
    with warnings.catch_warnings():
        # Invalid escapes only warn in Python literals; treat them as errors.
        warnings.simplefilter("error", DeprecationWarning)
        warnings.simplefilter("error", SyntaxWarning)
        try:
            value = ast.literal_eval(quoted)
        except (ValueError, SyntaxError, DeprecationWarning, SyntaxWarning):
            return None
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class StructTag:
    """
    Immutable key -> value tag lookup for one field.

    Attributes:
        pairs (tuple[tuple[str, str], ...]): Parsed pairs in declaration order.
            A key appears at most once; later spellings replace earlier ones.
    """

    pairs: tuple[tuple[str, str], ...] = ()

    @classmethod
    def parse(cls, raw: str) -> StructTag:
        """Parse a raw ``key:"value"`` tag string."""
        return cls._from_items(_scan_pairs(raw))

    @classmethod
    def from_metadata(
        cls, metadata: Mapping[str, Any] | None, tag_key: str = TAG_METADATA_KEY
    ) -> StructTag:
        """
        Build a tag from field declaration metadata.

        Args:
            metadata (Mapping[str, Any] | None): dataclass field metadata or
                pydantic json_schema_extra mapping.
            tag_key (str): Entry holding a raw tag string.

        Returns:
            StructTag: Merged tag; non-string entries are ignored.
        """
        if not metadata:
            return cls()
        items: list[tuple[str, str]] = []
        raw = metadata.get(tag_key)
        if isinstance(raw, str):
            items.extend(_scan_pairs(raw))
        for key, value in metadata.items():
            if key != tag_key and isinstance(value, str):
                items.append((key, value))
        return cls._from_items(items)

    @classmethod
    def _from_items(cls, items: list[tuple[str, str]]) -> StructTag:
        merged: dict[str, str] = {}
        for key, value in items:
            merged[key] = value
        return cls(tuple(merged.items()))

    def lookup(self, key: str) -> tuple[str, bool]:
        """Return (value, present); distinguishes an empty value from absence."""
        for k, v in self.pairs:
            if k == key:
                return v, True
        return "", False

    def get(self, key: str) -> str:
        """Return the value for key, or "" when absent."""
        return self.lookup(key)[0]

    def keys(self) -> list[str]:
        return [k for k, _ in self.pairs]

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self.pairs)

    def __str__(self) -> str:
        return " ".join(f"{k}:{json.dumps(v, ensure_ascii=False)}" for k, v in self.pairs)


@dataclass(frozen=True)
class TagOptions:
    """Comma-separated options following the name part of a tag value."""

    options: tuple[str, ...] = ()

    def has(self, option: str) -> bool:
        return option in self.options


def parse_tag_value(value: str) -> tuple[str, TagOptions]:
    """
    Split a tag value of the form ``"name,opt1,opt2"``.

    Args:
        value (str): Tag value as returned by StructTag.get().

    Returns:
        tuple[str, TagOptions]: Name part (possibly empty) and options.

    Examples:
        >>> parse_tag_value(",omitempty")
        ('', TagOptions(options=('omitempty',)))
    """
    name, _, rest = value.partition(",")
    options = tuple(o for o in rest.split(",") if o) if rest else ()
    return name, TagOptions(options)

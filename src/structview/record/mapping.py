"""
Record -> mapping conversion driven by field tags.

Tag value grammar under the wrapper's tag key: ``"name,opt1,opt2"``

- ``-`` hides the field (handled by descriptor enumeration).
- An empty name keeps the attribute name.
- ``omitempty``: drop the field when it holds its zero value.
- ``omitnested``: keep a nested record as-is instead of converting it.
- ``flatten``: merge a nested record's mapping into the parent mapping.
- ``string``: store ``str(value)``.

Nested records are converted recursively, including records held inside
lists, tuples and mapping values. Unexported fields never appear.

Examples:
    >>> from dataclasses import dataclass, field
    >>> from structview.record.mapping import to_map
    >>> @dataclass
    ... class Server:
    ...     host: str = ""
    ...     port: int = field(default=0, metadata={"structs": "server_port,omitempty"})
    >>> to_map(Server(host="db"), "structs")
    {'host': 'db'}
"""

from __future__ import annotations

from typing import Any

from structview.core.field import descriptors_of
from structview.core.records import is_record
from structview.core.tags import parse_tag_value
from structview.core.typing import JsonDict

__all__ = [
    "to_map",
    "convert_value",
]


def convert_value(value: Any, tag_name: str, flatten_embedded: bool = False) -> Any:
    """Convert records found in value (directly or inside containers) to mappings."""
    if is_record(value):
        return to_map(value, tag_name, flatten_embedded)
    if isinstance(value, list):
        return [convert_value(v, tag_name, flatten_embedded) for v in value]
    if isinstance(value, tuple):
        return tuple(convert_value(v, tag_name, flatten_embedded) for v in value)
    if isinstance(value, dict):
        return {k: convert_value(v, tag_name, flatten_embedded) for k, v in value.items()}
    return value


def to_map(record: Any, tag_name: str, flatten_embedded: bool = False) -> JsonDict:
    """
    Convert a record's exported, visible fields to a dict.

    Args:
        record (Any): Dataclass or pydantic model instance.
        tag_name (str): Tag key carrying names and options.
        flatten_embedded (bool): Merge embedded records into the parent mapping.

    Returns:
        JsonDict: Field name (or tag name) -> converted value, in declaration order.

    Raises:
        NotAStructError: If record is not a structured record.
    """
    out: JsonDict = {}
    for f in descriptors_of(record, tag_name, addressable=False):
        if not f.is_exported():
            continue
        name, opts = parse_tag_value(f.tag(tag_name))
        key = name or f.name()
        value = f.value()

        if opts.has("omitempty") and f.is_zero():
            continue
        if opts.has("string"):
            out[key] = str(value)
            continue
        if opts.has("omitnested"):
            out[key] = value
            continue

        converted = convert_value(value, tag_name, flatten_embedded)
        if is_record(value) and (opts.has("flatten") or (flatten_embedded and f.is_embedded())):
            out.update(converted)
            continue
        out[key] = converted
    return out

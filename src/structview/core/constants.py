"""
structview core defaults.

Defines the tag conventions consumed by descriptors and the record wrapper.
This module is zero-IO and uses only the Python standard library.

Notes:
    - structview.record.config.RecordSettings sources its defaults from here.
    - Changing DEFAULT_TAG_NAME changes which tag key carries the skip marker
      for records that do not pass an explicit tag_name.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_TAG_NAME",
    "SKIP_MARKER",
    "TAG_METADATA_KEY",
    "EMBEDDED_METADATA_KEY",
]

# Tag key read by Field.fields() and the record wrapper (e.g. structs:"-").
DEFAULT_TAG_NAME: str = "structs"

# Exact tag value that hides a field from enumeration.
SKIP_MARKER: str = "-"

# Metadata entry holding a raw `key:"value"` tag string.
TAG_METADATA_KEY: str = "tag"

# Metadata entry flagging a field as embedded (anonymous).
EMBEDDED_METADATA_KEY: str = "embedded"

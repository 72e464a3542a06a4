"""
Lightweight typing aliases used by the record wrapper.

This module contains no runtime logic and is zero-IO.

Examples:
    >>> from structview.core.typing import JsonDict
    >>> def payload() -> JsonDict:
    ...     return {"name": "Ann", "address": {"city": "Oslo"}}
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "JsonDict",
]

# Mapping produced by to_map(); values may themselves be nested mappings.
JsonDict = dict[str, Any]

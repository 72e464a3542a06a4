"""
structview: runtime field introspection for dataclasses and pydantic models.

## Layers
- structview.core: Field descriptors and the reflection, tag, kind, type and
  error modules they rest on.
- structview.record: Struct root wrapper, RecordSettings and helpers.

## Examples
```python
from dataclasses import dataclass
from structview import Struct

@dataclass
class Inner:
    x: int = 0

@dataclass
class Outer:
    inner: Inner

r = Outer(inner=Inner(x=1))
Struct(r).field("inner").field("x").set(7)
r.inner.x  # 7
```
"""

from __future__ import annotations

from .core import (
    Field,
    FieldError,
    FieldNotFoundError,
    Kind,
    NotAStructError,
    NotExportedAccessError,
    NotExportedError,
    NotSettableError,
    PreconditionFailed,
    StructViewError,
    TypeMismatchError,
)
from .record import RecordSettings, Struct

__all__ = [
    "Struct",
    "RecordSettings",
    "Field",
    "Kind",
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

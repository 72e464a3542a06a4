"""
Type-hint helpers: assignability, zero values and display names.

Responsibilities
- is_assignable(value, annotation): decide whether a value may be stored in a
  field declared with annotation, following Python's implicit typing rules
  (numeric tower, Optional/Union, Literal, Annotated, NewType, generics).
- zero_for_type(annotation): the canonical "uninitialized" value of a type.
- type_name(tp): short display form used in TypeMismatchError messages.

Notes
- Zero-IO, stdlib only (plus records for nested record types).
- Generic containers are checked element-wise; this is linear in the size of
  the offered value, never in the size of the record.

Examples
--------
>>> from typing import Optional
>>> from structview.core.types import is_assignable, type_name
>>> is_assignable(1, float)
True
>>> is_assignable("1", int)
False
>>> is_assignable(None, Optional[int])
True
>>> is_assignable([1, "a"], list[int])
False
>>> type_name(dict[str, int])
'dict[str, int]'
"""

from __future__ import annotations

import collections.abc
import dataclasses
import enum
import types
import typing
from typing import Any

from .records import build_record, is_record_type, record_fields

__all__ = [
    "is_assignable",
    "zero_for_type",
    "type_name",
    "unwrap_annotation",
]

_UNION_TYPES: tuple[Any, ...] = (typing.Union, types.UnionType)

# Implicit widening accepted by type checkers (PEP 484 numeric tower).
_NUMERIC_PROMOTIONS: dict[type, tuple[type, ...]] = {
    float: (int,),
    complex: (int, float),
}

_SCALAR_ZEROS: dict[type, Any] = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    str: "",
    bytes: b"",
}


def unwrap_annotation(tp: Any) -> Any:
    """Strip Annotated/ClassVar/Final/InitVar wrappers and resolve NewType."""
    while True:
        if isinstance(tp, dataclasses.InitVar):
            tp = tp.type
            continue
        origin = typing.get_origin(tp)
        if origin is typing.Annotated:
            tp = typing.get_args(tp)[0]
        elif origin in (typing.ClassVar, typing.Final):
            args = typing.get_args(tp)
            tp = args[0] if args else Any
        elif isinstance(tp, typing.NewType):
            tp = tp.__supertype__
        else:
            return tp


def _is_unconstrained(tp: Any) -> bool:
    return tp is Any or tp is object or isinstance(tp, (str, typing.ForwardRef, typing.TypeVar))


def _check_items(items: Any, arg: Any) -> bool:
    return all(is_assignable(item, arg) for item in items)


def _check_generic(value: Any, origin: Any, args: tuple[Any, ...]) -> bool:
    if origin is type:
        if not isinstance(value, type):
            return False
        if not args or _is_unconstrained(args[0]):
            return True
        target = unwrap_annotation(args[0])
        if typing.get_origin(target) in _UNION_TYPES:
            return any(issubclass(value, t) for t in typing.get_args(target) if isinstance(t, type))
        return isinstance(target, type) and issubclass(value, target)

    if not isinstance(value, origin):
        return False
    if not args:
        return True

    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return _check_items(value, args[0])
        if args == ((),):
            return len(value) == 0
        return len(value) == len(args) and all(is_assignable(v, a) for v, a in zip(value, args))

    if issubclass(origin, collections.abc.Mapping):
        key_t, val_t = (args + (Any, Any))[:2]
        return _check_items(value.keys(), key_t) and _check_items(value.values(), val_t)

    if issubclass(origin, collections.abc.Iterable) and not issubclass(origin, collections.abc.Iterator):
        return _check_items(value, args[0])

    # Callables, iterators and user generics: container check only.
    return True


def is_assignable(value: Any, annotation: Any) -> bool:
    """
    Check whether value may be stored in a field declared as annotation.

    Args:
        value (Any): Offered value.
        annotation (Any): Resolved type hint of the field.

    Returns:
        bool: True when assignable under the rules documented in the module.
    """
    tp = unwrap_annotation(annotation)
    if _is_unconstrained(tp):
        return True
    if tp is None or tp is type(None):
        return value is None

    origin = typing.get_origin(tp)
    if origin in _UNION_TYPES:
        return any(is_assignable(value, member) for member in typing.get_args(tp))
    if origin is typing.Literal:
        return any(value == lit and type(value) is type(lit) for lit in typing.get_args(tp))
    if origin is not None:
        return _check_generic(value, origin, typing.get_args(tp))

    if not isinstance(tp, type):
        # Unknown typing construct (e.g. a Protocol alias); do not reject.
        return True
    if isinstance(value, tp):
        return True
    return isinstance(value, _NUMERIC_PROMOTIONS.get(tp, ()))


def zero_for_type(annotation: Any, _seen: frozenset[type] = frozenset()) -> Any:
    """
    Zero value derived from a type hint alone.

    Declared defaults and default factories play no part, so the result is
    deterministic for a given annotation. Each call returns fresh containers.

    Returns:
        Any: None for Optional/Any/unknown types, the first Literal value, the
        first Enum member, the no-argument constructor result for builtin
        scalars and containers, per-position zeros for fixed-length tuples, or
        a record built from its fields' zeros.
    """
    tp = unwrap_annotation(annotation)
    if _is_unconstrained(tp) or tp is None or tp is type(None):
        return None

    origin = typing.get_origin(tp)
    if origin in _UNION_TYPES:
        members = typing.get_args(tp)
        if type(None) in members:
            return None
        return zero_for_type(members[0], _seen)
    if origin is typing.Literal:
        return typing.get_args(tp)[0]
    if origin is tuple:
        args = typing.get_args(tp)
        if not args or args == ((),) or (len(args) == 2 and args[1] is Ellipsis):
            return ()
        return tuple(zero_for_type(a, _seen) for a in args)
    if origin is not None:
        tp = origin

    if not isinstance(tp, type):
        return None
    if issubclass(tp, enum.Enum):
        return next(iter(tp), None)
    for scalar in _SCALAR_ZEROS:
        if tp is scalar:
            return _SCALAR_ZEROS[scalar]
    if tp in (list, dict, set, frozenset, tuple, bytearray):
        return tp()
    if tp in (collections.abc.Sequence, collections.abc.MutableSequence, collections.abc.Iterable):
        return []
    if tp in (collections.abc.Mapping, collections.abc.MutableMapping):
        return {}
    if tp in (collections.abc.Set, collections.abc.MutableSet):
        return set()
    if is_record_type(tp):
        if tp in _seen:
            return None
        seen = _seen | {tp}
        values = {f.name: zero_for_type(f.annotation, seen) for f in record_fields(tp)}
        return build_record(tp, values)
    return None


def type_name(tp: Any) -> str:
    """Short display form of a type or annotation."""
    if tp is type(None) or tp is None:
        return "None"
    if isinstance(tp, str):
        return tp
    if isinstance(tp, type) and not typing.get_args(tp):
        return tp.__qualname__
    return repr(tp).replace("typing.", "")

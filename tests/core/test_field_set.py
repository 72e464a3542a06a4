from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import uuid4

import pytest
from pydantic import BaseModel, ConfigDict, Field

from structview.core.errors import (
    FieldError,
    NotExportedError,
    NotSettableError,
    TypeMismatchError,
)
from structview.core.field import descriptor_for, descriptors_of


@dataclass
class Account:
    owner: str
    balance: float = 0.0
    limit: Optional[int] = None
    labels: list[str] = field(default_factory=list)
    _pin: int = 1234


@dataclass(frozen=True)
class Frozen:
    value: int = 1


class Settings(BaseModel):
    name: str = "svc"
    retries: int = 3
    version: str = Field(default="v1", frozen=True)


class FrozenSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = "svc"


def test_set_then_value_roundtrip() -> None:
    acct = Account(owner="ann")
    owner = descriptor_for(acct, "owner", "structs")
    owner.set("bob")
    assert acct.owner == "bob"
    assert owner.value() == "bob"


def test_set_accepts_int_for_float_and_none_for_optional() -> None:
    acct = Account(owner="ann", limit=10)
    descriptor_for(acct, "balance", "structs").set(5)
    descriptor_for(acct, "limit", "structs").set(None)
    assert acct.balance == 5
    assert acct.limit is None


def test_set_type_mismatch_leaves_storage_unchanged() -> None:
    acct = Account(owner="ann")
    owner = descriptor_for(acct, "owner", "structs")
    with pytest.raises(TypeMismatchError) as exc_info:
        owner.set(42)
    err = exc_info.value
    assert err.offered == "int"
    assert err.required == "str"
    assert isinstance(err, TypeError)
    assert acct.owner == "ann"


@pytest.mark.parametrize(
    "name,value",
    [
        ("limit", "10"),
        ("labels", ["ok", 3]),
        ("labels", ("a", "b")),
        ("balance", "1.5"),
    ],
)
def test_set_rejects_non_assignable_values(name: str, value: object) -> None:
    acct = Account(owner="ann", labels=["x"])
    before = getattr(acct, name)
    with pytest.raises(TypeMismatchError):
        descriptor_for(acct, name, "structs").set(value)
    assert getattr(acct, name) == before


def test_set_unexported_fails_first() -> None:
    acct = Account(owner="ann")
    pin = descriptor_for(acct, "_pin", "structs")
    with pytest.raises(NotExportedError):
        pin.set(1)
    with pytest.raises(NotExportedError):
        pin.zero()
    assert acct._pin == 1234


def test_set_on_non_addressable_handle() -> None:
    acct = Account(owner="ann")
    owner = descriptor_for(acct, "owner", "structs", addressable=False)
    assert owner.can_set() is False
    with pytest.raises(NotSettableError):
        owner.set("bob")
    # Exportedness is checked before settability.
    with pytest.raises(NotExportedError):
        descriptor_for(acct, "_pin", "structs", addressable=False).set(1)
    assert acct.owner == "ann"


def test_frozen_dataclass_fields_are_not_settable() -> None:
    rec = Frozen()
    value = descriptor_for(rec, "value", "structs")
    with pytest.raises(NotSettableError):
        value.set(2)
    with pytest.raises(NotSettableError):
        value.zero()
    assert rec.value == 1


def test_frozen_pydantic_model_and_frozen_field() -> None:
    with pytest.raises(NotSettableError):
        descriptor_for(FrozenSettings(), "name", "structs").set("other")

    s = Settings()
    with pytest.raises(NotSettableError):
        descriptor_for(s, "version", "structs").set("v2")
    descriptor_for(s, "retries", "structs").set(5)
    assert s.retries == 5
    assert s.version == "v1"


def test_pydantic_type_mismatch() -> None:
    s = Settings()
    with pytest.raises(TypeMismatchError):
        descriptor_for(s, "retries", "structs").set("five")
    assert s.retries == 3


def test_zero_resets_and_is_zero_afterwards() -> None:
    acct = Account(owner="ann", balance=9.5, limit=3, labels=["a"])
    for f in descriptors_of(acct, "structs"):
        if not f.is_exported():
            continue
        f.zero()
        assert f.is_zero() is True
    assert acct == Account(owner="", balance=0.0, limit=None, labels=[])


@dataclass
class Event:
    when: datetime
    amount: Decimal
    point: tuple[int, int]
    pair: tuple[str, Optional[int]]
    owner: Account
    token: str = field(default_factory=lambda: uuid4().hex)
    created: datetime = field(default_factory=datetime.now)
    count: int = 5


def _event() -> Event:
    return Event(
        when=datetime(2024, 1, 2),
        amount=Decimal("1.50"),
        point=(3, 4),
        pair=("a", 1),
        owner=Account(owner="ann", labels=["x"]),
    )


@pytest.mark.parametrize(
    "name,expected",
    [
        ("when", None),
        ("amount", None),
        ("point", (0, 0)),
        ("pair", ("", None)),
        ("owner", Account(owner="", balance=0.0, limit=None, labels=[], _pin=0)),
        ("token", ""),
        ("created", None),
        ("count", 0),
    ],
)
def test_zero_always_succeeds_and_is_zero_afterwards(name: str, expected: object) -> None:
    ev = _event()
    f = descriptor_for(ev, name, "structs")
    assert f.is_zero() is False
    f.zero()
    assert getattr(ev, name) == expected
    assert f.is_zero() is True


def test_value_equal_to_type_zero_is_zero_despite_default() -> None:
    ev = _event()
    ev.count = 0
    assert descriptor_for(ev, "count", "structs").is_zero() is True
    ev.token = ""
    assert descriptor_for(ev, "token", "structs").is_zero() is True


def test_zero_still_checks_exported_then_settable() -> None:
    ev = _event()
    with pytest.raises(NotSettableError):
        descriptor_for(ev, "when", "structs", addressable=False).zero()
    assert ev.when == datetime(2024, 1, 2)


def test_set_still_rejects_the_type_zero_when_not_assignable() -> None:
    ev = _event()
    with pytest.raises(TypeMismatchError):
        descriptor_for(ev, "when", "structs").set(None)


def test_zero_does_not_share_default_containers() -> None:
    a = Account(owner="a", labels=["x"])
    b = Account(owner="b", labels=["y"])
    descriptor_for(a, "labels", "structs").zero()
    descriptor_for(b, "labels", "structs").zero()
    a.labels.append("z")
    assert b.labels == []


def test_recoverable_errors_share_a_base() -> None:
    for exc in (NotExportedError, NotSettableError, TypeMismatchError):
        assert issubclass(exc, FieldError)

from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from structview.record import RecordSettings, Struct
from structview.record.mapping import convert_value, to_map


@dataclass
class Server:
    host: str = ""
    port: int = field(default=0, metadata={"structs": "server_port,omitempty"})
    label: int = field(default=3, metadata={"structs": ",string"})
    _secret: str = "s"


@dataclass
class Address:
    city: str = ""
    zip_code: str = field(default="", metadata={"structs": "-"})


@dataclass
class Meta:
    created: str = ""


@dataclass
class User:
    name: str = ""
    address: Address = field(default_factory=Address)
    meta: Meta = field(default_factory=Meta, metadata={"structs": ",flatten"})
    history: list[Address] = field(default_factory=list)


@dataclass
class Base:
    id: int = 0


@dataclass
class Item:
    base: Base = field(default_factory=Base, metadata={"embedded": True})
    title: str = ""


class Profile(BaseModel):
    handle: str = ""
    score: float = Field(default=0.0, json_schema_extra={"structs": "points,omitempty"})
    home: Address = Field(default_factory=Address)


def test_names_options_and_unexported() -> None:
    assert to_map(Server(host="db", port=5432), "structs") == {
        "host": "db",
        "server_port": 5432,
        "label": "3",
    }
    assert to_map(Server(host="db"), "structs") == {"host": "db", "label": "3"}


def test_nested_records_convert_recursively() -> None:
    u = User(
        name="Ann",
        address=Address(city="Oslo", zip_code="0150"),
        meta=Meta(created="2024-01-01"),
        history=[Address(city="Rome")],
    )
    assert to_map(u, "structs") == {
        "name": "Ann",
        "address": {"city": "Oslo"},
        "created": "2024-01-01",
        "history": [{"city": "Rome"}],
    }


def test_embedded_records_nest_unless_flattening_is_enabled() -> None:
    item = Item(base=Base(id=7), title="t")
    assert to_map(item, "structs") == {"base": {"id": 7}, "title": "t"}
    assert to_map(item, "structs", flatten_embedded=True) == {"id": 7, "title": "t"}

    s = Struct(item, settings=RecordSettings(flatten_embedded=True))
    assert s.to_map() == {"id": 7, "title": "t"}


def test_pydantic_model_to_map() -> None:
    p = Profile(handle="ann", home=Address(city="Oslo"))
    assert to_map(p, "structs") == {"handle": "ann", "home": {"city": "Oslo"}}
    p.score = 1.5
    assert to_map(p, "structs")["points"] == 1.5


def test_convert_value_walks_containers() -> None:
    value = {"a": [Address(city="x")], "b": (Base(id=1), 2), "c": "plain"}
    assert convert_value(value, "structs") == {
        "a": [{"city": "x"}],
        "b": ({"id": 1}, 2),
        "c": "plain",
    }


def test_alternate_tag_name() -> None:
    a = Address(city="Oslo", zip_code="0150")
    assert to_map(a, "json") == {"city": "Oslo", "zip_code": "0150"}

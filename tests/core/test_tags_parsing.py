import pytest

from structview.core.tags import StructTag, TagOptions, parse_tag_value


def test_parse_multiple_pairs() -> None:
    tag = StructTag.parse('structs:"name,omitempty" json:"full_name" db:""')
    assert tag.get("structs") == "name,omitempty"
    assert tag.get("json") == "full_name"
    assert tag.lookup("db") == ("", True)
    assert tag.lookup("xml") == ("", False)
    assert tag.keys() == ["structs", "json", "db"]
    assert "json" in tag


def test_parse_handles_escaped_quotes() -> None:
    tag = StructTag.parse(r'note:"say \"hi\"" other:"x"')
    assert tag.get("note") == 'say "hi"'
    assert tag.get("other") == "x"


@pytest.mark.parametrize(
    "raw,expected",
    [
        (r'v:"\x41"', "A"),
        (r'v:"it\'s"', "it's"),
        (r'v:"tab\there"', "tab\there"),
        (r'v:"\101"', "A"),
        (r'v:"é"', "é"),
        (r'v:"back\\slash"', "back\\slash"),
    ],
)
def test_parse_decodes_string_escapes(raw: str, expected: str) -> None:
    assert StructTag.parse(raw).get("v") == expected


def test_parse_rejects_unknown_escape() -> None:
    tag = StructTag.parse(r'a:"1" b:"\d" c:"3"')
    assert tag.keys() == ["a"]


@pytest.mark.parametrize(
    "raw,expected_keys",
    [
        ("", []),
        ("   ", []),
        ('a:"1" broken', ["a"]),
        ('a:"1" b:unquoted c:"3"', ["a"]),
        ('a:"unterminated', []),
        (':"no key"', []),
    ],
)
def test_parse_stops_at_first_malformed_pair(raw: str, expected_keys: list[str]) -> None:
    assert StructTag.parse(raw).keys() == expected_keys


def test_from_metadata_merges_raw_and_explicit_entries() -> None:
    tag = StructTag.from_metadata(
        {"tag": 'structs:"-" json:"a"', "json": "b", "embedded": True, "yaml": "c"}
    )
    assert tag.get("structs") == "-"
    # Explicit entries win over the raw tag string.
    assert tag.get("json") == "b"
    assert tag.get("yaml") == "c"
    # Non-string entries are not tag values.
    assert "embedded" not in tag


def test_from_metadata_empty() -> None:
    assert StructTag.from_metadata(None) == StructTag()
    assert StructTag.from_metadata({}).get("any") == ""


def test_str_renders_conventional_form() -> None:
    tag = StructTag.parse('a:"1" b:"two words"')
    assert str(tag) == 'a:"1" b:"two words"'
    assert StructTag.parse(str(tag)) == tag


@pytest.mark.parametrize(
    "value,name,options",
    [
        ("", "", ()),
        ("-", "-", ()),
        ("user", "user", ()),
        ("user,omitempty", "user", ("omitempty",)),
        (",omitnested,string", "", ("omitnested", "string")),
        ("x,,flatten", "x", ("flatten",)),
    ],
)
def test_parse_tag_value(value: str, name: str, options: tuple[str, ...]) -> None:
    got_name, got_opts = parse_tag_value(value)
    assert got_name == name
    assert got_opts == TagOptions(options)
    for opt in options:
        assert got_opts.has(opt)
    assert not got_opts.has("missing")

import pytest

from tagparse import EntityDefinition, PrimitiveType, TaggedStringParser


@pytest.fixture
def parser():
    return TaggedStringParser(delimiters=False, type_separator="=")


def type_value_pairs(entities):
    return [(e.type, e.value) for e in entities]


def test_simple_key_value(parser):
    entities = parser.parse("order=1337").entities
    assert len(entities) == 1
    assert entities[0].type == "order"
    assert entities[0].value == "1337"
    assert entities[0].parsed_value == 1337
    assert entities[0].inferred_type == PrimitiveType.NUMBER


@pytest.mark.parametrize(
    "message, expected",
    [
        ("order=1337 status=pending", [("order", "1337"), ("status", "pending")]),
        ("an order=1337 was placed", [("order", "1337")]),
        ("order=1337    status=pending", [("order", "1337"), ("status", "pending")]),
        ("first=1 middle text last=2", [("first", "1"), ("last", "2")]),
        ("  \tpadded=1\n", [("padded", "1")]),
        ("a=b=c", [("a", "b=c")]),
        ("[status=pending] order=1337", [("[status", "pending]"), ("order", "1337")]),
    ],
)
def test_unquoted_tokens(parser, message, expected):
    assert type_value_pairs(parser.parse(message).entities) == expected


@pytest.mark.parametrize(
    "message, expected",
    [
        ('order="number 42"', ("order", "number 42")),
        ('"store order"=42', ("store order", "42")),
        ('"store order"="number 42"', ("store order", "number 42")),
        (r'msg="say \"hello\""', ("msg", 'say "hello"')),
        (r'"key\"name"=value', ('key"name', "value")),
        ('""=5', ("", "5")),
    ],
)
def test_quoted_parts(parser, message, expected):
    assert type_value_pairs(parser.parse(message).entities) == [expected]


def test_quoted_value_parses_as_number(parser):
    entity = parser.parse('"store order"=42').entities[0]
    assert entity.parsed_value == 42


def test_positions(parser):
    entities = parser.parse("order=1337 status=pending").entities
    assert [(e.position, e.end_position) for e in entities] == [(0, 10), (11, 25)]


def test_positions_include_quotes(parser):
    message = 'x "a b"="c d" y'
    entity = parser.parse(message).entities[0]
    assert (entity.position, entity.end_position) == (2, 13)
    assert message[entity.position:entity.end_position] == '"a b"="c d"'


def test_custom_separator():
    parser = TaggedStringParser(delimiters=False, type_separator=":")
    entities = parser.parse("order:1337 status:pending").entities
    assert type_value_pairs(entities) == [("order", "1337"), ("status", "pending")]


def test_multi_character_separator():
    parser = TaggedStringParser(delimiters=[], type_separator="=>")
    entities = parser.parse("a=>1 b=2 c=>x=>y").entities
    assert type_value_pairs(entities) == [("a", "1"), ("c", "x=>y")]


# Malformed candidates

def test_unclosed_quoted_value_is_dropped(parser):
    assert parser.parse('key="unclosed value').entities == ()


def test_unclosed_quoted_key_skips_one_character(parser):
    entities = parser.parse('"unclosed key=42 valid=123').entities
    assert type_value_pairs(entities) == [("key", "42"), ("valid", "123")]


def test_key_without_value_is_dropped(parser):
    entities = parser.parse("key= valid=123").entities
    assert type_value_pairs(entities) == [("valid", "123")]


def test_key_at_end_of_message_is_dropped(parser):
    assert parser.parse("key=").entities == ()


def test_empty_quoted_value_is_dropped(parser):
    entities = parser.parse('key="" valid=1').entities
    assert type_value_pairs(entities) == [("valid", "1")]


def test_separator_without_key_is_skipped(parser):
    entities = parser.parse("=value ==x a=1").entities
    assert type_value_pairs(entities) == [("a", "1")]


def test_key_without_separator_also_skips_next_character(parser):
    # "b" right after the quoted key is skipped, so "=1" has no key
    entities = parser.parse('"a"b=1 c=2').entities
    assert type_value_pairs(entities) == [("c", "2")]


def test_quote_mark_within_unquoted_key_is_literal(parser):
    entities = parser.parse('word"a=1" b=2').entities
    assert type_value_pairs(entities) == [('word"a', '1"'), ("b", "2")]


def test_unclosed_quoted_value_resumes_after_quote_mark(parser):
    entities = parser.parse('a="x b=1').entities
    assert type_value_pairs(entities) == [("b", "1")]


def test_plain_text_gives_no_entities(parser):
    assert parser.parse("nothing to see here").entities == ()


def test_whitespace_only_message(parser):
    assert parser.parse(" \t\n ").entities == ()


# Schema

def test_schema_and_formatters_match_delimited_mode():
    schema = {
        "count": EntityDefinition("number", lambda n: f"{n} items"),
        "flag": "boolean",
        "id": "string",
    }
    delimited = TaggedStringParser(schema=schema, type_separator="=")
    free = TaggedStringParser(schema=schema, type_separator="=", delimiters=False)

    delimited_entities = delimited.parse("[count=3] [flag=yes] [id=42]").entities
    free_entities = free.parse("count=3 flag=yes id=42").entities

    def summary(entities):
        return [
            (e.type, e.parsed_value, e.formatted_value, e.inferred_type)
            for e in entities
        ]

    assert summary(free_entities) == summary(delimited_entities) == [
        ("count", 3, "3 items", PrimitiveType.NUMBER),
        ("flag", False, "false", PrimitiveType.BOOLEAN),
        ("id", "42", "42", PrimitiveType.STRING),
    ]


# Scanning invariants

@pytest.mark.parametrize(
    "message",
    [
        'a=1 "b c"=2 d="e f" g=h',
        '"x="y"=z w=1',
        "=== a=b=c = d= =e",
        '\\"a=1 b="\\"" c=3',
    ],
)
def test_entities_do_not_overlap(parser, message):
    entities = parser.parse(message).entities
    for entity in entities:
        assert 0 <= entity.position < entity.end_position <= len(message)
    for previous, current in zip(entities, entities[1:]):
        assert previous.end_position <= current.position

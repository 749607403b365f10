import pytest

from tagparse import (
    ConfigurationError,
    ConfigurationErrorCategory,
    EntityDefinition,
    ParserConfig,
    PrimitiveType,
    TaggedStringParser,
)
from tagparse._config import resolve_config


def test_defaults():
    parser = TaggedStringParser()
    assert parser.is_delimiter_free is False
    assert parser.open_delimiter == "["
    assert parser.close_delimiter == "]"
    assert parser.type_separator == ":"
    assert dict(parser.schema) == {}


def test_individual_delimiter_options():
    parser = TaggedStringParser(open_delimiter="<", close_delimiter=">")
    assert parser.is_delimiter_free is False
    assert parser.open_delimiter == "<"
    assert parser.close_delimiter == ">"


@pytest.mark.parametrize("delimiters", [False, [], ()])
def test_delimiter_free_mode(delimiters):
    parser = TaggedStringParser(delimiters=delimiters)
    assert parser.is_delimiter_free is True


@pytest.mark.parametrize("delimiters", [["[", "]"], ("{{", "}}")])
def test_delimiters_pair(delimiters):
    parser = TaggedStringParser(delimiters=delimiters)
    assert parser.is_delimiter_free is False
    assert parser.open_delimiter == delimiters[0]
    assert parser.close_delimiter == delimiters[1]


def test_delimiters_take_precedence():
    parser = TaggedStringParser(
        open_delimiter="<", close_delimiter=">", delimiters=["{{", "}}"]
    )
    assert parser.open_delimiter == "{{"
    assert parser.close_delimiter == "}}"

    parser = TaggedStringParser(
        open_delimiter="<", close_delimiter=">", delimiters=False
    )
    assert parser.is_delimiter_free is True


def test_config_object():
    config = ParserConfig(delimiters=False, type_separator="=")
    parser = TaggedStringParser(config)
    assert parser.is_delimiter_free is True
    assert parser.type_separator == "="


def test_config_object_and_options_are_exclusive():
    with pytest.raises(TypeError):
        TaggedStringParser(ParserConfig(), type_separator="=")


@pytest.mark.parametrize(
    "options, category, option",
    [
        (
            {"open_delimiter": ""},
            ConfigurationErrorCategory.EMPTY_DELIMITER,
            "open_delimiter",
        ),
        (
            {"close_delimiter": ""},
            ConfigurationErrorCategory.EMPTY_DELIMITER,
            "close_delimiter",
        ),
        (
            {"open_delimiter": "|", "close_delimiter": "|"},
            ConfigurationErrorCategory.IDENTICAL_DELIMITERS,
            "close_delimiter",
        ),
        (
            {"delimiters": ["", "]"]},
            ConfigurationErrorCategory.EMPTY_DELIMITER,
            "open_delimiter",
        ),
        (
            {"delimiters": ["|", "|"]},
            ConfigurationErrorCategory.IDENTICAL_DELIMITERS,
            "close_delimiter",
        ),
        (
            {"delimiters": ["["]},
            ConfigurationErrorCategory.DELIMITERS_SHAPE,
            "delimiters",
        ),
        (
            {"delimiters": ["[", "]", ":"]},
            ConfigurationErrorCategory.DELIMITERS_SHAPE,
            "delimiters",
        ),
        (
            {"delimiters": True},
            ConfigurationErrorCategory.DELIMITERS_SHAPE,
            "delimiters",
        ),
        (
            {"delimiters": "[]"},
            ConfigurationErrorCategory.DELIMITERS_SHAPE,
            "delimiters",
        ),
        (
            {"delimiters": ["[", 1]},
            ConfigurationErrorCategory.DELIMITERS_SHAPE,
            "delimiters",
        ),
        (
            {"type_separator": ""},
            ConfigurationErrorCategory.EMPTY_TYPE_SEPARATOR,
            "type_separator",
        ),
        (
            {"schema": {"count": "integer"}},
            ConfigurationErrorCategory.SCHEMA,
            "schema",
        ),
        (
            {"schema": {"count": {"format": str}}},
            ConfigurationErrorCategory.SCHEMA,
            "schema",
        ),
        (
            {"schema": {"count": {"type": "number", "format": "#"}}},
            ConfigurationErrorCategory.SCHEMA,
            "schema",
        ),
        (
            {"schema": {"count": 5}},
            ConfigurationErrorCategory.SCHEMA,
            "schema",
        ),
    ],
)
def test_invalid_configuration(options, category, option):
    with pytest.raises(ConfigurationError) as exc_info:
        TaggedStringParser(**options)
    assert exc_info.value.error_category == category
    assert exc_info.value.option == option
    assert exc_info.value.reason in str(exc_info.value)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        TaggedStringParser(open_delimiter="#", close_delimiter="#")


def test_delimiter_validation_skipped_in_delimiter_free_mode():
    parser = TaggedStringParser(
        open_delimiter="", close_delimiter="", delimiters=False
    )
    assert parser.is_delimiter_free is True


def test_schema_entries_are_normalized():
    def formatter(value):
        return str(value)

    config = ParserConfig(schema={
        "a": "number",
        "b": PrimitiveType.BOOLEAN,
        "c": EntityDefinition("string"),
        "d": {"type": "number", "format": formatter},
    })
    schema = resolve_config(config).schema
    assert schema["a"] == EntityDefinition(PrimitiveType.NUMBER)
    assert schema["b"] == EntityDefinition(PrimitiveType.BOOLEAN)
    assert schema["c"] == EntityDefinition(PrimitiveType.STRING)
    assert schema["d"] == EntityDefinition(PrimitiveType.NUMBER, formatter)


def test_resolved_schema_is_read_only():
    schema = {"count": "number"}
    parser = TaggedStringParser(schema=schema)
    with pytest.raises(TypeError):
        parser.schema["other"] = EntityDefinition("string")

    # Later changes to the caller's mapping do not leak in
    schema["name"] = "string"
    assert "name" not in parser.schema

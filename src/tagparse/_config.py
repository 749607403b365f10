"""
Parser configuration.

`ParserConfig` holds the options exactly as the caller gave them.
`resolve_config()` validates them once and produces the `ResolvedConfig`
that the parser actually runs on, so that option precedence is decided
in one place instead of throughout the scanning code.

```python
config = ParserConfig(delimiters=False, type_separator="=")
resolved = resolve_config(config)

assert resolved.is_delimiter_free
```
"""

import dataclasses
import logging
from collections.abc import Mapping as MappingABC
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional, Sequence, Tuple, Union

from tagparse._config_error import ConfigurationError, ConfigurationErrorCategory
from tagparse._entity import EntityDefinition, PrimitiveType
from tagparse.spec import (
    DEFAULT_CLOSE_DELIMITER,
    DEFAULT_OPEN_DELIMITER,
    DEFAULT_TYPE_SEPARATOR,
    EMPTY,
)

logger = logging.getLogger(__name__)


SchemaEntry = Union[str, PrimitiveType, EntityDefinition, Mapping[str, object]]
"""
Either a bare primitive type tag (`"number"`), an `EntityDefinition`,
or a mapping with a `"type"` key and an optional `"format"` key.
"""

DelimitersOption = Union[bool, Sequence[str]]


@dataclasses.dataclass(frozen=True)
class ParserConfig:
    """Options accepted by `TaggedStringParser`."""

    open_delimiter: str = DEFAULT_OPEN_DELIMITER
    close_delimiter: str = DEFAULT_CLOSE_DELIMITER
    type_separator: str = DEFAULT_TYPE_SEPARATOR
    schema: Optional[Mapping[str, SchemaEntry]] = None
    delimiters: Optional[DelimitersOption] = None
    """
    Unified delimiter option, taking precedence over `open_delimiter`
    and `close_delimiter`:
    - `False` or an empty list/tuple selects delimiter-free mode;
    - a list/tuple `(open, close)` selects delimited mode with those;
    - `None` (the default) leaves the individual options in charge.
    """


class ResolvedConfig(NamedTuple):
    """Validated configuration, fixed for the lifetime of a parser."""
    open_delimiter: str
    close_delimiter: str
    type_separator: str
    schema: Mapping[str, EntityDefinition]
    is_delimiter_free: bool


def resolve_config(config: ParserConfig) -> ResolvedConfig:
    """
    Validates `config` and settles the delimiter mode.

    Raises a `ConfigurationError` for empty or identical delimiters,
    a malformed `delimiters` option, an empty type separator,
    or a schema entry naming an unknown primitive type.
    """

    is_delimiter_free, open_delimiter, close_delimiter = _resolve_delimiters(
        config
    )
    if not is_delimiter_free:
        validate_delimiters(open_delimiter, close_delimiter)
    validate_type_separator(config.type_separator)
    schema = normalize_schema(config.schema)

    logger.debug(
        "Resolved %s mode (open=%r, close=%r, separator=%r, %s schema entries)",
        "delimiter-free" if is_delimiter_free else "delimited",
        open_delimiter,
        close_delimiter,
        config.type_separator,
        len(schema),
    )
    return ResolvedConfig(
        open_delimiter=open_delimiter,
        close_delimiter=close_delimiter,
        type_separator=config.type_separator,
        schema=schema,
        is_delimiter_free=is_delimiter_free,
    )


def _resolve_delimiters(config: ParserConfig) -> Tuple[bool, str, str]:
    delimiters = config.delimiters
    if delimiters is None:
        return False, config.open_delimiter, config.close_delimiter

    # `True` and plain strings are not accepted as a delimiter pair
    if delimiters is False:
        return True, EMPTY, EMPTY
    if isinstance(delimiters, (list, tuple)):
        if len(delimiters) == 0:
            return True, EMPTY, EMPTY
        if len(delimiters) == 2 and all(
            isinstance(d, str) for d in delimiters
        ):
            return False, delimiters[0], delimiters[1]

    raise ConfigurationError.make_option_error(
        "Expected False, an empty list, or a pair of strings "
        "(open delimiter, close delimiter).",
        error_category=ConfigurationErrorCategory.DELIMITERS_SHAPE,
        option="delimiters",
        value=delimiters,
    )


def validate_delimiters(open_delimiter: str, close_delimiter: str) -> None:
    """Delimiters must both be non-empty and must differ from each other."""

    if open_delimiter == EMPTY:
        raise ConfigurationError.make_option_error(
            "Open delimiter cannot be empty.",
            error_category=ConfigurationErrorCategory.EMPTY_DELIMITER,
            option="open_delimiter",
            value=open_delimiter,
        )
    if close_delimiter == EMPTY:
        raise ConfigurationError.make_option_error(
            "Close delimiter cannot be empty.",
            error_category=ConfigurationErrorCategory.EMPTY_DELIMITER,
            option="close_delimiter",
            value=close_delimiter,
        )
    if open_delimiter == close_delimiter:
        raise ConfigurationError.make_option_error(
            "Open and close delimiters cannot be the same.",
            error_category=ConfigurationErrorCategory.IDENTICAL_DELIMITERS,
            option="close_delimiter",
            value=close_delimiter,
        )


def validate_type_separator(type_separator: str) -> None:
    if type_separator == EMPTY:
        raise ConfigurationError.make_option_error(
            "Type separator cannot be empty.",
            error_category=ConfigurationErrorCategory.EMPTY_TYPE_SEPARATOR,
            option="type_separator",
            value=type_separator,
        )


def normalize_schema(
    schema: Optional[Mapping[str, SchemaEntry]]
) -> Mapping[str, EntityDefinition]:
    """
    Converts every schema entry to an `EntityDefinition`
    and returns them as a read-only mapping.
    """

    if schema is None:
        return MappingProxyType({})
    return MappingProxyType({
        type_name: _normalize_schema_entry(type_name, entry)
        for type_name, entry in schema.items()
    })


def _normalize_schema_entry(
    type_name: str, entry: SchemaEntry
) -> EntityDefinition:
    try:
        if isinstance(entry, EntityDefinition):
            return entry
        elif isinstance(entry, (str, PrimitiveType)):
            return EntityDefinition(type=PrimitiveType(entry))
        elif isinstance(entry, MappingABC):
            formatter = entry.get("format")
            if formatter is not None and not callable(formatter):
                raise TypeError(f"format must be callable: {formatter!r}")
            return EntityDefinition(type=entry["type"], format=formatter)
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError.make_option_error(
            f"Invalid schema entry for type {type_name!r}. Expected one of "
            f"{', '.join(repr(t.value) for t in PrimitiveType)}, "
            "or a definition with a valid 'type' and an optional "
            "callable 'format'.",
            error_category=ConfigurationErrorCategory.SCHEMA,
            option="schema",
            value=entry,
        ) from e

    raise ConfigurationError.make_option_error(
        f"Invalid schema entry for type {type_name!r}. Expected a primitive "
        "type name, an EntityDefinition, or a mapping.",
        error_category=ConfigurationErrorCategory.SCHEMA,
        option="schema",
        value=entry,
    )

"""
This module provides 2 ways to write tags.
1. Call `to_tag()`.
2. Instantiate a `TaggedStringGenerator` and call its `tag()` method.

Both have the same configuration options and defaults,
which match the defaults of `TaggedStringParser`.

Approach #1 simply does approach #2 under the hood.
Approach #2 may be useful if you want to set a configuration once
and reuse that for many tags.

```python
from tagparse import TaggedStringGenerator, to_tag

# Approach #1
tag = to_tag("operation", "deploy")  # [operation:deploy]

# Approach #2
generator = TaggedStringGenerator(open_delimiter="{{", close_delimiter="}}")
tag = generator.tag("changes", 5)  # {{changes:5}}
message = generator.embed("Starting ", "operation", "deploy")
```
"""

from tagparse._config import validate_delimiters, validate_type_separator
from tagparse._types import stringify_value
from tagparse.spec import (
    DEFAULT_CLOSE_DELIMITER,
    DEFAULT_OPEN_DELIMITER,
    DEFAULT_TYPE_SEPARATOR,
    ESCAPE_CHARACTER,
    QUOTE_MARK,
    SIMPLE_ESCAPE_SEQUENCES,
    WS_CHARS,
)


def to_tag(
    type_name: str,
    value: object,
    *,
    open_delimiter: str = DEFAULT_OPEN_DELIMITER,
    close_delimiter: str = DEFAULT_CLOSE_DELIMITER,
    type_separator: str = DEFAULT_TYPE_SEPARATOR,
) -> str:
    """
    Writes `value` as a delimited tag of type `type_name`.

    This function has the same configuration options and defaults
    as `TaggedStringGenerator`.
    """

    generator = TaggedStringGenerator(
        open_delimiter=open_delimiter,
        close_delimiter=close_delimiter,
        type_separator=type_separator,
    )
    return generator.tag(type_name, value)


class TaggedStringGenerator:
    """Writes tags that `TaggedStringParser` reads back in delimited mode."""

    def __init__(
        self,
        *,
        open_delimiter: str = DEFAULT_OPEN_DELIMITER,
        close_delimiter: str = DEFAULT_CLOSE_DELIMITER,
        type_separator: str = DEFAULT_TYPE_SEPARATOR,
    ) -> None:
        """
        Args:
            open_delimiter:
                Written before each tag. Cannot be empty.
            close_delimiter:
                Written after each tag.
                Cannot be empty or equal to `open_delimiter`.
            type_separator:
                Written between type and value. Cannot be empty.

        Raises:
            ConfigurationError: if any option is invalid.
        """

        validate_delimiters(open_delimiter, close_delimiter)
        validate_type_separator(type_separator)
        self._open_delimiter = open_delimiter
        self._close_delimiter = close_delimiter
        self._type_separator = type_separator

    def tag(self, type_name: str, value: object) -> str:
        """
        Writes a single tag, e.g. `tag("operation", "deploy")`
        gives `[operation:deploy]`.

        Non-string values use the same string conversion the parser uses
        for display, so `True` becomes `true` and `5.0` becomes `5`.
        Types and values that would not read back as written are quoted.
        """

        type_str = self._to_tag_part(
            type_name, self._type_separator, self._close_delimiter
        )
        value_str = self._to_tag_part(
            stringify_value(value), self._close_delimiter
        )
        return (
            f"{self._open_delimiter}{type_str}{self._type_separator}"
            f"{value_str}{self._close_delimiter}"
        )

    def embed(self, message: str, type_name: str, value: object) -> str:
        """Appends a tag to `message`, e.g. `Starting [operation:deploy]`."""
        return f"{message}{self.tag(type_name, value)}"

    def _to_tag_part(self, s: str, *reserved: str) -> str:
        if (
            QUOTE_MARK in s
            or s != s.strip(WS_CHARS)
            or any(mark in s for mark in reserved)
        ):
            return f"{QUOTE_MARK}{escape_string(s)}{QUOTE_MARK}"
        return s


def escape_string(s: str) -> str:
    # First escape the escape character
    content = s.replace(ESCAPE_CHARACTER, SIMPLE_ESCAPE_SEQUENCES[ESCAPE_CHARACTER])
    return content.replace(QUOTE_MARK, SIMPLE_ESCAPE_SEQUENCES[QUOTE_MARK])

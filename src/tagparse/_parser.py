"""
Extract tagged entities from a message by calling `from_tagged`,
or by reusing a configured `TaggedStringParser`.

```python
result = from_tagged("[operation:OP-123] started with [changes:5]")

assert [e.type for e in result.entities] == ["operation", "changes"]
assert result.entities[1].parsed_value == 5
assert result.format() == "OP-123 started with 5"
```

Delimiter-free mode picks up `key=value` tokens from plain text instead:

```python
parser = TaggedStringParser(delimiters=False, type_separator="=")
result = parser.parse('order=1337 "store name"="Main St" was placed')

assert [(e.type, e.value) for e in result.entities] == [
    ("order", "1337"),
    ("store name", "Main St"),
]
```
"""

import logging
from typing import Callable, List, Mapping, Optional, Tuple

from tagparse._config import ParserConfig, ResolvedConfig, resolve_config
from tagparse._entity import Entity, EntityDefinition
from tagparse._result import ParseResult
from tagparse._scanner import scan_quoted, scan_unquoted, skip_whitespace
from tagparse._types import resolve_value
from tagparse.spec import EMPTY, ESCAPE_CHARACTER, QUOTE_MARK, WS_CHARS

logger = logging.getLogger(__name__)


Tag = Tuple[str, str]
"""The `(type, value)` pair of a tag, before type resolution."""

Step = Tuple[Optional[Entity], int]
"""What one scan step found (if anything), and where the next one starts."""


def from_tagged(message: str, **options) -> ParseResult:
    """
    Parse the entities out of `message`.

    Accepts the same options as `ParserConfig`.
    For repeated parsing with the same options,
    construct a `TaggedStringParser` once and reuse it.
    """

    parser = TaggedStringParser(**options)
    return parser.parse(message)


class TaggedStringParser:
    """
    Extracts tagged entities from strings.

    Works in one of two modes, fixed on construction:
    - delimited (the default): tags look like `[type:value]`;
    - delimiter-free (`delimiters=False`): tags are whitespace-separated
      `type:value` tokens within the surrounding text.

    The parser holds no state between calls to `parse()`,
    so a single instance can be shared freely.
    """

    _config: ResolvedConfig

    def __init__(self, config: Optional[ParserConfig] = None, **options) -> None:
        """
        Args:
            config:
                Parser options. Alternatively, pass the same options
                as keyword arguments, but not both.

        Raises:
            ConfigurationError: if any option is invalid.
        """

        if config is None:
            config = ParserConfig(**options)
        elif options:
            raise TypeError(
                "Pass either a ParserConfig or keyword options, not both. "
                f"Got config and: {', '.join(sorted(options))}"
            )
        self._config = resolve_config(config)

    @property
    def open_delimiter(self) -> str:
        return self._config.open_delimiter

    @property
    def close_delimiter(self) -> str:
        return self._config.close_delimiter

    @property
    def type_separator(self) -> str:
        return self._config.type_separator

    @property
    def is_delimiter_free(self) -> bool:
        return self._config.is_delimiter_free

    @property
    def schema(self) -> Mapping[str, EntityDefinition]:
        return self._config.schema

    def parse(self, message: str) -> ParseResult:
        """
        Parse a message and extract all tagged entities, in order.

        Never raises for malformed tags; those are skipped.
        """

        if message == EMPTY:
            return ParseResult(message, [])

        entities = _MessageScanner(message, self._config).scan()
        logger.debug(
            "Extracted %s entities from a message of length %s",
            len(entities),
            len(message),
        )
        return ParseResult(message, entities)


class _MessageScanner:
    """
    Scan state for one message.

    Each step starts at a candidate index and returns the entity it found
    (or `None`) along with the index to continue from, which is always
    past the candidate index.
    """

    _text: str
    _config: ResolvedConfig

    def __init__(self, text: str, config: ResolvedConfig) -> None:
        self._text = text
        self._config = config

        self._find_candidate: Callable[[int], Optional[int]]
        self._step: Callable[[int], Step]
        if config.is_delimiter_free:
            self._find_candidate = self._find_token_start
            self._step = self._step_delimiter_free
        else:
            self._find_candidate = self._find_open_delimiter
            self._step = self._step_delimited

    def scan(self) -> List[Entity]:
        entities: List[Entity] = []
        index = self._find_candidate(0)
        while index is not None:
            entity, next_index = self._step(index)
            if entity is not None:
                entities.append(entity)
            index = self._find_candidate(next_index)
        return entities

    def _make_entity(
        self, tag: Tag, position: int, end_position: int
    ) -> Entity:
        type_name, value = tag
        parsed_value, formatted_value, inferred_type = resolve_value(
            type_name, value, self._config.schema
        )
        return Entity(
            type=type_name,
            value=value,
            parsed_value=parsed_value,
            formatted_value=formatted_value,
            inferred_type=inferred_type,
            position=position,
            end_position=end_position,
        )

    # Delimited mode

    def _find_open_delimiter(self, start_index: int) -> Optional[int]:
        index = self._text.find(self._config.open_delimiter, start_index)
        return None if index == -1 else index

    def _step_delimited(self, open_index: int) -> Step:
        content_start_index = open_index + len(self._config.open_delimiter)
        close_index = self._find_close_delimiter(content_start_index)
        if close_index is None:
            # Resume right after this open delimiter, so that another one
            # within the unclosed span can still start a tag
            logger.debug(
                "Skipping open delimiter at index %s: no close delimiter",
                open_index,
            )
            return None, content_start_index

        end_index = close_index + len(self._config.close_delimiter)
        content = self._text[content_start_index:close_index].strip(WS_CHARS)
        if content == EMPTY:
            return None, end_index

        tag = self._resolve_delimited_tag(content)
        if tag is None:
            logger.debug(
                "Skipping malformed tag at index %s: %r", open_index, content
            )
            return None, end_index
        return self._make_entity(tag, open_index, end_index), end_index

    def _find_close_delimiter(self, start_index: int) -> Optional[int]:
        """
        Returns the index of the first close delimiter from `start_index`
        that is not within quote marks, or `None` if there is none.

        A quote mark preceded by an odd number of consecutive escape
        characters does not open or close a quote.
        """

        text = self._text
        close_delimiter = self._config.close_delimiter
        in_quote = False
        escape_run = 0
        for index in range(start_index, len(text)):
            c = text[index]
            if c == QUOTE_MARK and escape_run % 2 == 0:
                in_quote = not in_quote
            elif not in_quote and text.startswith(close_delimiter, index):
                return index
            escape_run = escape_run + 1 if c == ESCAPE_CHARACTER else 0
        return None

    def _resolve_delimited_tag(self, content: str) -> Optional[Tag]:
        """
        Splits trimmed tag content into `(type, value)`.

        Content without any separator is a bare value with an empty type.
        Returns `None` if the content is malformed.
        """

        separator = self._config.type_separator
        if content.startswith(QUOTE_MARK):
            quoted_type = scan_quoted(content, 0)
            if quoted_type is None:
                return None
            type_name, index = quoted_type
        else:
            index = content.find(separator)
            if index == -1:
                return EMPTY, content
            type_name = content[:index]

        if not content.startswith(separator, index):
            return None
        index += len(separator)

        if not content.startswith(QUOTE_MARK, index):
            return type_name, content[index:]

        quoted_value = scan_quoted(content, index)
        if quoted_value is None or quoted_value.end_index != len(content):
            return None
        return type_name, quoted_value.content

    # Delimiter-free mode

    def _find_token_start(self, start_index: int) -> Optional[int]:
        index = skip_whitespace(self._text, start_index)
        return None if index >= len(self._text) else index

    def _step_delimiter_free(self, key_start_index: int) -> Step:
        text = self._text
        separator = self._config.type_separator

        # Key
        if text.startswith(QUOTE_MARK, key_start_index):
            key = scan_quoted(text, key_start_index)
            if key is None:
                logger.debug(
                    "Skipping unclosed quoted key at index %s", key_start_index
                )
                return None, key_start_index + 1
        else:
            key = scan_unquoted(text, key_start_index, (separator,))
            if key.content == EMPTY:
                return None, key_start_index + 1

        if not text.startswith(separator, key.end_index):
            # Not a tag; this also skips the character after the token
            return None, key.end_index + 1

        # Value
        value_start_index = key.end_index + len(separator)
        if text.startswith(QUOTE_MARK, value_start_index):
            value = scan_quoted(text, value_start_index)
            if value is None:
                logger.debug(
                    "Skipping tag at index %s: unclosed quoted value",
                    key_start_index,
                )
                return None, value_start_index + 1
        else:
            value = scan_unquoted(text, value_start_index)

        if value.content == EMPTY:
            logger.debug(
                "Skipping tag at index %s: empty value", key_start_index
            )
            return None, value.end_index

        entity = self._make_entity(
            (key.content, value.content), key_start_index, value.end_index
        )
        return entity, value.end_index

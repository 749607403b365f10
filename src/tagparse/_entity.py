import dataclasses
from enum import Enum
from typing import Callable, Optional

from tagparse.spec import ParsedValue


Formatter = Callable[[ParsedValue], str]
"""Turns a coerced value into its display string."""


class PrimitiveType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"

    def __str__(self) -> str:
        return self.value


@dataclasses.dataclass(frozen=True)
class EntityDefinition:
    """Schema entry for one entity type."""
    type: PrimitiveType
    format: Optional[Formatter] = None

    def __post_init__(self) -> None:
        # Accept the bare "string" / "number" / "boolean" tags
        object.__setattr__(self, "type", PrimitiveType(self.type))


@dataclasses.dataclass(frozen=True)
class Entity:
    """
    A tag extracted from a message.

    `position` and `end_position` delimit the whole tag within the original
    message (delimiters and quotes included), so that
    `message[position:end_position]` is the text `ParseResult.format()`
    replaces with `formatted_value`.
    """

    type: str
    value: str
    parsed_value: ParsedValue
    formatted_value: str
    inferred_type: PrimitiveType
    position: int
    end_position: int

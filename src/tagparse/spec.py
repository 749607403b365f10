"""Shared types and constants."""

import string
from types import MappingProxyType
from typing import FrozenSet, Mapping, Union


# Value types

ParsedValue = Union[str, int, float, bool]
"""A tag value after coercion to its primitive type."""


# General

EMPTY = ""


# Delimited tags: `[type:value]`

DEFAULT_OPEN_DELIMITER = "["
DEFAULT_CLOSE_DELIMITER = "]"
DEFAULT_TYPE_SEPARATOR = ":"


# Whitespace

WS_SET: FrozenSet[str] = frozenset(string.whitespace)
"""
ASCII whitespace only: space, tab, line feed, carriage return,
vertical tab and form feed. Unicode spaces are ordinary characters.
"""

WS_CHARS = string.whitespace
"""The same characters as `WS_SET`, in the form `str.strip()` accepts."""


# Quotes

QUOTE_MARK = '"'
ESCAPE_CHARACTER = "\\"

SIMPLE_ESCAPE_EVALUATION: Mapping[str, str] = MappingProxyType({
    QUOTE_MARK: QUOTE_MARK,
    ESCAPE_CHARACTER: ESCAPE_CHARACTER,
})
"""
The only two true escape sequences inside a quote. The escape character
followed by anything else (or by the end of input) is kept literally,
escape character included.
"""

SIMPLE_ESCAPE_SEQUENCES: Mapping[str, str] = MappingProxyType({
    v: f"{ESCAPE_CHARACTER}{k}"
    for k, v in SIMPLE_ESCAPE_EVALUATION.items()
})
"""Inverse of `SIMPLE_ESCAPE_EVALUATION`, used when writing quotes."""


# Boolean literals (compared case-insensitively)

TRUE_LITERAL = "true"
FALSE_LITERAL = "false"


# Default string conversion of numbers

NAN_LITERAL = "NaN"
INFINITY_LITERAL = "Infinity"
NEGATIVE_INFINITY_LITERAL = "-Infinity"

MAX_SAFE_INTEGER = 2 ** 53 - 1
"""
Largest integer a double represents exactly along with all its neighbours.
Integral numbers beyond this stay `float`.
"""

MAX_PLAIN_POINT_POSITION = 21
MIN_PLAIN_POINT_POSITION = -5
"""
Floats print without an exponent while their decimal point lies within
these bounds, counted from the left of the first significant digit
(`1e20` has it at 21, `0.000001` at -5).
"""

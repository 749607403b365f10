"""
Type resolution: inferring, coercing and formatting tag values.

Both parsing modes hand every extracted `(type, value)` pair to
`resolve_value()`, so schemas and formatters behave the same in each.
"""

import math
import re
from typing import Mapping, NamedTuple, Tuple, Union

from tagparse._entity import EntityDefinition, PrimitiveType
from tagparse.spec import (
    FALSE_LITERAL,
    INFINITY_LITERAL,
    MAX_PLAIN_POINT_POSITION,
    MAX_SAFE_INTEGER,
    MIN_PLAIN_POINT_POSITION,
    NAN_LITERAL,
    NEGATIVE_INFINITY_LITERAL,
    TRUE_LITERAL,
    ParsedValue,
)


_INFERRED_NUMBER_PATTERN = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")

_NUMBER_PREFIX_PATTERN = re.compile(
    r"[ \t\n\r\f\v]*"
    r"([+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?))"
)
"""
Leading whitespace, then the longest prefix that reads as a decimal number.
Anything after the prefix is ignored.
"""


class ResolvedValue(NamedTuple):
    parsed_value: ParsedValue
    formatted_value: str
    inferred_type: PrimitiveType


def resolve_value(
    type_name: str,
    raw_value: str,
    schema: Mapping[str, EntityDefinition],
) -> ResolvedValue:
    """
    Coerces `raw_value` to the type the schema declares for `type_name`,
    falling back to `infer_type()` for types missing from the schema,
    then formats it with the schema's formatter, if any.
    """

    definition = schema.get(type_name)
    if definition is None:
        primitive_type = infer_type(raw_value)
    else:
        primitive_type = definition.type

    parsed_value = coerce_value(raw_value, primitive_type)
    if definition is not None and definition.format is not None:
        formatted_value = str(definition.format(parsed_value))
    else:
        formatted_value = stringify_value(parsed_value)

    return ResolvedValue(parsed_value, formatted_value, primitive_type)


def infer_type(raw_value: str) -> PrimitiveType:
    """
    - `number`: optional minus sign, digits, optional decimal part
      (`42`, `-5`, `19.99`, but not `+1`, `1.` or `1e3`);
    - `boolean`: `true` or `false` in any letter case;
    - `string`: everything else.
    """

    if _INFERRED_NUMBER_PATTERN.fullmatch(raw_value):
        return PrimitiveType.NUMBER
    if raw_value.lower() in (TRUE_LITERAL, FALSE_LITERAL):
        return PrimitiveType.BOOLEAN
    return PrimitiveType.STRING


def coerce_value(raw_value: str, primitive_type: PrimitiveType) -> ParsedValue:
    if primitive_type == PrimitiveType.NUMBER:
        return parse_number(raw_value)
    elif primitive_type == PrimitiveType.BOOLEAN:
        return raw_value.lower() == TRUE_LITERAL
    else:
        return raw_value


def parse_number(raw_value: str) -> Union[int, float]:
    """
    Parses the leading number of `raw_value`.

    Leading whitespace is skipped and trailing garbage is ignored,
    so `" 12px"` gives `12`. Text with no leading number gives `nan`,
    which is returned as is rather than treated as an error.

    Integral results within the safe integer range come back as `int`,
    everything else as `float`.
    """

    match = _NUMBER_PREFIX_PATTERN.match(raw_value)
    if match is None:
        return math.nan

    number = float(match.group(1))
    if number.is_integer() and abs(number) <= MAX_SAFE_INTEGER:
        return int(number)
    return number


def stringify_value(value: object) -> str:
    """
    Default display string for a coerced value:
    `true`/`false` for booleans, `NaN` and `Infinity` for the special floats,
    other floats via `format_float()`, anything else via `str()`.
    """

    if isinstance(value, bool):
        return TRUE_LITERAL if value else FALSE_LITERAL
    elif isinstance(value, float):
        if math.isnan(value):
            return NAN_LITERAL
        if math.isinf(value):
            return INFINITY_LITERAL if value > 0 else NEGATIVE_INFINITY_LITERAL
        return format_float(value)
    else:
        return str(value)


def format_float(value: float) -> str:
    """
    Formats a finite float from its shortest round-tripping digits.

    Integral values lose the trailing `.0`, and the exponent form is used
    only far from the decimal point:
    `42.0` gives `42`, `1.2345678901234567e19` gives `12345678901234567000`,
    `1e21` gives `1e+21` and `1e-7` gives `1e-7`.
    """

    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    digits, point_position = _significant_digits(abs(value))
    digit_count = len(digits)

    if digit_count <= point_position <= MAX_PLAIN_POINT_POSITION:
        return sign + digits + "0" * (point_position - digit_count)
    if 0 < point_position <= MAX_PLAIN_POINT_POSITION:
        return sign + digits[:point_position] + "." + digits[point_position:]
    if MIN_PLAIN_POINT_POSITION <= point_position <= 0:
        return sign + "0." + "0" * -point_position + digits

    exponent = point_position - 1
    exponent_sign = "+" if exponent >= 0 else "-"
    if digit_count == 1:
        mantissa = digits
    else:
        mantissa = digits[0] + "." + digits[1:]
    return f"{sign}{mantissa}e{exponent_sign}{abs(exponent)}"


def _significant_digits(value: float) -> Tuple[str, int]:
    """
    Splits a positive float into its significant digits and the position
    of the decimal point counted from the left of the first digit.
    """

    mantissa, _, exponent = repr(value).partition("e")
    int_part, _, fraction_part = mantissa.partition(".")
    digits = int_part + fraction_part
    point_position = len(int_part) + (int(exponent) if exponent else 0)

    significant = digits.lstrip("0")
    point_position -= len(digits) - len(significant)
    return significant.rstrip("0"), point_position

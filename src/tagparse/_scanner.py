"""
Leaf scanners shared by both parsing modes.

Each scanner starts at a given index of the input text and reports
the index just past what it consumed, so callers can thread the index
through a scan without keeping any state of their own.
"""

from typing import Iterable, List, NamedTuple, Optional

from tagparse.spec import (
    ESCAPE_CHARACTER,
    QUOTE_MARK,
    SIMPLE_ESCAPE_EVALUATION,
    WS_SET,
)


class ScanResult(NamedTuple):
    content: str
    end_index: int
    """Index just past the consumed span (exclusive)."""


def scan_quoted(text: str, start_index: int) -> Optional[ScanResult]:
    """
    Scans a double-quoted string starting at `start_index`.

    Only `\\"` and `\\\\` are escape sequences. The escape character
    followed by any other character, or by the end of the text,
    is kept as it is.

    Returns `None` if `start_index` is not at a quote mark,
    or if the text ends before an unescaped closing quote mark.
    """

    if text[start_index:start_index + 1] != QUOTE_MARK:
        return None

    text_length = len(text)
    pieces: List[str] = []
    index = start_index + 1
    piece_start_index = index
    while index < text_length:
        c = text[index]
        if c == QUOTE_MARK:
            pieces.append(text[piece_start_index:index])
            return ScanResult("".join(pieces), index + 1)
        elif c == ESCAPE_CHARACTER:
            evaluation = SIMPLE_ESCAPE_EVALUATION.get(
                text[index + 1:index + 2]
            )
            if evaluation is not None:
                pieces.append(text[piece_start_index:index])
                pieces.append(evaluation)
                index += 2
                piece_start_index = index
                continue
        index += 1

    # Reached the end without finding the closing quote mark
    return None


def scan_unquoted(
    text: str, start_index: int, stop_marks: Iterable[str] = ()
) -> ScanResult:
    """
    Scans up to (excluding) the next whitespace character,
    the next occurrence of any of the `stop_marks`, or the end of the text.

    Stop marks may be longer than one character.
    An empty `content` means there is no token at `start_index`.
    """

    marks = tuple(mark for mark in stop_marks if mark)
    text_length = len(text)
    index = start_index
    while index < text_length:
        if text[index] in WS_SET:
            break
        if marks and text.startswith(marks, index):
            break
        index += 1
    return ScanResult(text[start_index:index], index)


def skip_whitespace(text: str, start_index: int) -> int:
    """Returns the index of the first non-whitespace character from `start_index`."""

    text_length = len(text)
    index = start_index
    while index < text_length and text[index] in WS_SET:
        index += 1
    return index

"""Streaming decoder for concatenated JSON values.

Region ingest files and snapshots are sequences of independently
decodable JSON values separated by whitespace, usually one per line.
"""

from __future__ import annotations

import json
from typing import Any, Iterator

_DECODER = json.JSONDecoder()
_WHITESPACE = " \t\n\r"


class JsonStreamError(ValueError):
    """Raised when a value in the stream cannot be decoded.

    Attributes:
        line_number: One-based line where the bad value starts.
    """

    def __init__(self, message: str, line_number: int) -> None:
        super().__init__(message)
        self.line_number = line_number


def iter_json_values(text: str) -> Iterator[tuple[int, Any]]:
    """Yield each decoded value with the line number it starts on.

    Args:
        text: Full stream contents.

    Yields:
        Pairs of one-based line number and decoded value.

    Raises:
        JsonStreamError: If a value is not valid JSON.
    """
    index = _skip_whitespace(text, 0)
    line_number = text.count("\n", 0, index) + 1
    counted_to = index
    while index < len(text):
        line_number += text.count("\n", counted_to, index)
        counted_to = index
        try:
            value, index = _DECODER.raw_decode(text, index)
        except json.JSONDecodeError as error:
            raise JsonStreamError(
                f"Invalid JSON at line {error.lineno}: {error.msg}", error.lineno
            ) from error
        yield line_number, value
        index = _skip_whitespace(text, index)


def _skip_whitespace(text: str, index: int) -> int:
    while index < len(text) and text[index] in _WHITESPACE:
        index += 1
    return index

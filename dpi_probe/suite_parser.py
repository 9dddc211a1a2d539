"""Tolerant scraping of the embedded test suite array.

The suite document is untrusted, quasi-structured text: a JavaScript-like
array literal of object literals following a marker token. Nothing here is a
real deserializer. Every function degrades to an empty/default value instead
of raising on malformed input.
"""

import logging
from collections.abc import Iterator, Sequence

from dpi_probe.models.suite import Test

log = logging.getLogger(__name__)

SUITE_MARKER = "TEST_SUITE"


def extract_balanced(text: str, start: int, opening: str, closing: str) -> str | None:
    """Extract the balanced ``opening ... closing`` span found from ``start``.

    Brackets inside string literals are counted like any other bracket.

    Args:
        text: Text to scan
        start: Offset to start searching for ``opening`` at
        opening: Opening delimiter character
        closing: Closing delimiter character

    Returns:
        The substring from the first ``opening`` through the ``closing`` at
        which depth returns to zero, or None if there is no ``opening`` or the
        delimiters never balance.

    """
    begin = text.find(opening, start)
    if begin == -1:
        return None

    depth = 0
    for i in range(begin, len(text)):
        char = text[i]
        if char == opening:
            depth += 1
        elif char == closing:
            depth -= 1
            if depth == 0:
                return text[begin : i + 1]
    return None


def extract_array(text: str, marker: str = SUITE_MARKER) -> str | None:
    """Extract the bracketed array literal that follows ``marker``."""
    pos = text.find(marker)
    if pos == -1:
        return None
    return extract_balanced(text, pos, "[", "]")


def iter_objects(array_text: str) -> Iterator[str]:
    """Yield every top-level ``{...}`` object literal, left to right."""
    pos = 0
    while (obj := extract_balanced(array_text, pos, "{", "}")) is not None:
        yield obj
        pos = array_text.find("{", pos) + len(obj)


def string_field(obj: str, name: str) -> str:
    """Return the text between the first two quotes after ``name:``."""
    pos = obj.find(f"{name}:")
    if pos == -1:
        return ""
    begin = obj.find('"', pos)
    if begin == -1:
        return ""
    end = obj.find('"', begin + 1)
    if end == -1:
        return ""
    return obj[begin + 1 : end]


def int_field(obj: str, name: str) -> int:
    """Return the run of decimal digits after ``name:``, or 0."""
    pattern = f"{name}:"
    pos = obj.find(pattern)
    if pos == -1:
        return 0
    pos += len(pattern)
    while pos < len(obj) and obj[pos].isspace():
        pos += 1
    end = pos
    while end < len(obj) and obj[end] in "0123456789":
        end += 1
    if end == pos:
        return 0
    try:
        return int(obj[pos:end])
    except ValueError:
        # digit runs past the interpreter's int conversion limit
        return 0


def parse_test(obj: str) -> Test | None:
    """Parse one object literal into a Test, or None if it has no id."""
    test_id = string_field(obj, "id")
    if not test_id:
        return None
    return Test(
        id=test_id,
        provider=string_field(obj, "provider"),
        url=string_field(obj, "url"),
        times=int_field(obj, "times"),
    )


def parse_suite(array_text: str) -> Sequence[Test]:
    """Parse every acceptable record of an extracted array literal."""
    tests: list[Test] = []
    for obj in iter_objects(array_text):
        if (test := parse_test(obj)) is not None:
            tests.append(test)
        else:
            log.debug("Dropping suite record without id: %.80s", obj)
    return tests

"""Small string-aware helpers for pulling fields out of JSON-like manifest text.

These helpers never build a document tree. They locate one key, find the span
of its value, and let each manifest parser read only the fields it needs.
Comments and trailing commas (common in turbo.json and nx.json) are tolerated
because everything outside the requested span is ignored.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Tuple

Span = Tuple[int, int]

_CLOSERS = {"{": "}", "[": "]"}
_LITERAL_END = re.compile(r"[,}\]\s]")


def skip_string(content: str, index: int) -> int:
    """Return the index just past the string literal opening at ``index``."""
    position = index + 1
    length = len(content)
    while position < length:
        char = content[position]
        if char == "\\":
            position += 2
            continue
        if char == '"':
            return position + 1
        position += 1
    return length


def find_matching(content: str, open_index: int) -> int:
    """Return the index of the bracket closing ``content[open_index]``, or -1."""
    depth = 0
    position = open_index
    length = len(content)
    while position < length:
        char = content[position]
        if char == '"':
            position = skip_string(content, position)
            continue
        if char in "{[":
            depth += 1
        elif char in "}]":
            depth -= 1
            if depth == 0:
                return position
        position += 1
    return -1


def unescape(raw: str) -> str:
    return raw.replace('\\"', '"').replace("\\\\", "\\").replace("\\/", "/")


def _skip_space(content: str, index: int) -> int:
    length = len(content)
    while index < length and content[index].isspace():
        index += 1
    return index


def _value_end(content: str, start: int, limit: int) -> int:
    if start >= limit:
        return limit
    char = content[start]
    if char == '"':
        return min(skip_string(content, start), limit)
    if char in _CLOSERS:
        close = find_matching(content, start)
        return close + 1 if 0 <= close < limit else limit
    match = _LITERAL_END.search(content, start, limit)
    return match.start() if match else limit


def find_key(content: str, key: str, start: int = 0, end: Optional[int] = None) -> Optional[Span]:
    """Return the value span of the first ``"key":`` between ``start`` and ``end``."""
    limit = len(content) if end is None else end
    needle = f'"{key}"'
    position = content.find(needle, start, limit)
    while position >= 0:
        after = _skip_space(content, position + len(needle))
        if after < limit and content[after] == ":":
            value_start = _skip_space(content, after + 1)
            return value_start, _value_end(content, value_start, limit)
        position = content.find(needle, position + 1, limit)
    return None


def container_span(content: str, key: str, opener: str = "{", start: int = 0) -> Optional[Span]:
    """Return ``(open, close)`` indexes of the object or array stored under ``key``."""
    found = find_key(content, key, start)
    if found is None:
        return None
    value_start, _ = found
    if value_start >= len(content) or content[value_start] != opener:
        return None
    close = find_matching(content, value_start)
    if close < 0:
        return None
    return value_start, close


def root_span(content: str) -> Optional[Span]:
    open_index = content.find("{")
    if open_index < 0:
        return None
    close = find_matching(content, open_index)
    return open_index, close if close >= 0 else len(content)


def iter_entries(content: str, span: Span) -> Iterator[Tuple[str, Span]]:
    """Yield ``(key, value_span)`` for each direct member of the object at ``span``."""
    open_index, close = span
    position = open_index + 1
    while position < close:
        char = content[position]
        if char != '"':
            position += 1
            continue
        key_end = skip_string(content, position)
        key = unescape(content[position + 1 : key_end - 1])
        colon = _skip_space(content, key_end)
        if colon >= close or content[colon] != ":":
            position = key_end
            continue
        value_start = _skip_space(content, colon + 1)
        value_end = _value_end(content, value_start, close)
        yield key, (value_start, value_end)
        position = max(value_end, value_start + 1)


def iter_array_strings(content: str, span: Span) -> Iterator[str]:
    """Yield the string literals that are direct items of the array at ``span``."""
    open_index, close = span
    position = open_index + 1
    while position < close:
        char = content[position]
        if char == '"':
            end = skip_string(content, position)
            yield unescape(content[position + 1 : end - 1])
            position = end
        elif char in _CLOSERS:
            match = find_matching(content, position)
            position = match + 1 if match >= 0 else close
        else:
            position += 1


def string_at(content: str, span: Span) -> Optional[str]:
    start, end = span
    if start < len(content) and content[start] == '"' and end - start >= 2:
        return unescape(content[start + 1 : end - 1])
    return None


def literal_at(content: str, span: Span) -> str:
    start, end = span
    return content[start:end].strip()


def get_json_string_value(content: str, key: str) -> Optional[str]:
    """Return the first string value stored under ``key`` anywhere in ``content``."""
    found = find_key(content, key)
    return string_at(content, found) if found else None


def top_level_value(content: str, key: str) -> Optional[Span]:
    """Return the value span of ``key`` on the root object only."""
    span = root_span(content)
    if span is None:
        return None
    for name, value in iter_entries(content, span):
        if name == key:
            return value
    return None


def top_level_string(content: str, key: str) -> Optional[str]:
    value = top_level_value(content, key)
    return string_at(content, value) if value else None


def parse_json_string_array(text: str) -> List[str]:
    """Return the string items of the first array in ``text``."""
    open_index = text.find("[")
    if open_index < 0:
        return []
    close = find_matching(text, open_index)
    if close < 0:
        close = len(text)
    return list(iter_array_strings(text, (open_index, close)))


def is_true(content: str, key: str, span: Optional[Span] = None) -> bool:
    start, end = span if span else (0, len(content))
    found = find_key(content, key, start, end)
    return found is not None and literal_at(content, found) == "true"


__all__ = [
    "Span",
    "container_span",
    "find_key",
    "find_matching",
    "get_json_string_value",
    "is_true",
    "iter_array_strings",
    "iter_entries",
    "literal_at",
    "parse_json_string_array",
    "root_span",
    "skip_string",
    "string_at",
    "top_level_string",
    "top_level_value",
]

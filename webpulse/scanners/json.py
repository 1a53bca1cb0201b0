"""JSON scanner with string-literal awareness."""

from __future__ import annotations

from enum import Enum

from ..models import JSONInfo
from .base import Scanner, add_issue

_MAX_NESTING = 10
_MAX_CONTAINERS = 1000


class _State(Enum):
    CODE = "code"
    STRING = "string"
    ESCAPE = "escape"


class JSONScanner(Scanner[JSONInfo]):
    """Tracks bracket depth outside string literals.

    Depth never drops below zero, so stray closers in malformed input cannot
    hide later nesting.
    """

    name = "json"
    extensions = (".json",)

    def scan(self, content: str) -> JSONInfo:
        info = JSONInfo()
        state = _State.CODE
        depth = 0
        for char in content:
            if state is _State.ESCAPE:
                state = _State.STRING
                continue
            if state is _State.STRING:
                if char == "\\":
                    state = _State.ESCAPE
                elif char == '"':
                    state = _State.CODE
                continue

            if char == '"':
                state = _State.STRING
            elif char == "{" or char == "[":
                if char == "{":
                    info.object_count += 1
                else:
                    info.array_count += 1
                depth += 1
                info.max_nesting_level = max(info.max_nesting_level, depth)
            elif char == "}" or char == "]":
                depth = max(depth - 1, 0)
            elif char == ":" and depth > 0:
                info.key_count += 1

        if info.max_nesting_level > _MAX_NESTING:
            add_issue(
                info.potential_issues,
                f"Deep nesting level ({info.max_nesting_level}) may cause performance issues when parsing",
            )
        containers = info.object_count + info.array_count
        if containers > _MAX_CONTAINERS:
            add_issue(
                info.potential_issues,
                f"Large number of objects and arrays ({containers}) "
                "may indicate overly complex data structure",
            )
        return info

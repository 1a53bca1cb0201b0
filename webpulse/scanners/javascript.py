"""JavaScript scanner."""

from __future__ import annotations

from typing import Tuple

from ..models import JSInfo
from .base import Scanner, add_issue

_MAX_FUNCTIONS = 200
_MAX_EVENT_LISTENERS = 50
_MAX_CLOSURES = 100

# Checked in order at every position; the first match wins.
_MARKERS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("function", "=>"), "function_count"),
    (("var ", "let ", "const "), "variable_count"),
    (("class",), "class_count"),
    (("React.createElement(",), "react_component_count"),
    (("new Vue(",), "vue_instance_count"),
    (("angular.module(",), "angular_module_count"),
    (("addEventListener(",), "event_listener_count"),
    (("async ",), "async_function_count"),
    (("new Promise(",), "promise_count"),
)

# Cheap pre-filter: only positions starting with one of these characters can match.
_FIRST_CHARS = frozenset(prefix[0] for prefixes, _ in _MARKERS for prefix in prefixes)


def _extends_react_component(content: str, index: int) -> bool:
    header_end = content.find("{", index)
    header = content[index : header_end if header_end >= 0 else len(content)]
    return "extends React.Component" in header


def count_closures(content: str) -> int:
    """Estimate closures from nested ``function`` keywords; ``}`` is the only close."""
    depth = 0
    closures = 0
    index = 0
    length = len(content)
    while index < length:
        char = content[index]
        if char == "f" and content.startswith("function", index):
            depth += 1
            if depth > 1:
                closures += 1
        elif char == "}" and depth > 0:
            depth -= 1
        index += 1
    return closures


class JavaScriptScanner(Scanner[JSInfo]):
    """Classifies positions by literal prefixes, then estimates closures."""

    name = "javascript"
    extensions = (".js", ".mjs", ".cjs")

    def scan(self, content: str) -> JSInfo:
        info = JSInfo()
        for index, char in enumerate(content):
            if char not in _FIRST_CHARS:
                continue
            for prefixes, counter in _MARKERS:
                if content.startswith(prefixes, index):
                    if counter == "class_count":
                        self._count_class(info, content, index)
                    else:
                        setattr(info, counter, getattr(info, counter) + 1)
                    break

        info.closure_count = count_closures(content)

        if info.function_count > _MAX_FUNCTIONS:
            add_issue(
                info.potential_issues,
                f"High number of functions ({info.function_count}) may indicate overly complex code",
            )
        if info.event_listener_count > _MAX_EVENT_LISTENERS:
            add_issue(
                info.potential_issues,
                f"High number of event listeners ({info.event_listener_count}) "
                "may cause memory leaks if not properly managed",
            )
        if info.closure_count > _MAX_CLOSURES:
            add_issue(
                info.potential_issues,
                f"High number of potential closures ({info.closure_count}) "
                "may lead to memory leaks if not handled correctly",
            )
        return info

    @staticmethod
    def _count_class(info: JSInfo, content: str, index: int) -> None:
        info.class_count += 1
        if _extends_react_component(content, index):
            info.react_component_count += 1

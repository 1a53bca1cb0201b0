"""JSX scanner: component nesting, hooks and prop spreading."""

from __future__ import annotations

from enum import Enum
from typing import List

from ..frameworks import SOURCE_HOOKS, detect_framework
from ..models import JSXInfo
from .base import Scanner, add_issue, is_ident_char

_MAX_NESTING = 5
_MAX_PROP_SPREADS = 10
_HOOK_CALLS = tuple(f"{hook}(" for hook in SOURCE_HOOKS)


class _State(Enum):
    TEXT = "text"
    TAG_NAME = "tag_name"
    ATTRIBUTES = "attributes"
    CLOSING_NAME = "closing_name"


def _is_name_char(char: str) -> bool:
    return is_ident_char(char) or char == "."


class _ComponentTracker:
    """Component stack driven by tag open, close and self-close transitions."""

    def __init__(self, info: JSXInfo) -> None:
        self.info = info
        self.stack: List[str] = []
        self.state = _State.TEXT
        self.name: List[str] = []
        self.brace_depth = 0
        self.pushed = False
        self.last_significant = ""

    def feed(self, char: str, following: str) -> None:
        if self.state is _State.TEXT:
            if char == "<":
                self._start_tag(following)
        elif self.state is _State.TAG_NAME:
            if _is_name_char(char):
                self.name.append(char)
                return
            self._open_component()
            self.state = _State.ATTRIBUTES
            self._attributes(char, following)
        elif self.state is _State.ATTRIBUTES:
            self._attributes(char, following)
        elif self.state is _State.CLOSING_NAME:
            if char == "/" and not self.name:
                return
            if _is_name_char(char):
                self.name.append(char)
            elif char == ">":
                self._close_component()
                self.state = _State.TEXT
            elif not char.isspace():
                self.state = _State.TEXT

    def _start_tag(self, following: str) -> None:
        self.name = []
        self.brace_depth = 0
        self.pushed = False
        self.last_significant = ""
        if following == "/":
            self.state = _State.CLOSING_NAME
        elif following.isalpha():
            self.state = _State.TAG_NAME

    def _open_component(self) -> None:
        name = "".join(self.name)
        if name and name[0].isupper():
            self.info.custom_component_count += 1
            self.stack.append(name)
            self.pushed = True
            self.info.max_component_nesting = max(self.info.max_component_nesting, len(self.stack))

    def _close_component(self) -> None:
        name = "".join(self.name)
        if name and name[0].isupper() and self.stack:
            self.stack.pop()

    def _attributes(self, char: str, following: str) -> None:
        if char == "{":
            self.brace_depth += 1
        elif char == "}":
            self.brace_depth = max(self.brace_depth - 1, 0)
        elif self.brace_depth == 0 and char == ">":
            if self.last_significant == "/" and self.pushed and self.stack:
                self.stack.pop()
            self.state = _State.TEXT
            return
        elif self.brace_depth == 0 and char == "<":
            self._start_tag(following)
            return
        if not char.isspace():
            self.last_significant = char


class JSXScanner(Scanner[JSXInfo]):
    """Tracks nesting of capitalised components; counts hooks and ``{...`` spreads."""

    name = "jsx"
    extensions = (".jsx",)

    def scan(self, content: str) -> JSXInfo:
        info = JSXInfo()
        tracker = _ComponentTracker(info)
        length = len(content)
        for index, char in enumerate(content):
            following = content[index + 1] if index + 1 < length else ""
            tracker.feed(char, following)

        info.hook_count = sum(content.count(call) for call in _HOOK_CALLS)
        info.prop_spreading_count = content.count("{...")
        info.framework = detect_framework(content)

        if info.max_component_nesting > _MAX_NESTING:
            add_issue(
                info.potential_issues,
                f"Deep component nesting (depth: {info.max_component_nesting}) may impact performance",
            )
        if info.prop_spreading_count > _MAX_PROP_SPREADS:
            add_issue(
                info.potential_issues,
                f"Heavy use of prop spreading ({info.prop_spreading_count} occurrences) "
                "may make props harder to track",
            )
        return info

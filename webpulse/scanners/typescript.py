"""TypeScript scanner."""

from __future__ import annotations

from ..frameworks import detect_framework
from ..models import TSInfo
from .base import Scanner, add_issue

_MAX_INTERFACES = 50
_MAX_GENERIC_SPAN = 50


class TypeScriptScanner(Scanner[TSInfo]):
    """Counts interfaces, type aliases, generics and enums by literal markers.

    Interface members are approximated by the ``:`` count between the
    interface's first ``{`` and the first ``}`` after it; nested object types
    end the count early.
    """

    name = "typescript"
    extensions = (".ts", ".tsx")

    def scan(self, content: str) -> TSInfo:
        info = TSInfo()
        length = len(content)
        for index, char in enumerate(content):
            if char == "i" and content.startswith("interface ", index):
                info.interface_count += 1
                info.type_definition_count += _interface_members(content, index)
            elif char == "t" and content.startswith("type ", index):
                if _is_type_alias(content, index):
                    info.type_alias_count += 1
            elif char == "e" and content.startswith("enum ", index):
                info.enum_count += 1
            elif char == "<" and index + 1 < length and content[index + 1].isalpha():
                close = content.find(">", index)
                if 0 <= close - index < _MAX_GENERIC_SPAN:
                    info.generic_type_count += 1

        info.framework = detect_framework(content)

        if info.interface_count > _MAX_INTERFACES:
            add_issue(
                info.potential_issues,
                f"High number of interfaces ({info.interface_count}) may indicate over-engineering",
            )
        return info


def _interface_members(content: str, index: int) -> int:
    open_brace = content.find("{", index)
    if open_brace < 0:
        return 0
    close_brace = content.find("}", open_brace)
    if close_brace < 0:
        return 0
    return content.count(":", open_brace, close_brace)


def _is_type_alias(content: str, index: int) -> bool:
    # Preceding identifier characters mean this is part of a longer word (``subtype ``).
    if index > 0 and (content[index - 1].isalnum() or content[index - 1] == "_"):
        return False
    line_end = content.find("\n", index)
    statement = content[index : line_end if line_end >= 0 else len(content)]
    return "=" in statement

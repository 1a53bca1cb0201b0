"""XML scanner."""

from __future__ import annotations

from typing import Set

from ..models import XMLInfo
from .base import Scanner, add_issue

_MAX_NESTING = 10
_MAX_NAMESPACES = 5
_NAME_TERMINATORS = " \t\r\n/>"


class XMLScanner(Scanner[XMLInfo]):
    """Count-based nesting: ``<name`` opens, ``</`` and ``/>`` close.

    Closing tags are not matched against their openers.
    """

    name = "xml"
    extensions = (".xml",)

    def scan(self, content: str) -> XMLInfo:
        info = XMLInfo()
        namespaces: Set[str] = set()
        depth = 0
        length = len(content)
        index = 0
        while index < length:
            char = content[index]
            if char == "=" and content.startswith('="', index):
                info.attribute_count += 1
            elif char == "<" and index + 1 < length:
                following = content[index + 1]
                if following == "?":
                    if content.startswith("<?xml", index):
                        info.has_xml_declaration = True
                elif following == "!":
                    pass
                elif following == "/":
                    depth = max(depth - 1, 0)
                elif not following.isspace():
                    info.element_count += 1
                    depth += 1
                    info.max_nesting_level = max(info.max_nesting_level, depth)
                    name = _element_name(content, index + 1)
                    prefix, sep, _ = name.partition(":")
                    if sep and prefix and prefix not in namespaces:
                        namespaces.add(prefix)
                    if _is_self_closing(content, index):
                        depth -= 1
            index += 1

        info.namespace_count = len(namespaces)

        if info.max_nesting_level > _MAX_NESTING:
            add_issue(
                info.potential_issues,
                f"Deep XML nesting (depth: {info.max_nesting_level}) may impact readability and processing",
            )
        if info.namespace_count > _MAX_NAMESPACES:
            add_issue(
                info.potential_issues,
                f"High number of namespaces ({info.namespace_count}) may complicate maintenance",
            )
        return info


def _element_name(content: str, start: int) -> str:
    end = start
    while end < len(content) and content[end] not in _NAME_TERMINATORS:
        end += 1
    return content[start:end]


def _is_self_closing(content: str, start: int) -> bool:
    end = content.find(">", start)
    return end > 0 and content[end - 1] == "/"

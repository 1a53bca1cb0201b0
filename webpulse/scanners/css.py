"""Stylesheet scanner."""

from __future__ import annotations

from ..models import CSSInfo
from .base import Scanner, add_issue

_MAX_SELECTORS = 4000
_MAX_MEDIA_QUERIES = 50


class CSSScanner(Scanner[CSSInfo]):
    """Counts rules, selectors, properties and at-rules by literal markers.

    A ``{`` opens a rule and also closes a selector list, so it increments both
    ``rule_count`` and ``selector_count``; every ``,`` adds another selector.
    """

    name = "css"
    extensions = (".css",)

    def scan(self, content: str) -> CSSInfo:
        info = CSSInfo()
        for index, char in enumerate(content):
            if char == "{":
                info.rule_count += 1
                info.selector_count += 1
            elif char == ",":
                info.selector_count += 1
            elif char == ":":
                info.property_count += 1
            elif char == "@":
                if content.startswith("@media", index):
                    info.media_query_count += 1
                elif content.startswith("@keyframes", index):
                    info.keyframe_count += 1

        if info.selector_count > _MAX_SELECTORS:
            add_issue(
                info.potential_issues,
                f"High number of selectors ({info.selector_count}) may cause performance issues",
            )
        if info.media_query_count > _MAX_MEDIA_QUERIES:
            add_issue(
                info.potential_issues,
                f"High number of media queries ({info.media_query_count}) "
                "may complicate responsive design",
            )
        return info

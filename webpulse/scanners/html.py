"""HTML scanner: tags, scripts, stylesheets, custom elements and external resources."""

from __future__ import annotations

from typing import Optional

from ..models import CustomElement, ExternalResource, HTMLInfo
from .base import Scanner, add_issue

_MAX_SCRIPT_TAGS = 15
_MAX_EXTERNAL_RESOURCES = 20
_SRC_WINDOW = 50
_FRAMEWORK_PREFIXES = {
    "zephyr-": "is_zephyr",
    "app-": "is_angular",
    "ng-": "is_angular",
}
_NAME_TERMINATORS = " \t\r\n/>"


def is_external_url(url: str) -> bool:
    return url.startswith(("http://", "https://"))


def _attribute_value(tag: str, attribute: str, limit: Optional[int] = None) -> Optional[str]:
    """Return the value of ``attribute=`` inside ``tag`` (quoted or bare)."""
    index = tag.find(f"{attribute}=")
    if index < 0 or (limit is not None and index >= limit):
        return None
    start = index + len(attribute) + 1
    if start < len(tag) and tag[start] in "\"'":
        quote = tag[start]
        end = tag.find(quote, start + 1)
        return tag[start + 1 : end if end >= 0 else len(tag)]
    end = start
    while end < len(tag) and not tag[end].isspace():
        end += 1
    return tag[start:end]


def _tag_name(tag: str) -> str:
    end = 0
    while end < len(tag) and tag[end] not in _NAME_TERMINATORS:
        end += 1
    if end == 0 and tag.startswith("/"):
        # Closing tags keep their slash so they never match an opening branch.
        end = 1
        while end < len(tag) and tag[end] not in _NAME_TERMINATORS:
            end += 1
    return tag[:end]


class HTMLScanner(Scanner[HTMLInfo]):
    """Counts tags and extracts scripts, stylesheets and custom elements."""

    name = "html"
    extensions = (".html", ".htm")

    def scan(self, content: str) -> HTMLInfo:
        info = HTMLInfo()
        position = 0
        while True:
            start = content.find("<", position)
            if start < 0:
                break
            info.tag_count += 1
            end = content.find(">", start + 1)
            tag_end = end if end >= 0 else len(content)
            tag = content[start + 1 : tag_end]
            self._visit_tag(info, tag)
            position = start + 1

        if info.script_count > _MAX_SCRIPT_TAGS:
            add_issue(
                info.potential_issues,
                f"High number of script tags ({info.script_count}) may impact performance",
            )
        resource_count = len(info.external_resources)
        if resource_count > _MAX_EXTERNAL_RESOURCES:
            add_issue(
                info.potential_issues,
                f"High number of external resources ({resource_count}) may slow down page load",
            )
        return info

    def _visit_tag(self, info: HTMLInfo, tag: str) -> None:
        name = _tag_name(tag)
        lowered = name.lower()
        attributes = tag[len(name) :]

        if lowered == "script":
            info.script_count += 1
            src = _attribute_value(tag, "src", limit=_SRC_WINDOW)
            if src and is_external_url(src):
                info.external_resources.append(ExternalResource(url=src, type="JS"))
            region = attributes.lower()
            if "react" in region:
                info.is_react = True
            if "vue" in region:
                info.is_vue = True
            if "angular" in region:
                info.is_angular = True
            if "svelte" in region:
                info.is_svelte = True
        elif lowered == "link":
            info.link_count += 1
            if "stylesheet" in attributes:
                href = _attribute_value(tag, "href")
                if href and is_external_url(href):
                    info.external_resources.append(ExternalResource(url=href, type="CSS"))
        elif lowered == "style":
            info.style_count += 1
        elif "-" in name and not name.startswith(("/", "!")):
            self._record_custom_element(info, name)

    @staticmethod
    def _record_custom_element(info: HTMLInfo, name: str) -> None:
        for element in info.custom_elements:
            if element.name == name:
                element.count += 1
                break
        else:
            info.custom_elements.append(CustomElement(name=name))

        for prefix, flag in _FRAMEWORK_PREFIXES.items():
            if name.startswith(prefix):
                setattr(info, flag, True)
                if name not in info.framework_components:
                    info.framework_components.append(name)
                break

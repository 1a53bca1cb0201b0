"""Vue single-file component scanner."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple

from ..frameworks import detect_framework
from ..models import VueInfo
from .base import Scanner, add_issue

_MAX_DIRECTIVES = 50
_MAX_WATCHERS = 20


class Section(Enum):
    NONE = "none"
    TEMPLATE = "template"
    SCRIPT = "script"
    STYLE = "style"


# Opening literals move from NONE into a section; closing literals move back.
_OPENERS: Tuple[Tuple[str, Section], ...] = (
    ("<template", Section.TEMPLATE),
    ("<script", Section.SCRIPT),
    ("<style", Section.STYLE),
)
_CLOSERS: Dict[Section, str] = {
    Section.TEMPLATE: "</template>",
    Section.SCRIPT: "</script>",
    Section.STYLE: "</style>",
}

_TEMPLATE_DIRECTIVES = ("v-if", "v-for", "v-model")
_SCRIPT_MARKERS: Tuple[Tuple[str, str], ...] = (
    ("computed:", "computed_property_count"),
    ("computed(", "computed_property_count"),
    ("watch:", "watcher_count"),
    ("watch(", "watcher_count"),
    ("emit(", "emit_count"),
    ("provide(", "provide_inject_count"),
    ("inject(", "provide_inject_count"),
)


def _tag_text(content: str, index: int) -> str:
    end = content.find(">", index)
    return content[index : end if end >= 0 else len(content)]


class VueScanner(Scanner[VueInfo]):
    """Walks a ``.vue`` file with an explicit section state machine.

    An unterminated section stays active until the end of the file. Nested
    ``<template>`` tags inside the template section are tracked by depth so a
    slot template does not end the section early.
    """

    name = "vue"
    extensions = (".vue",)

    def scan(self, content: str) -> VueInfo:
        info = VueInfo()
        section = Section.NONE
        template_depth = 0
        for index, char in enumerate(content):
            if char == "<":
                section, template_depth = self._transition(
                    info, content, index, section, template_depth
                )
            if section is Section.TEMPLATE:
                self._template_markers(info, content, index, char)
            elif section is Section.SCRIPT:
                for literal, counter in _SCRIPT_MARKERS:
                    if content.startswith(literal, index):
                        setattr(info, counter, getattr(info, counter) + 1)

        info.framework = detect_framework(content)

        if info.directive_count > _MAX_DIRECTIVES:
            add_issue(
                info.potential_issues,
                f"High number of directives ({info.directive_count}) may indicate complex template logic",
            )
        if info.watcher_count > _MAX_WATCHERS:
            add_issue(
                info.potential_issues,
                f"High number of watchers ({info.watcher_count}) may impact performance",
            )
        return info

    @staticmethod
    def _transition(
        info: VueInfo, content: str, index: int, section: Section, template_depth: int
    ) -> Tuple[Section, int]:
        if section is Section.NONE:
            for literal, target in _OPENERS:
                if not content.startswith(literal, index):
                    continue
                after = content[index + len(literal) : index + len(literal) + 1]
                if after and not (after == ">" or after.isspace()):
                    continue
                tag = _tag_text(content, index)
                if target is Section.TEMPLATE:
                    info.has_template = True
                    return target, 1
                if target is Section.SCRIPT:
                    info.has_script = True
                    if "setup" in tag:
                        info.uses_script_setup = True
                else:
                    info.has_style = True
                    if "scoped" in tag:
                        info.uses_scoped_styles = True
                return target, template_depth
            return section, template_depth

        if section is Section.TEMPLATE:
            if content.startswith("<template", index):
                return section, template_depth + 1
            if content.startswith("</template>", index):
                template_depth -= 1
                return (Section.NONE, 0) if template_depth <= 0 else (section, template_depth)
            return section, template_depth

        if content.startswith(_CLOSERS[section], index):
            return Section.NONE, template_depth
        return section, template_depth

    @staticmethod
    def _template_markers(info: VueInfo, content: str, index: int, char: str) -> None:
        previous = content[index - 1] if index > 0 else ""
        if char == "v":
            if content.startswith(_TEMPLATE_DIRECTIVES, index):
                info.directive_count += 1
            elif content.startswith("v-on:", index):
                info.event_binding_count += 1
            elif content.startswith("v-bind:", index):
                info.prop_binding_count += 1
        elif char == "@" and previous.isspace():
            info.event_binding_count += 1
        elif char == ":" and previous.isspace():
            info.prop_binding_count += 1

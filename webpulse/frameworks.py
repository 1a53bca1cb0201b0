"""Framework and tooling detection from source text and manifests."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Tuple

from .models import FrameworkInfo

SOURCE_HOOKS = (
    "useState",
    "useEffect",
    "useContext",
    "useReducer",
    "useCallback",
    "useMemo",
)
MANIFEST_HOOKS = SOURCE_HOOKS + ("useRef", "useLayoutEffect")

# flag -> literals; any literal present sets the flag.
_MANIFEST_FLAGS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("has_angular", ('"@angular/core"', "@Component", "@Injectable")),
    ("has_svelte", ('"svelte"', '<script context="module">', "export let")),
    (
        "has_nodejs",
        (
            "require(",
            "module.exports",
            "process.env",
            '"express"',
            '"koa"',
            '"fastify"',
            '"nest"',
        ),
    ),
    ("uses_typescript", ('"typescript"', "tsconfig.json", '.ts"', '.tsx"')),
    (
        "has_testing",
        (
            '"jest"',
            '"@testing-library/react"',
            '"@vue/test-utils"',
            '"@angular/testing"',
            '"cypress"',
            '"playwright"',
            '"@testing-library/',
        ),
    ),
    ("has_bundler", ('"webpack"', '"vite"', '"rollup"', '"parcel"')),
    (
        "has_state_management",
        ('"redux"', '"@reduxjs/toolkit"', '"vuex"', '"pinia"', '"mobx"', '"recoil"'),
    ),
    (
        "has_css_framework",
        ('"styled-components"', '"@emotion/', '"tailwindcss"', '"sass"', '"less"'),
    ),
    ("has_routing", ('"react-router"', '"vue-router"', '"@angular/router"')),
    (
        "has_form_library",
        ('"formik"', '"react-hook-form"', '"@angular/forms"', '"vee-validate"'),
    ),
    ("has_unit_testing", ('"jest"',)),
    ("has_e2e_testing", ('"cypress"', '"playwright"')),
    ("has_component_testing", ('"@testing-library/',)),
    ("has_dev_server", ('"webpack-dev-server"', '"vite"')),
    ("has_hot_reload", ('"webpack-dev-server"', '"vite"')),
    ("has_ci_cd", (".github/workflows", ".travis.yml")),
    ("has_docker", ("Dockerfile", "docker-compose")),
    ("has_deployment_config", ("vercel.json", "netlify.toml")),
    ("has_debug_config", (".vscode/launch.json",)),
    ("has_linting", ('"eslint"',)),
    ("has_formatting", ('"prettier"',)),
    ("uses_css_modules", (".module.css", ".module.scss")),
)

_UI_LIBRARIES: Tuple[Tuple[str, str], ...] = (
    ('"@mui/', "mui"),
    ('"antd"', "antd"),
    ('"@chakra-ui/', "chakra-ui"),
    ('"vuetify"', "vuetify"),
    ('"@angular/material"', "angular-material"),
)

_PACKAGE_MANAGERS: Tuple[Tuple[str, str], ...] = (
    ("package-lock.json", "uses_npm"),
    ("yarn.lock", "uses_yarn"),
    ("pnpm-lock.yaml", "uses_pnpm"),
)

_BUNDLERS = ("webpack", "vite")

_WILDCARDS = re.compile(r"[x*]")
_VALID_VERSION = re.compile(r"v?\d[\dv]*(\.[\dv]*){0,2}")


def _contains_any(content: str, literals: Iterable[str]) -> bool:
    return any(literal in content for literal in literals)


def count_hook_calls(content: str, hooks: Iterable[str] = MANIFEST_HOOKS) -> int:
    """Count hook names whose neighbouring characters are not identifier characters."""
    total = 0
    for hook in hooks:
        start = content.find(hook)
        while start >= 0:
            before = content[start - 1] if start > 0 else ""
            end = start + len(hook)
            after = content[end] if end < len(content) else ""
            if not _is_ident(before) and not _is_ident(after):
                total += 1
            start = content.find(hook, start + 1)
    return total


def _is_ident(char: str) -> bool:
    return bool(char) and (char.isalnum() or char == "_")


def detect_framework(content: str) -> FrameworkInfo:
    """Fingerprint one source file (TS, JSX or Vue) by API usage literals."""
    info = FrameworkInfo()
    if _contains_any(content, ("import React", "React.Component", "useState", "useEffect")):
        info.has_react = True
        info.react_hooks_count = sum(content.count(hook) for hook in SOURCE_HOOKS)
    if _contains_any(content, ("createApp", "defineComponent", "setup()", "<template>")):
        info.has_vue = True
        info.vue_composition_api = "setup()" in content
    if _contains_any(content, ("@Component", "@Injectable", "ngOnInit")):
        info.has_angular = True
    if _contains_any(content, ('<script context="module">', "$:", "export let")):
        info.has_svelte = True
    if _contains_any(content, ("require(", "module.exports", "process.env")):
        info.has_nodejs = True
    return info


def detect_framework_usage(content: str) -> FrameworkInfo:
    """Fingerprint a manifest (usually package.json) by dependency literals."""
    info = FrameworkInfo()
    if _contains_any(content, ('"react"', '"react-dom"')):
        info.has_react = True
        info.react_hooks_count = count_hook_calls(content)
        if _contains_any(content, ('"next"', '"next.config.js"', "pages/_app", "pages/api/")):
            info.has_nextjs = True

    if '"vue"' in content:
        info.has_vue = True
        if _contains_any(
            content, ("setup()", "<script setup>", "@vue/composition-api", "vue@3")
        ):
            info.vue_composition_api = True
        if _contains_any(content, ('"nuxt"', '"@nuxt/', "nuxt.config.js")):
            info.has_nuxtjs = True

    for flag, literals in _MANIFEST_FLAGS:
        if _contains_any(content, literals):
            setattr(info, flag, True)

    for literal, label in _UI_LIBRARIES:
        if literal in content:
            info.has_ui_library = True
            info.primary_ui_library = label
            break

    if '"styled-components"' in content:
        info.uses_css_in_js = True
        info.css_solution = "styled-components"
    elif '"tailwindcss"' in content:
        info.uses_tailwind = True
        info.css_solution = "tailwind"
    elif '"sass"' in content:
        info.uses_sass = True
        info.css_solution = "sass"
    elif '"less"' in content:
        info.uses_less = True
        info.css_solution = "less"
    if '"@emotion/' in content:
        info.uses_css_in_js = True

    for literal, flag in _PACKAGE_MANAGERS:
        if literal in content:
            setattr(info, flag, True)
            break

    if info.uses_typescript:
        info.typescript_version = _valid_or_empty(extract_dependency_version(content, "typescript"))
    info.node_version = _valid_or_empty(extract_dependency_version(content, "node"))

    for bundler in _BUNDLERS:
        if f'"{bundler}"' in content:
            version = extract_dependency_version(content, bundler)
            info.primary_bundler = f"{bundler}@{version}" if version else bundler
            break
    return info


def clean_version_string(raw: str) -> str:
    """Reduce a semver range to its first concrete version.

    >>> clean_version_string(">=2.0.0 <3.0.0")
    '2.0.0'
    """
    version = raw.strip()
    if version[:1] in ("^", "~"):
        version = version[1:]

    version = version.split(" - ", 1)[0]

    if version[:1] in (">", "<"):
        version = version.lstrip("<>=").strip()
        version = version.split(None, 1)[0] if version else version

    wildcard = _WILDCARDS.search(version)
    if wildcard:
        version = version[: wildcard.start()]
        if version.endswith("."):
            version = version[:-1]

    version = version.split("||", 1)[0]
    return version.strip()


def is_valid_version(version: Optional[str]) -> bool:
    """Return True for ``1``, ``1.2`` and ``1.2.3`` style versions (optionally ``v``-prefixed)."""
    if not version:
        return False
    return _VALID_VERSION.fullmatch(version) is not None


def extract_dependency_version(content: str, name: str) -> Optional[str]:
    """Find ``"name": "<range>"`` in ``content`` and return the cleaned version."""
    pattern = re.compile(rf'"{re.escape(name)}"\s*:\s*"([^"]*)"')
    search_from = 0
    if name in ("node", "npm"):
        engines = content.find('"engines"')
        if engines >= 0:
            search_from = engines
    match = pattern.search(content, search_from) or pattern.search(content)
    if match is None:
        return None
    return clean_version_string(match.group(1))


def _valid_or_empty(version: Optional[str]) -> str:
    return version if version and is_valid_version(version) else ""


def merge_framework_info(target: FrameworkInfo, *others: FrameworkInfo) -> FrameworkInfo:
    for other in others:
        target.merge(other)
    return target


__all__ = [
    "clean_version_string",
    "count_hook_calls",
    "detect_framework",
    "detect_framework_usage",
    "extract_dependency_version",
    "is_valid_version",
    "merge_framework_info",
]

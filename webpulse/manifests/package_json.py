"""package.json extraction for projects and workspace packages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..frameworks import extract_dependency_version
from ..models import DependencyCache, PackageRecord, PackageScript
from .dependencies import collect_dependencies
from .jsontext import (
    container_span,
    get_json_string_value,
    iter_array_strings,
    iter_entries,
    string_at,
    top_level_string,
    top_level_value,
)

_TEST_FRAMEWORKS = ("jest", "mocha", "jasmine", "karma", "vitest")


@dataclass
class ManifestSignals:
    """Project-level facts read from one package.json."""

    uses_esmodules: bool = False
    has_webpack: bool = False
    has_vite: bool = False
    has_babel: bool = False
    has_typescript: bool = False
    has_workspaces: bool = False


def read_manifest_signals(content: str) -> ManifestSignals:
    module_type = top_level_string(content, "type")
    return ManifestSignals(
        uses_esmodules=module_type == "module",
        has_webpack='"webpack"' in content,
        has_vite='"vite"' in content,
        has_babel='"babel"' in content or '"@babel/core"' in content,
        has_typescript='"typescript"' in content,
        has_workspaces=top_level_value(content, "workspaces") is not None,
    )


def parse_package_info(content: str, path: str = "") -> PackageRecord:
    """Read identity, build settings, scripts and tool flags of one package."""
    package = PackageRecord(path=path)
    package.name = top_level_string(content, "name") or ""
    package.version = top_level_string(content, "version") or ""

    config = package.config
    if '"build"' in content:
        config.build_output_path = get_json_string_value(content, "outDir") or ""
    config.test_output_path = get_json_string_value(content, "coverageDirectory") or ""
    config.uses_typescript = '"typescript"' in content or '"@types/' in content
    config.uses_jest = '"jest"' in content
    config.uses_eslint = '"eslint"' in content
    config.uses_prettier = '"prettier"' in content
    if '"engines"' in content:
        config.node_version = extract_dependency_version(content, "node") or ""

    scripts = container_span(content, "scripts")
    if scripts is not None:
        for name, value_span in iter_entries(content, scripts):
            command = string_at(content, value_span)
            if command is not None:
                config.scripts.append(PackageScript(name=name, command=command))
    return package


def analyze_package_dependencies(
    content: str, package: PackageRecord, cache: Optional[DependencyCache] = None
) -> PackageRecord:
    """Fill the package's dependency list and derive framework flags from names."""
    collect_dependencies(content, package.dependencies, cache)

    info = package.framework_info
    for dependency in package.dependencies:
        name = dependency.name
        if name in ("react", "react-dom"):
            info.has_react = True
        elif name == "vue":
            info.has_vue = True
            if "@vue/composition-api" in content or "vue@3" in content:
                info.vue_composition_api = True
        elif name.startswith("@angular/"):
            info.has_angular = True
        elif name == "svelte":
            info.has_svelte = True
        elif name in ("express", "koa", "fastify"):
            info.has_nodejs = True
        elif name == "typescript":
            package.config.uses_typescript = True

        if any(framework in name for framework in _TEST_FRAMEWORKS):
            package.config.uses_jest = True
            info.has_testing = True
    return package


def parse_workspace_globs(content: str) -> List[str]:
    """Return package globs from ``workspaces`` (array or ``{"packages": [...]}`` form)."""
    value = top_level_value(content, "workspaces")
    if value is None:
        return []
    start, end = value
    opener = content[start] if start < len(content) else ""
    if opener == "[":
        return list(iter_array_strings(content, (start, end - 1)))
    if opener == "{":
        for name, inner in iter_entries(content, (start, end - 1)):
            if name == "packages" and content[inner[0] : inner[0] + 1] == "[":
                return list(iter_array_strings(content, (inner[0], inner[1] - 1)))
    return []


__all__ = [
    "ManifestSignals",
    "analyze_package_dependencies",
    "parse_package_info",
    "parse_workspace_globs",
    "read_manifest_signals",
]

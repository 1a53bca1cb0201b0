"""Plain-text rendering of analysis results with Jinja templates."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional, TextIO

from jinja2 import Environment, FileSystemLoader

from .estimation import calculate_performance_impact, estimate_resources
from .models import Dependency, ProjectRecord, ResourceEstimation

_NOTABLE_PREFIXES = ("react", "vue", "@angular", "express", "next", "nuxt")

_env: Optional[Environment] = None


def _environment() -> Environment:
    global _env
    if _env is None:
        loader = FileSystemLoader(str(Path(__file__).with_name("templates")))
        _env = Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)
    return _env


def render_resource_usage(estimation: ResourceEstimation) -> str:
    template = _environment().get_template("resource_usage.j2")
    return template.render(estimation=estimation).strip() + "\n"


def render_potential_issues(project: ProjectRecord) -> str:
    """Render the numbered issue list, locations indented under each entry."""
    template = _environment().get_template("potential_issues.j2")
    return template.render(issues=list(project.potential_issues)).strip() + "\n"


def render_specific_value(value_name: str, value: float, fmt: str = "") -> str:
    """Render one value as ``MB``/``KB`` (with raw bytes), ``ms`` or a plain number."""
    if fmt == "MB":
        return f"{value_name}: {value / 1_000_000:.2f} MB ({value:.0f} bytes)\n"
    if fmt == "KB":
        return f"{value_name}: {value / 1_000:.2f} KB ({value:.0f} bytes)\n"
    if fmt == "ms":
        return f"{value_name}: {int(value)} ms\n"
    return f"{value_name}: {value:.2f}\n"


def render_report(project: ProjectRecord) -> str:
    """Render the full human-readable report for one analysed project."""
    info = project.framework_info
    workspace = project.workspace
    template = _environment().get_template("report.j2")
    return (
        template.render(
            project=project,
            info=info,
            workspace=workspace,
            frameworks=_framework_labels(project),
            workspace_types=_workspace_types(project),
            module_system=_module_system(project),
            build_tools=_build_tools(project),
            notable=_notable_dependencies(project),
            resource_usage=render_resource_usage(estimate_resources(project)),
            impact=calculate_performance_impact(project),
            issues=render_potential_issues(project),
        ).strip()
        + "\n"
    )


def display_resource_usage(estimation: ResourceEstimation, stream: TextIO | None = None) -> None:
    (stream or sys.stdout).write(render_resource_usage(estimation))


def display_potential_issues(project: ProjectRecord, stream: TextIO | None = None) -> None:
    (stream or sys.stdout).write("\n" + render_potential_issues(project))


def display_specific_value(
    value_name: str, value: float, fmt: str = "", stream: TextIO | None = None
) -> None:
    (stream or sys.stdout).write(render_specific_value(value_name, value, fmt))


def display_report(project: ProjectRecord, stream: TextIO | None = None) -> None:
    (stream or sys.stdout).write(render_report(project))


def _framework_labels(project: ProjectRecord) -> List[str]:
    info = project.framework_info
    labels = [
        ("React", info.has_react),
        ("Vue.js", info.has_vue),
        ("Angular", info.has_angular),
        ("Svelte", info.has_svelte),
        ("Node.js", info.has_nodejs),
        ("Next.js", info.has_nextjs),
        ("Nuxt.js", info.has_nuxtjs),
    ]
    return [label for label, present in labels if present]


def _workspace_types(project: ProjectRecord) -> List[str]:
    workspace = project.workspace
    types = [
        ("Lerna", workspace.is_lerna),
        ("Yarn Workspaces", workspace.is_yarn_workspace),
        ("pnpm Workspaces", workspace.is_pnpm_workspace),
        ("Nx", workspace.is_nx_workspace),
        ("Rush", workspace.is_rush),
    ]
    return [label for label, present in types if present]


def _module_system(project: ProjectRecord) -> str:
    if project.uses_commonjs and project.uses_esmodules:
        return "Mixed (CommonJS and ES Modules)"
    if project.uses_commonjs:
        return "CommonJS"
    if project.uses_esmodules:
        return "ES Modules"
    return "Not detected"


def _build_tools(project: ProjectRecord) -> List[str]:
    tools = [
        ("Webpack", project.has_webpack),
        ("Vite", project.has_vite),
        ("Babel", project.has_babel),
        ("TypeScript", project.has_typescript),
    ]
    return [label for label, present in tools if present]


def _notable_dependencies(project: ProjectRecord) -> List[Dependency]:
    return [
        dependency
        for dependency in project.dependencies
        if not dependency.is_dev_dependency and dependency.name.startswith(_NOTABLE_PREFIXES)
    ]


__all__ = [
    "display_potential_issues",
    "display_report",
    "display_resource_usage",
    "display_specific_value",
    "render_potential_issues",
    "render_report",
    "render_resource_usage",
    "render_specific_value",
]

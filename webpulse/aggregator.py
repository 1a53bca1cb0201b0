"""Project-wide aggregation: walk a tree, dispatch files, derive statistics."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Optional

from .config import AnalysisConfig, ConfigError, load_config
from .context import AnalysisContext
from .frameworks import detect_framework_usage
from .logging import get_logger
from .manifests import collect_dependencies, read_manifest_signals
from .models import (
    CSSInfo,
    CustomElement,
    HTMLInfo,
    JSInfo,
    JSONInfo,
    JSXInfo,
    PotentialIssue,
    ProjectRecord,
    TSInfo,
    VueInfo,
    XMLInfo,
)
from .scanners import scanner_for
from .walker import DirectoryWalker, WalkEntry, has_workspace_marker, read_file_content
from .workspace import WorkspaceResolver

logger = get_logger("aggregator")

MAX_TOTAL_DEPENDENCIES = 100
MAX_EXTERNAL_JS = 10
MAX_EXTERNAL_CSS = 5
MAX_EXTERNAL_BYTES = 5_000_000

_FRAMEWORK_NAMES = ("react", "vue", "angular", "svelte")

_REQUIRE = re.compile(r"""\brequire\(\s*['"]([^'"]+)['"]""")
_STATIC_IMPORT = re.compile(r"""\bimport\s+(?:[^'";()]*?\s*\bfrom\s*)?['"]([^'"]+)['"]""")
_DYNAMIC_IMPORT = re.compile(r"""\bimport\(\s*['"]([^'"]+)['"]""")


class ProjectAggregator:
    """Builds one ProjectRecord per ``analyze`` call.

    Every call gets a fresh AnalysisContext, so dependency statistics never
    leak from one run into the next.
    """

    def __init__(self, config: AnalysisConfig | None = None) -> None:
        self._config_override = config

    def analyze(self, path: str | Path) -> Optional[ProjectRecord]:
        """Analyse the tree at ``path``; return None when the root cannot be opened."""
        root = Path(path).expanduser().resolve()
        logger.debug("Analysing %s", root)
        project = ProjectRecord(root_path=str(root))
        context = AnalysisContext(config=self._config_override or _load_config(root))
        try:
            self.traverse(root, project, context)
        except (FileNotFoundError, NotADirectoryError) as exc:
            logger.error("%s", exc)
            return None
        except OSError as exc:
            logger.error("Cannot open project directory %s: %s", root, exc)
            return None

        generate_dependency_statistics(project, context)
        project.framework = primary_framework(project)
        analyze_external_resources(project)
        logger.debug(
            "Analysis of %s finished: framework=%s, issues=%d",
            root,
            project.framework or "none",
            project.potential_issue_count,
        )
        return project

    def traverse(self, root: Path, project: ProjectRecord, context: AnalysisContext) -> None:
        """Walk ``root`` into ``project``; raises OSError when the root cannot be opened."""
        config = context.config
        walker = DirectoryWalker(config.exclude_dirs, max_depth=config.max_depth)
        resolver = WorkspaceResolver(context)
        for entry in walker.walk(root):
            if entry.kind == "directory":
                if has_workspace_marker(entry.path):
                    resolver.resolve(entry.path, project)
                continue
            if entry.kind == "image":
                project.image_file_count += 1
                continue
            if entry.kind == "source":
                self._process_file(entry, project, context)
        resolver.finalize(project)

    def _process_file(self, entry: WalkEntry, project: ProjectRecord, context: AnalysisContext) -> None:
        content = read_file_content(entry.path, context.config.max_file_size)
        if content is None:
            return
        if entry.name == "package.json":
            analyze_package_json(content, project, context, entry.path)
            return

        scanner = scanner_for(entry.name)
        if scanner is None:
            return
        info = scanner.scan(content)
        merge_file_info(project, info)
        _copy_issues(project, info.potential_issues, entry.relative_path)

        if isinstance(info, (JSInfo, TSInfo)):
            analyze_js_imports(content, project)
        if isinstance(info, XMLInfo) and context.config.salesforce:
            analyze_salesforce_metadata(entry.path, project)


def _load_config(root: Path) -> AnalysisConfig:
    try:
        return load_config(root)
    except ConfigError as exc:
        logger.warning("Ignoring configuration: %s", exc)
        return AnalysisConfig(root=root)


def _copy_issues(project: ProjectRecord, issues: Iterable[PotentialIssue], location: str) -> None:
    for issue in issues:
        if not project.add_issue(issue.description, issue.location or location):
            break


def analyze_package_json(
    content: str, project: ProjectRecord, context: AnalysisContext, path: Path
) -> None:
    """Fold one package.json into the project-level record."""
    signals = read_manifest_signals(content)
    project.uses_esmodules = project.uses_esmodules or signals.uses_esmodules
    project.has_webpack = project.has_webpack or signals.has_webpack
    project.has_vite = project.has_vite or signals.has_vite
    project.has_babel = project.has_babel or signals.has_babel
    project.has_typescript = project.has_typescript or signals.has_typescript
    collect_dependencies(content, project.dependencies, context.cache_for(path))
    project.framework_info.merge(detect_framework_usage(content))


def merge_file_info(project: ProjectRecord, info: object) -> None:
    """Accumulate one scanner record into the project totals."""
    framework = project.framework_info
    if isinstance(info, HTMLInfo):
        project.html_file_count += 1
        _merge_html(project, info)
    elif isinstance(info, CSSInfo):
        project.css_file_count += 1
        totals = project.total_css_info
        totals.rule_count += info.rule_count
        totals.selector_count += info.selector_count
        totals.property_count += info.property_count
        totals.media_query_count += info.media_query_count
        totals.keyframe_count += info.keyframe_count
    elif isinstance(info, JSInfo):
        project.js_file_count += 1
        totals = project.total_js_info
        for name in (
            "function_count",
            "variable_count",
            "class_count",
            "react_component_count",
            "vue_instance_count",
            "angular_module_count",
            "event_listener_count",
            "async_function_count",
            "promise_count",
            "closure_count",
        ):
            setattr(totals, name, getattr(totals, name) + getattr(info, name))
        project.react_component_count += info.react_component_count
        framework.merge(info.framework)
    elif isinstance(info, TSInfo):
        project.ts_file_count += 1
        project.total_ts_info = info
        project.has_typescript = True
        framework.merge(info.framework)
    elif isinstance(info, JSXInfo):
        project.jsx_file_count += 1
        project.total_jsx_info = info
        framework.merge(info.framework)
        framework.has_react = True
        project.react_component_count += info.custom_component_count
    elif isinstance(info, VueInfo):
        project.vue_file_count += 1
        project.total_vue_info = info
        framework.merge(info.framework)
        framework.has_vue = True
        framework.vue_composition_api = framework.vue_composition_api or info.uses_script_setup
    elif isinstance(info, XMLInfo):
        project.xml_file_count += 1
        project.total_xml_info = info
    elif isinstance(info, JSONInfo):
        project.json_file_count += 1
        totals = project.total_json_info
        totals.object_count += info.object_count
        totals.array_count += info.array_count
        totals.key_count += info.key_count
        totals.max_nesting_level = max(totals.max_nesting_level, info.max_nesting_level)


def _merge_html(project: ProjectRecord, info: HTMLInfo) -> None:
    totals = project.total_html_info
    totals.tag_count += info.tag_count
    totals.script_count += info.script_count
    totals.style_count += info.style_count
    totals.link_count += info.link_count
    for flag in ("is_zephyr", "is_react", "is_vue", "is_angular", "is_svelte"):
        setattr(totals, flag, getattr(totals, flag) or getattr(info, flag))

    framework = project.framework_info
    framework.has_react = framework.has_react or info.is_react
    framework.has_vue = framework.has_vue or info.is_vue
    framework.has_angular = framework.has_angular or info.is_angular
    framework.has_svelte = framework.has_svelte or info.is_svelte

    for element in info.custom_elements:
        known = next((item for item in project.custom_elements if item.name == element.name), None)
        if known is not None:
            known.count += element.count
        else:
            project.custom_elements.append(CustomElement(element.name, element.count))
    project.external_resources.extend(info.external_resources)
    for component in info.framework_components:
        if component not in project.framework_components:
            project.framework_components.append(component)


def analyze_js_imports(content: str, project: ProjectRecord) -> None:
    """Record module specifiers and the module systems a JS/TS file uses."""
    for match in _REQUIRE.finditer(content):
        project.uses_commonjs = True
        _add_module_path(project, match.group(1))
    for pattern in (_STATIC_IMPORT, _DYNAMIC_IMPORT):
        for match in pattern.finditer(content):
            project.uses_esmodules = True
            _add_module_path(project, match.group(1))


def _add_module_path(project: ProjectRecord, specifier: str) -> None:
    if not specifier or "node_modules" in specifier:
        return
    if specifier not in project.module_paths:
        project.module_paths.append(specifier)


def generate_dependency_statistics(project: ProjectRecord, context: AnalysisContext) -> None:
    """Derive dependency totals from the run's cache and the project dependency list."""
    project.total_dependencies = len(context.cache)
    project.framework_dependencies = sum(
        1
        for cached in context.cache
        if any(name in cached.name for name in _FRAMEWORK_NAMES)
    )
    project.dev_dependencies = sum(1 for dep in project.dependencies if dep.is_dev_dependency)
    project.prod_dependencies = len(project.dependencies) - project.dev_dependencies

    if project.total_dependencies > MAX_TOTAL_DEPENDENCIES:
        project.add_issue(
            f"High number of dependencies ({project.total_dependencies}) "
            "may impact maintenance and security"
        )
    if project.framework_dependencies > 1:
        project.add_issue(
            f"Multiple framework dependencies detected ({project.framework_dependencies}) "
            "- consider consolidating"
        )


def primary_framework(project: ProjectRecord) -> str:
    info = project.framework_info
    if info.has_react:
        return "React"
    if info.has_vue:
        return "Vue.js"
    if info.has_angular:
        return "Angular"
    if info.has_svelte:
        return "Svelte"
    if info.has_nodejs:
        return "Node.js"
    return ""


def analyze_external_resources(project: ProjectRecord) -> None:
    """Flag heavy external script/style usage collected from HTML files."""
    js_resources = sum(1 for resource in project.external_resources if resource.type == "JS")
    css_resources = sum(1 for resource in project.external_resources if resource.type == "CSS")
    total_size = sum(resource.size for resource in project.external_resources)

    if js_resources > MAX_EXTERNAL_JS:
        project.add_issue(
            f"High number of external JavaScript resources ({js_resources}) may impact load time"
        )
    if css_resources > MAX_EXTERNAL_CSS:
        project.add_issue(
            f"High number of external CSS resources ({css_resources}) may impact load time"
        )
    if total_size > MAX_EXTERNAL_BYTES:
        project.add_issue(
            f"Large total size of external resources ({total_size / 1_000_000:.2f} MB) "
            "may slow down page load"
        )


def analyze_salesforce_metadata(path: str | Path, project: ProjectRecord) -> bool:
    """Return True when ``path`` looks like a Salesforce ``<CustomObject`` file and record it."""
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as handle:
            for line in handle:
                if "<CustomObject" in line:
                    project.salesforce_metadata.append(str(path))
                    return True
    except OSError as exc:
        logger.debug("Cannot read %s for Salesforce metadata: %s", path, exc)
    return False


def analyze_project_type(path: str | Path, config: AnalysisConfig | None = None) -> Optional[ProjectRecord]:
    """Analyse the project rooted at ``path``; None when the root cannot be opened."""
    return ProjectAggregator(config).analyze(path)


def traverse_directory(path: str | Path, project: ProjectRecord) -> int:
    """Walk ``path`` into an existing ``project``; return 0 on success, -1 on a bad root."""
    root = Path(path).expanduser().resolve()
    context = AnalysisContext(config=_load_config(root))
    try:
        ProjectAggregator(context.config).traverse(root, project, context)
    except OSError as exc:
        logger.error("Cannot open project directory %s: %s", root, exc)
        return -1
    return 0


__all__ = [
    "ProjectAggregator",
    "analyze_external_resources",
    "analyze_js_imports",
    "analyze_package_json",
    "analyze_project_type",
    "analyze_salesforce_metadata",
    "generate_dependency_statistics",
    "merge_file_info",
    "primary_framework",
    "traverse_directory",
]

"""Monorepo detection, member package discovery and build ordering."""

from __future__ import annotations

import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Dict, List, Optional, Set

from .context import AnalysisContext
from .frameworks import detect_framework_usage, merge_framework_info
from .logging import get_logger
from .manifests import (
    analyze_package_dependencies,
    parse_lerna_config,
    parse_nx_config,
    parse_package_info,
    parse_pnpm_workspace,
    parse_rush_config,
    parse_turbo_config,
    parse_workspace_globs,
    read_manifest_signals,
)
from .manifests.workspace_configs import TurboConfig
from .models import (
    MAX_PACKAGES,
    Dependency,
    PackageRecord,
    PackageReference,
    ProjectRecord,
    TaskGroup,
    WorkspaceInfo,
)
from .walker import SKIP_DIRS, read_file_content

logger = get_logger("workspace")

_WILDCARD_CHARS = ("*", "?", "[")
_RUSH_SHARED_CONFIGS = (
    "common/config/rush/.pnpmfile.cjs",
    "common/config/rush/command-line.json",
    "common/config/rush/version-policies.json",
)


def _has_wildcard(segment: str) -> bool:
    return any(char in segment for char in _WILDCARD_CHARS)


class WorkspaceResolver:
    """Discovers workspace packages under marker directories.

    ``resolve`` may run once per directory that holds a workspace marker;
    ``finalize`` then derives internal references, build order tiers and
    shared dependencies over every package discovered in the run.
    """

    def __init__(self, context: AnalysisContext) -> None:
        self.context = context
        self._scanned_globs: Set[tuple[Path, str]] = set()
        self._package_paths: Dict[Path, PackageRecord] = {}

    def resolve(self, root: str | Path, project: ProjectRecord) -> bool:
        """Run every matching flavor parser for ``root``; return whether a marker was found."""
        root_path = Path(root).resolve()
        config = self.context.config
        workspace = project.workspace

        lerna = read_file_content(root_path / "lerna.json", config.max_manifest_size)
        pnpm = read_file_content(root_path / "pnpm-workspace.yaml", config.max_manifest_size)
        nx = read_file_content(root_path / "nx.json", config.max_manifest_size)
        rush = read_file_content(root_path / "rush.json", config.max_rush_config_size)
        manifest = read_file_content(root_path / "package.json", config.max_manifest_size)
        has_workspaces_field = manifest is not None and read_manifest_signals(manifest).has_workspaces
        yarn_globs = parse_workspace_globs(manifest) if has_workspaces_field else []

        if not any((lerna, pnpm, nx, rush, has_workspaces_field)):
            return False

        project.is_monorepo = True
        if not workspace.root_path:
            workspace.root_path = str(root_path)
        if manifest:
            self._read_root_manifest(manifest, workspace)
        logger.debug("Resolving workspace at %s", root_path)

        if lerna is not None:
            self._resolve_lerna(root_path, lerna, project)
        if pnpm is not None:
            workspace.is_pnpm_workspace = True
            for pattern in parse_pnpm_workspace(pnpm):
                self._scan_glob(root_path, pattern, project)
        if has_workspaces_field:
            workspace.is_yarn_workspace = True
            if (root_path / "package-lock.json").is_file():
                workspace.uses_npm_workspaces = True
            for pattern in yarn_globs:
                self._scan_glob(root_path, pattern, project)
        if nx is not None:
            self._resolve_nx(root_path, nx, project)
        if rush is not None:
            self._resolve_rush(root_path, rush, project)

        turbo = read_file_content(root_path / "turbo.json", config.max_manifest_size)
        if turbo is not None:
            self._apply_turbo(parse_turbo_config(turbo), project)
        if (root_path / ".changeset").is_dir():
            workspace.uses_changesets = True
        if (root_path / "commitlint.config.js").is_file():
            workspace.uses_conventional_commits = True
        return True

    def finalize(self, project: ProjectRecord) -> None:
        """Derive references, build-order tiers and shared dependencies."""
        workspace = project.workspace
        if not workspace.packages:
            return
        link_internal_references(workspace)
        unplaced = add_build_order(workspace)
        if unplaced:
            names = ", ".join(sorted(unplaced))
            logger.warning("Packages left out of the build order: %s", names)
            project.add_issue(
                f"Circular or unresolved internal dependencies keep {len(unplaced)} "
                f"package(s) out of the build order: {names}",
                workspace.root_path,
            )
        collect_shared_dependencies(workspace)

    # Flavors

    def _read_root_manifest(self, manifest: str, workspace: WorkspaceInfo) -> None:
        if not workspace.name:
            workspace.name = parse_package_info(manifest).name
        if '"semantic-release"' in manifest:
            workspace.uses_semantic_release = True
        if '"@changesets/cli"' in manifest:
            workspace.uses_changesets = True

    def _resolve_lerna(self, root: Path, content: str, project: ProjectRecord) -> None:
        workspace = project.workspace
        config = parse_lerna_config(content)
        workspace.is_lerna = True
        workspace.version_strategy = config.version_strategy
        if config.fixed_version:
            workspace.fixed_version = config.fixed_version
        if config.npm_client == "yarn":
            workspace.is_yarn_workspace = True
        elif config.npm_client == "pnpm":
            workspace.is_pnpm_workspace = True
        workspace.uses_npm_workspaces = workspace.uses_npm_workspaces or config.use_workspaces
        workspace.uses_conventional_commits = (
            workspace.uses_conventional_commits or config.conventional_commits
        )
        workspace.uses_git_tags = workspace.uses_git_tags or config.create_release
        workspace.has_hoisting = workspace.has_hoisting or config.hoist

        packages = config.packages
        if not packages and not config.use_workspaces:
            packages = ["packages/*"]
        for pattern in packages:
            self._scan_glob(root, pattern, project)

    def _resolve_nx(self, root: Path, content: str, project: ProjectRecord) -> None:
        workspace = project.workspace
        workspace.is_nx_workspace = True
        configs = [parse_nx_config(content)]
        extra = read_file_content(root / "workspace.json", self.context.config.max_manifest_size)
        if extra is not None:
            configs.append(parse_nx_config(extra))

        for config in configs:
            for relative in config.project_paths:
                self._add_package(root / relative, project)
            for target in config.targets:
                group = TaskGroup(name=target.name, type="nx-target")
                group.packages.extend(target.depends_on)
                workspace.task_groups.append(group)

    def _resolve_rush(self, root: Path, content: str, project: ProjectRecord) -> None:
        workspace = project.workspace
        config = parse_rush_config(content)
        workspace.is_rush = True
        for entry in config.projects:
            package = self._add_package(root / entry.project_folder, project)
            if package is not None:
                package.name = entry.package_name
        if config.version_strategy:
            workspace.version_strategy = config.version_strategy
        if config.rush_version:
            workspace.tool_version = f"rush@{config.rush_version}"
        if config.build_cache_enabled and config.cache_folder:
            workspace.build_cache_path = config.cache_folder
        if any((root / relative).is_file() for relative in _RUSH_SHARED_CONFIGS):
            workspace.has_shared_configs = True

    def _apply_turbo(self, config: TurboConfig, project: ProjectRecord) -> None:
        workspace = project.workspace
        workspace.uses_turborepo = True
        for task in config.tasks:
            group = TaskGroup(name=task.name, type="turbo-task")
            group.packages.extend(task.depends_on)
            workspace.task_groups.append(group)

        for name, value in config.global_dependencies.items():
            target = value or name
            if name == "tsconfig.json" or name.startswith("tsconfig"):
                workspace.tsconfig_path = target
                workspace.has_shared_configs = True
            elif name.startswith(".eslintrc"):
                workspace.eslint_config_path = target
                workspace.has_shared_configs = True
            elif name.startswith(".prettierrc"):
                workspace.prettier_config_path = target
                workspace.has_shared_configs = True
            elif "jest.config" in name:
                workspace.jest_config_path = target
                workspace.has_shared_configs = True
            elif "babel.config" in name:
                workspace.babel_config_path = target
                workspace.has_shared_configs = True
                project.has_babel = True
            elif "webpack.config" in name:
                project.has_webpack = True
            elif "vite.config" in name:
                project.has_vite = True
            elif ".github/workflows" in name:
                project.has_ci = True
            elif name.startswith(".env"):
                project.has_env_config = True

    # Package discovery

    def _scan_glob(self, root: Path, pattern: str, project: ProjectRecord) -> None:
        pattern = pattern.strip().strip("'\"")
        if not pattern or pattern.startswith("!"):
            return
        key = (root, pattern)
        if key in self._scanned_globs:
            return
        self._scanned_globs.add(key)
        project.workspace.workspace_globs.append(pattern)

        cleaned = pattern[2:] if pattern.startswith("./") else pattern
        segments = [segment for segment in cleaned.rstrip("/").split("/") if segment]
        wildcard_at = next(
            (index for index, segment in enumerate(segments) if _has_wildcard(segment)), None
        )
        if wildcard_at is None:
            self._add_package(root.joinpath(*segments), project)
            return

        base = root.joinpath(*segments[:wildcard_at])
        matcher = segments[wildcard_at].replace("**", "*")
        rest = segments[wildcard_at + 1 :]
        if any(_has_wildcard(segment) for segment in rest):
            rest = []
        try:
            with os.scandir(base) as iterator:
                children = sorted(
                    (entry for entry in iterator if entry.is_dir() and entry.name not in SKIP_DIRS),
                    key=lambda entry: entry.name,
                )
        except OSError as exc:
            logger.debug("Cannot open workspace directory %s: %s", base, exc)
            return
        for child in children:
            if fnmatchcase(child.name, matcher):
                self._add_package(Path(child.path).joinpath(*rest), project)

    def _add_package(self, path: Path, project: ProjectRecord) -> Optional[PackageRecord]:
        resolved = path.resolve()
        if resolved in self._package_paths:
            return self._package_paths[resolved]
        workspace = project.workspace
        for package in workspace.packages:
            if Path(package.path).resolve() == resolved:
                self._package_paths[resolved] = package
                return package
        if workspace.packages.is_full:
            logger.debug("Workspace package cap (%d) reached; skipping %s", MAX_PACKAGES, path)
            return None

        manifest_path = resolved / "package.json"
        content = read_file_content(manifest_path, self.context.config.max_manifest_size)
        if content is None:
            return None

        package = parse_package_info(content, str(resolved))
        analyze_package_dependencies(content, package, self.context.cache_for(manifest_path))
        merge_framework_info(package.framework_info, detect_framework_usage(content))
        if '"workspace:' in content:
            workspace.has_workspaces_prefix = True
        workspace.packages.append(package)
        self._package_paths[resolved] = package
        logger.debug("Workspace package %s at %s", package.name or "<unnamed>", resolved)
        return package


def link_internal_references(workspace: WorkspaceInfo) -> None:
    """Add a reference for every dependency that names another workspace package."""
    names = {package.name for package in workspace.packages if package.name}
    for package in workspace.packages:
        package.config.refs = [
            PackageReference(source=package.name, target=dependency.name)
            for dependency in package.dependencies
            if dependency.name in names and dependency.name != package.name
        ]


def add_build_order(workspace: WorkspaceInfo) -> List[str]:
    """Append ``build-level-<n>`` groups; return names that could not be placed."""
    placed: Set[str] = set()
    remaining = list(workspace.packages)
    level = 0
    while remaining and level < MAX_PACKAGES:
        ready = [
            package
            for package in remaining
            if all(reference.target in placed for reference in package.config.refs)
        ]
        if not ready:
            break
        level += 1
        group = TaskGroup(name=f"build-level-{level}", type="build")
        group.packages.extend(package.name for package in ready)
        workspace.task_groups.append(group)
        placed.update(package.name for package in ready)
        remaining = [package for package in remaining if package not in ready]
    return [package.name or package.path for package in remaining]


def collect_shared_dependencies(workspace: WorkspaceInfo) -> None:
    """Record dependencies listed by more than one package; the first version wins."""
    usage: Dict[str, int] = {}
    for package in workspace.packages:
        for name in set(package.dependencies.names()):
            usage[name] = usage.get(name, 0) + 1
    for package in workspace.packages:
        for dependency in package.dependencies:
            if usage.get(dependency.name, 0) > 1:
                workspace.shared_dependencies.add(
                    Dependency(
                        name=dependency.name,
                        version=dependency.version,
                        is_dev_dependency=dependency.is_dev_dependency,
                    )
                )


__all__ = [
    "WorkspaceResolver",
    "add_build_order",
    "collect_shared_dependencies",
    "link_internal_references",
]

"""Narrow parsers for monorepo tool configuration files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

import yaml

from ..logging import get_logger
from .jsontext import (
    Span,
    container_span,
    find_key,
    find_matching,
    is_true,
    iter_array_strings,
    iter_entries,
    literal_at,
    string_at,
    top_level_string,
    top_level_value,
)

logger = get_logger("manifests")


@dataclass
class LernaConfig:
    version_strategy: str = "fixed"
    fixed_version: str = ""
    packages: List[str] = field(default_factory=list)
    npm_client: str = ""
    use_workspaces: bool = False
    conventional_commits: bool = False
    create_release: bool = False
    hoist: bool = False


@dataclass
class NxTarget:
    name: str
    depends_on: List[str] = field(default_factory=list)


@dataclass
class NxConfig:
    project_paths: List[str] = field(default_factory=list)
    npm_scope: str = ""
    targets: List[NxTarget] = field(default_factory=list)


@dataclass
class RushProject:
    package_name: str
    project_folder: str


@dataclass
class RushConfig:
    projects: List[RushProject] = field(default_factory=list)
    version_strategy: str = ""
    rush_version: str = ""
    build_cache_enabled: bool = False
    cache_folder: str = ""


@dataclass
class TurboTask:
    name: str
    depends_on: List[str] = field(default_factory=list)


@dataclass
class TurboConfig:
    tasks: List[TurboTask] = field(default_factory=list)
    # file name -> value; array-form globalDependencies map to empty values.
    global_dependencies: Dict[str, str] = field(default_factory=dict)


def parse_lerna_config(content: str) -> LernaConfig:
    """Read version strategy, package globs, client and release settings from lerna.json."""
    config = LernaConfig()
    version = top_level_string(content, "version")
    if version == "independent":
        config.version_strategy = "independent"
    elif version:
        config.fixed_version = version

    packages = top_level_value(content, "packages")
    if packages is not None and content[packages[0] : packages[0] + 1] == "[":
        config.packages = list(iter_array_strings(content, (packages[0], packages[1] - 1)))

    config.npm_client = top_level_string(content, "npmClient") or ""
    use_workspaces = top_level_value(content, "useWorkspaces")
    config.use_workspaces = use_workspaces is not None and literal_at(content, use_workspaces) == "true"

    command = container_span(content, "command")
    if command is not None:
        publish = container_span(content, "publish", start=command[0])
        if publish is not None and publish[1] <= command[1]:
            config.conventional_commits = is_true(content, "conventionalCommits", publish)
            config.create_release = find_key(content, "createRelease", *publish) is not None
        bootstrap = container_span(content, "bootstrap", start=command[0])
        if bootstrap is not None and bootstrap[1] <= command[1]:
            config.hoist = is_true(content, "hoist", bootstrap)
    # lerna 7+ moves conventionalCommits/createRelease to "version" command options.
    if not config.conventional_commits:
        config.conventional_commits = is_true(content, "conventionalCommits")
    return config


def parse_pnpm_workspace(content: str) -> List[str]:
    """Return the ``packages:`` globs of pnpm-workspace.yaml; malformed YAML yields none."""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        logger.debug("Ignoring unparsable pnpm-workspace.yaml: %s", exc)
        return []
    if not isinstance(data, dict):
        return []
    packages = data.get("packages")
    if not isinstance(packages, list):
        return []
    return [str(item).strip() for item in packages if isinstance(item, (str, int)) and str(item).strip()]


def parse_nx_config(content: str) -> NxConfig:
    """Read project locations, npm scope and target defaults from nx.json or workspace.json."""
    config = NxConfig(npm_scope=top_level_string(content, "npmScope") or "")

    projects = top_level_value(content, "projects")
    if projects is not None:
        start, end = projects
        opener = content[start : start + 1]
        if opener == "[":
            config.project_paths = list(iter_array_strings(content, (start, end - 1)))
        elif opener == "{":
            for name, value in iter_entries(content, (start, end - 1)):
                path = string_at(content, value)
                if path is None and content[value[0] : value[0] + 1] == "{":
                    root = find_key(content, "root", value[0], value[1])
                    path = string_at(content, root) if root else None
                config.project_paths.append(path or name)

    targets = container_span(content, "targetDefaults")
    if targets is not None:
        for name, value in iter_entries(content, targets):
            target = NxTarget(name=name)
            if content[value[0] : value[0] + 1] == "{":
                target.depends_on = _depends_on(content, value)
            config.targets.append(target)
    return config


def parse_rush_config(content: str) -> RushConfig:
    """Read project entries, version policy and build cache from rush.json."""
    config = RushConfig()
    projects = container_span(content, "projects", opener="[")
    if projects is not None:
        position = projects[0] + 1
        while position < projects[1]:
            if content[position] != "{":
                position += 1
                continue
            entry_end = _entry_close(content, position, projects[1])
            name = find_key(content, "packageName", position, entry_end)
            folder = find_key(content, "projectFolder", position, entry_end)
            package_name = string_at(content, name) if name else None
            project_folder = string_at(content, folder) if folder else None
            if package_name and project_folder:
                config.projects.append(RushProject(package_name, project_folder))
            position = entry_end + 1

    policy = find_key(content, "versionPolicyName")
    policy_name = string_at(content, policy) if policy else None
    if policy_name is not None:
        config.version_strategy = "fixed" if policy_name.startswith("lock-step") else "independent"

    rush_version = find_key(content, "rushVersion")
    config.rush_version = (string_at(content, rush_version) if rush_version else None) or ""

    if find_key(content, "buildCacheEnabled") is not None:
        config.build_cache_enabled = True
        cache_folder = find_key(content, "cacheFolder")
        config.cache_folder = (string_at(content, cache_folder) if cache_folder else None) or ""
    return config


def parse_turbo_config(content: str) -> TurboConfig:
    """Read task dependency groups and global dependencies from turbo.json."""
    config = TurboConfig()
    pipeline = container_span(content, "pipeline") or container_span(content, "tasks")
    if pipeline is not None:
        for name, value in iter_entries(content, pipeline):
            if content[value[0] : value[0] + 1] != "{":
                continue
            config.tasks.append(TurboTask(name=name, depends_on=_depends_on(content, value)))

    global_deps = top_level_value(content, "globalDependencies")
    if global_deps is not None:
        start, end = global_deps
        opener = content[start : start + 1]
        if opener == "[":
            for item in iter_array_strings(content, (start, end - 1)):
                config.global_dependencies.setdefault(item, "")
        elif opener == "{":
            for name, value in iter_entries(content, (start, end - 1)):
                config.global_dependencies.setdefault(name, string_at(content, value) or "")
    return config


def _depends_on(content: str, value: Span) -> List[str]:
    found = find_key(content, "dependsOn", value[0], value[1])
    if found is None or content[found[0] : found[0] + 1] != "[":
        return []
    return list(iter_array_strings(content, (found[0], found[1] - 1)))


def _entry_close(content: str, open_index: int, limit: int) -> int:
    close = find_matching(content, open_index)
    return close if 0 <= close <= limit else limit


__all__ = [
    "LernaConfig",
    "NxConfig",
    "NxTarget",
    "RushConfig",
    "RushProject",
    "TurboConfig",
    "TurboTask",
    "parse_lerna_config",
    "parse_nx_config",
    "parse_pnpm_workspace",
    "parse_rush_config",
    "parse_turbo_config",
]

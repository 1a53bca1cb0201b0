"""Narrow extractors for package manifests and monorepo configuration files."""

from __future__ import annotations

from .dependencies import collect_dependencies, parse_dependencies_section, parse_version
from .jsontext import get_json_string_value, parse_json_string_array
from .package_json import (
    ManifestSignals,
    analyze_package_dependencies,
    parse_package_info,
    parse_workspace_globs,
    read_manifest_signals,
)
from .workspace_configs import (
    LernaConfig,
    NxConfig,
    RushConfig,
    TurboConfig,
    parse_lerna_config,
    parse_nx_config,
    parse_pnpm_workspace,
    parse_rush_config,
    parse_turbo_config,
)

__all__ = [
    "LernaConfig",
    "ManifestSignals",
    "NxConfig",
    "RushConfig",
    "TurboConfig",
    "analyze_package_dependencies",
    "collect_dependencies",
    "get_json_string_value",
    "parse_dependencies_section",
    "parse_json_string_array",
    "parse_lerna_config",
    "parse_nx_config",
    "parse_package_info",
    "parse_pnpm_workspace",
    "parse_rush_config",
    "parse_turbo_config",
    "parse_version",
    "parse_workspace_globs",
    "read_manifest_signals",
]

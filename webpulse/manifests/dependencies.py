"""Dependency-section extraction from package.json text."""

from __future__ import annotations

from typing import List, Optional

from ..frameworks import clean_version_string, extract_dependency_version
from ..logging import get_logger
from ..models import MAX_DEPENDENCIES, Dependency, DependencyCache, DependencyList
from .jsontext import container_span, iter_entries, string_at

logger = get_logger("manifests")

DEPENDENCY_SECTIONS = ("dependencies", "devDependencies")


def parse_dependencies_section(
    content: str,
    section: str,
    *,
    is_dev: bool = False,
    cache: Optional[DependencyCache] = None,
    limit: int = MAX_DEPENDENCIES,
) -> List[Dependency]:
    """Return the ``"name": "version"`` pairs of one dependency section.

    Every pair found is also recorded in ``cache``; the cache is the source
    for the run's dependency statistics, so all dependency-bearing manifests
    must pass through here.
    """
    span = container_span(content, section)
    if span is None:
        return []

    found: List[Dependency] = []
    for name, value_span in iter_entries(content, span):
        if len(found) >= limit:
            break
        raw_version = string_at(content, value_span)
        if not name or not raw_version:
            continue
        version = clean_version_string(raw_version)
        logger.debug("Dependency %s@%s (%s)", name, version, section)
        found.append(Dependency(name=name, version=version, is_dev_dependency=is_dev))
        if cache is not None:
            cache.record(name, version)
    return found


def collect_dependencies(
    content: str,
    target: DependencyList,
    cache: Optional[DependencyCache] = None,
) -> DependencyList:
    """Merge ``dependencies`` then ``devDependencies`` into ``target``.

    A name already present keeps its first entry, so a package listed in both
    sections stays a production dependency.
    """
    for section in DEPENDENCY_SECTIONS:
        target.extend(
            parse_dependencies_section(
                content, section, is_dev=section == "devDependencies", cache=cache
            )
        )
    return target


def parse_version(content: str, name: str) -> str:
    """Return the cleaned version declared for ``name``, or an empty string."""
    return extract_dependency_version(content, name) or ""


__all__ = [
    "DEPENDENCY_SECTIONS",
    "collect_dependencies",
    "parse_dependencies_section",
    "parse_version",
]

"""Static structure, framework and workspace analysis for web projects."""

from __future__ import annotations

from .aggregator import (
    ProjectAggregator,
    analyze_project_type,
    analyze_salesforce_metadata,
    traverse_directory,
)
from .estimation import calculate_performance_impact, estimate_resources
from .models import ProjectRecord, ResourceEstimation
from .report import (
    display_potential_issues,
    display_resource_usage,
    display_specific_value,
    render_potential_issues,
    render_report,
    render_resource_usage,
    render_specific_value,
)

__all__ = [
    "ProjectAggregator",
    "ProjectRecord",
    "ResourceEstimation",
    "analyze_project_type",
    "analyze_salesforce_metadata",
    "calculate_performance_impact",
    "display_potential_issues",
    "display_resource_usage",
    "display_specific_value",
    "estimate_resources",
    "render_potential_issues",
    "render_report",
    "render_resource_usage",
    "render_specific_value",
    "traverse_directory",
]

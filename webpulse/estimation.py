"""Heuristic resource usage estimates and the performance impact score."""

from __future__ import annotations

from typing import Optional

from .models import ProjectRecord, ResourceEstimation

IMPACT_FRAMEWORKS = frozenset({"ZephyrJS", "React", "Vue.js", "Angular"})


def estimate_resources(project: ProjectRecord) -> ResourceEstimation:
    """Estimate heap, transfer and paint timings from aggregate counts.

    Pure function of the record; ``has_framework`` means a primary framework
    was detected.
    """
    has_framework = bool(project.framework)
    html = project.total_html_info
    css = project.total_css_info
    js = project.total_js_info
    json_info = project.total_json_info
    custom_elements = project.custom_element_count
    external = project.external_resource_count
    images = project.image_file_count

    heap = (
        (1_000_000 if has_framework else 2_000_000)
        + html.tag_count * 60
        + css.rule_count * 30
        + js.variable_count * 30
        + js.function_count * 120
        + json_info.object_count * 12
        + json_info.array_count * 6
        + images * 12_000
        + custom_elements * 4_000
        + (600_000 if has_framework else 0)
    )
    transferred = (
        project.html_file_count * 1_200
        + project.css_file_count * 3_000
        + project.js_file_count * 3_000
        + project.json_file_count * 600
        + images * 300
        + external * 1_500
        + (2_000 if has_framework else 0)
    )
    resource_size = (
        project.html_file_count * 4_500
        + project.css_file_count * 45_000
        + project.js_file_count * 90_000
        + project.json_file_count * 1_800
        + images * 75_000
        + external * 35_000
        + (70_000 if has_framework else 0)
    )
    dom_content_loaded = int(
        7
        + html.tag_count * 0.07
        + css.rule_count * 0.03
        + js.function_count * 0.14
        + custom_elements * 0.4
        + external * 0.8
        + (4 if has_framework else 0)
    )
    largest_contentful_paint = int(
        dom_content_loaded
        + images * 0.35
        + css.rule_count * 0.07
        + external * 1.7
        + (8 if has_framework else 0)
    )
    return ResourceEstimation(
        js_heap_size=heap,
        transferred_data=transferred,
        resource_size=resource_size,
        dom_content_loaded=dom_content_loaded,
        largest_contentful_paint=largest_contentful_paint,
    )


def calculate_performance_impact(project: Optional[ProjectRecord]) -> float:
    """Return the weighted impact score scaled by 5/150.

    The score is not clamped; large projects exceed 5.0.
    """
    if project is None:
        return 0.0
    impact = (
        project.total_js_info.function_count * 0.1
        + project.total_css_info.rule_count * 0.05
        + project.total_html_info.tag_count * 0.02
        + project.custom_element_count * 0.5
        + project.external_resource_count * 1.0
        + project.salesforce_metadata_count * 0.2
        + project.total_json_info.object_count * 0.01
        + project.total_json_info.array_count * 0.005
        + project.image_file_count * 0.2
    )
    if project.framework in IMPACT_FRAMEWORKS:
        impact += 10
    return impact / 150 * 5


__all__ = ["IMPACT_FRAMEWORKS", "calculate_performance_impact", "estimate_resources"]

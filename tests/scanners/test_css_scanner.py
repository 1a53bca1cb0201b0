"""Tests for the stylesheet scanner."""

from __future__ import annotations

from webpulse.scanners.css import CSSScanner


def test_brace_counts_as_rule_and_selector() -> None:
    info = CSSScanner().scan("h1, h2 { color: red; margin: 0 }")

    assert info.rule_count == 1
    assert info.selector_count == 2
    assert info.property_count == 2


def test_media_queries_and_keyframes() -> None:
    content = """
    @media (max-width: 600px) { .a { color: red } }
    @keyframes spin { from { opacity: 0 } to { opacity: 1 } }
    """
    info = CSSScanner().scan(content)

    assert info.media_query_count == 1
    assert info.keyframe_count == 1
    assert info.rule_count == 5


def test_selector_threshold_issue() -> None:
    info = CSSScanner().scan(".a{}" * 4001)

    assert info.selector_count == 4001
    assert [issue.description for issue in info.potential_issues] == [
        "High number of selectors (4001) may cause performance issues"
    ]


def test_media_query_threshold_issue() -> None:
    info = CSSScanner().scan("@media print {}\n" * 51)

    assert info.media_query_count == 51
    assert info.potential_issues[0].description == (
        "High number of media queries (51) may complicate responsive design"
    )


def test_empty_stylesheet() -> None:
    info = CSSScanner().scan("")
    assert info.rule_count == 0
    assert len(info.potential_issues) == 0

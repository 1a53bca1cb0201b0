"""Tests for the JSON scanner."""

from __future__ import annotations

import json

from webpulse.scanners.json import JSONScanner


def test_braces_inside_strings_are_ignored() -> None:
    info = JSONScanner().scan('{"a": "{not a brace}", "b": [1,2]}')

    assert info.object_count == 1
    assert info.array_count == 1
    assert info.key_count == 2
    assert info.max_nesting_level == 2


def test_escaped_quotes_stay_inside_string() -> None:
    info = JSONScanner().scan(r'{"a": "say \"{hi}\"", "b": {"c": 1}}')

    assert info.object_count == 2
    assert info.key_count == 3
    assert info.max_nesting_level == 2


def test_colon_outside_containers_is_not_a_key() -> None:
    info = JSONScanner().scan('"a": 1')
    assert info.key_count == 0


def test_stray_closers_never_make_depth_negative() -> None:
    info = JSONScanner().scan("]]}} [{}]")
    assert info.max_nesting_level == 2


def test_deep_nesting_issue() -> None:
    content = "[" * 11 + "]" * 11
    info = JSONScanner().scan(content)

    assert info.max_nesting_level == 11
    assert [issue.description for issue in info.potential_issues] == [
        "Deep nesting level (11) may cause performance issues when parsing"
    ]


def test_container_count_issue() -> None:
    content = json.dumps([{} for _ in range(1000)])
    info = JSONScanner().scan(content)

    assert info.object_count + info.array_count == 1001
    assert info.potential_issues[0].description == (
        "Large number of objects and arrays (1001) may indicate overly complex data structure"
    )

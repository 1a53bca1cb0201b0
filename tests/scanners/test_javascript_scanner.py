"""Tests for the JavaScript scanner."""

from __future__ import annotations

import textwrap

from webpulse.scanners.javascript import JavaScriptScanner, count_closures

SAMPLE = textwrap.dedent(
    """
    const add = (a, b) => a + b;
    function greet(name) { return name; }
    class Widget extends React.Component { render() {} }
    document.addEventListener("click", () => {});
    async function load() { return new Promise(resolve => resolve()); }
    """
)


def test_counts_markers_by_priority() -> None:
    info = JavaScriptScanner().scan(SAMPLE)

    assert info.function_count == 5
    assert info.variable_count == 1
    assert info.class_count == 1
    assert info.react_component_count == 1
    assert info.event_listener_count == 1
    assert info.async_function_count == 1
    assert info.promise_count == 1
    assert len(info.potential_issues) == 0


def test_framework_constructors_are_counted() -> None:
    content = (
        "React.createElement('div');\n"
        "new Vue({ el: '#app' });\n"
        "angular.module('app', []);\n"
    )
    info = JavaScriptScanner().scan(content)

    assert info.react_component_count == 1
    assert info.vue_instance_count == 1
    assert info.angular_module_count == 1


def test_plain_class_is_not_a_react_component() -> None:
    info = JavaScriptScanner().scan("class Store { constructor() {} }")
    assert info.class_count == 1
    assert info.react_component_count == 0


def test_count_closures_tracks_nested_functions() -> None:
    content = "function outer() { function inner() { } }"
    assert count_closures(content) == 1
    assert count_closures("function a() {} function b() {}") == 0


def test_function_threshold_issue() -> None:
    content = "function f() {}\n" * 201
    info = JavaScriptScanner().scan(content)

    assert info.function_count == 201
    assert [issue.description for issue in info.potential_issues] == [
        "High number of functions (201) may indicate overly complex code"
    ]


def test_event_listener_threshold_issue() -> None:
    content = "el.addEventListener('x', h);\n" * 51
    info = JavaScriptScanner().scan(content)

    assert info.event_listener_count == 51
    assert info.potential_issues[0].description.startswith(
        "High number of event listeners (51)"
    )


def test_closure_threshold_issue() -> None:
    content = "function outer() {" + " function inner() {" * 101
    info = JavaScriptScanner().scan(content)

    assert info.closure_count == 101
    descriptions = [issue.description for issue in info.potential_issues]
    assert any(text.startswith("High number of potential closures (101)") for text in descriptions)


def test_supported_extensions() -> None:
    scanner = JavaScriptScanner()
    assert scanner.supports("app.js")
    assert scanner.supports("index.MJS")
    assert scanner.supports("server.cjs")
    assert not scanner.supports("component.jsx")

"""Tests for framework fingerprinting."""

from __future__ import annotations

from webpulse.frameworks import (
    count_hook_calls,
    detect_framework,
    detect_framework_usage,
    merge_framework_info,
)
from webpulse.models import FrameworkInfo


def test_manifest_react_detection() -> None:
    info = detect_framework_usage('{"dependencies":{"react":"^18.2.0"}}')

    assert info.has_react is True
    assert info.has_vue is False
    assert info.react_hooks_count == 0
    assert info.has_any_framework is True


def test_manifest_tooling_detection() -> None:
    content = """{
      "dependencies": {"vue": "^3.4.0", "pinia": "^2.1.0", "vue-router": "^4.0.0"},
      "devDependencies": {
        "typescript": "^5.4.2",
        "webpack": "^5.88.0",
        "tailwindcss": "^3.4.0",
        "jest": "^29.0.0",
        "eslint": "^8.0.0",
        "prettier": "^3.0.0"
      },
      "engines": {"node": ">=18"}
    }"""
    info = detect_framework_usage(content)

    assert info.has_vue is True
    assert info.has_state_management is True
    assert info.has_routing is True
    assert info.uses_typescript is True
    assert info.typescript_version == "5.4.2"
    assert info.node_version == "18"
    assert info.has_bundler is True
    assert info.primary_bundler == "webpack@5.88.0"
    assert info.css_solution == "tailwind"
    assert info.uses_tailwind is True
    assert info.has_testing is True
    assert info.has_unit_testing is True
    assert info.has_linting is True
    assert info.has_formatting is True


def test_styled_components_wins_over_other_css_solutions() -> None:
    info = detect_framework_usage('{"styled-components": "^6", "sass": "^1"}')
    assert info.css_solution == "styled-components"
    assert info.uses_css_in_js is True
    assert info.uses_sass is False


def test_ui_library_detection() -> None:
    info = detect_framework_usage('{"dependencies": {"@mui/material": "^5.0.0"}}')
    assert info.has_ui_library is True
    assert info.primary_ui_library == "mui"


def test_hook_counting_respects_word_boundaries() -> None:
    content = "useState(1); myuseState(2); useStateful(3); useEffect(() => {});"
    assert count_hook_calls(content) == 2


def test_source_detection() -> None:
    react = detect_framework("import React from 'react';\nuseState(0);\nuseEffect(f);")
    assert react.has_react is True
    assert react.react_hooks_count == 2

    vue = detect_framework("const app = createApp({ setup() { return {} } })")
    assert vue.has_vue is True
    assert vue.vue_composition_api is True

    angular = detect_framework("@Component({ selector: 'x' }) class A { ngOnInit() {} }")
    assert angular.has_angular is True

    node = detect_framework("const fs = require('fs');\nmodule.exports = {};")
    assert node.has_nodejs is True
    assert node.has_react is False


def test_merge_ors_flags_adds_counts_and_keeps_first_strings() -> None:
    first = FrameworkInfo(has_react=True, react_hooks_count=2, primary_bundler="vite")
    second = FrameworkInfo(has_vue=True, react_hooks_count=3, primary_bundler="webpack@5")

    merged = merge_framework_info(FrameworkInfo(), first, second)

    assert merged.has_react is True
    assert merged.has_vue is True
    assert merged.react_hooks_count == 5
    assert merged.primary_bundler == "vite"


def test_manifest_versions_must_look_like_versions() -> None:
    info = detect_framework_usage(
        '{"engines": {"node": "lts"}, "devDependencies": {"typescript": "latest"}}'
    )

    assert info.uses_typescript is True
    assert info.typescript_version == ""
    assert info.node_version == ""

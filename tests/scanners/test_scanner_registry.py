"""Tests for scanner discovery and dispatch by file name."""

from __future__ import annotations

from webpulse.scanners import (
    JSXScanner,
    TypeScriptScanner,
    discover_scanners,
    scanner_for,
)


def test_discover_scanners_returns_builtin_set() -> None:
    names = [scanner.name for scanner in discover_scanners()]
    assert names == ["html", "css", "javascript", "typescript", "jsx", "vue", "xml", "json"]


def test_scanner_for_dispatches_by_extension() -> None:
    assert isinstance(scanner_for("App.tsx"), TypeScriptScanner)
    assert isinstance(scanner_for("Button.JSX"), JSXScanner)
    assert scanner_for("main.mjs").name == "javascript"
    assert scanner_for("notes.md") is None

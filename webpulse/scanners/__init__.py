"""Content scanners and extension-based lookup."""

from __future__ import annotations

from typing import Dict, List, Optional

from .base import Scanner
from .css import CSSScanner
from .html import HTMLScanner
from .javascript import JavaScriptScanner
from .json import JSONScanner
from .jsx import JSXScanner
from .typescript import TypeScriptScanner
from .vue import VueScanner
from .xml import XMLScanner

_BUILTIN_SCANNERS: Dict[str, Scanner] = {
    scanner.name: scanner
    for scanner in (
        HTMLScanner(),
        CSSScanner(),
        JavaScriptScanner(),
        TypeScriptScanner(),
        JSXScanner(),
        VueScanner(),
        XMLScanner(),
        JSONScanner(),
    )
}


def discover_scanners() -> List[Scanner]:
    """Return the built-in scanner instances in dispatch order."""
    return list(_BUILTIN_SCANNERS.values())


def scanner_for(filename: str) -> Optional[Scanner]:
    """Return the scanner whose extensions match ``filename``, if any."""
    for scanner in discover_scanners():
        if scanner.supports(filename):
            return scanner
    return None


__all__ = [
    "CSSScanner",
    "HTMLScanner",
    "JSONScanner",
    "JSXScanner",
    "JavaScriptScanner",
    "Scanner",
    "TypeScriptScanner",
    "VueScanner",
    "XMLScanner",
    "discover_scanners",
    "scanner_for",
]

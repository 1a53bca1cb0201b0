"""Base classes for content scanners."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Tuple, TypeVar

from ..models import BoundedList, PotentialIssue

InfoT = TypeVar("InfoT")


class Scanner(ABC, Generic[InfoT]):
    """Contract for single-pass scanners that turn file text into a metrics record.

    ``scan`` must never raise on malformed input; the worst case is an
    under- or over-count.
    """

    name: str = ""
    extensions: Tuple[str, ...] = ()

    def supports(self, filename: str) -> bool:
        """Return True when ``filename`` carries one of this scanner's extensions."""
        return filename.lower().endswith(self.extensions)

    @abstractmethod
    def scan(self, content: str) -> InfoT:
        """Return a fresh metrics record for ``content``."""


def add_issue(issues: BoundedList[PotentialIssue], description: str) -> None:
    issues.append(PotentialIssue(description=description))


def is_ident_char(char: str) -> bool:
    return char.isalnum() or char == "_"


__all__ = ["Scanner", "add_issue", "is_ident_char"]

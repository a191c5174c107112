"""Exception hierarchy for the tabbed display assembler.

Fatal problems (a required asset resource is missing) propagate out of
assembly. Per-fragment problems are raised by the helpers that detect them
and caught by the assembler, which turns them into diagnostics.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class TabbedDisplayError(Exception):
    """Base exception for the tabbed display tool."""


class AssetNotFoundError(TabbedDisplayError, LookupError):
    """A named style or script resource does not exist."""

    def __init__(self, resource_name: str, location: Optional[Path] = None) -> None:
        where = f" in {location}" if location is not None else ""
        super().__init__(f"Asset resource not found: {resource_name}{where}")
        self.resource_name = resource_name
        self.location = location


class MissingTitleError(TabbedDisplayError, ValueError):
    """No title attribute, title element, or identifier yields a label."""


class FragmentParseError(TabbedDisplayError):
    """A fragment file could not be read or parsed into a tree."""

    def __init__(self, source: Path, reason: str) -> None:
        super().__init__(f"Cannot parse fragment {source}: {reason}")
        self.source = source
        self.reason = reason


class MissingIdentifierError(TabbedDisplayError, ValueError):
    """A fragment has no ``id`` a tab button could target."""


class ExistingDocumentError(TabbedDisplayError):
    """A previously written display could not be loaded for merging."""

    def __init__(self, source: Path, reason: str) -> None:
        super().__init__(f"Cannot load existing document {source}: {reason}")
        self.source = source
        self.reason = reason

"""Idempotent find-or-create of the nodes that occur once per document."""
from __future__ import annotations

from typing import Callable, List, Optional
from xml.etree import ElementTree as ET

from tabbed_html.model.document_model import OutputDocument
from tabbed_html.model.elements import KindSelector, Severity, StructuralKind, build_selectors
from tabbed_html.model.settings import DEFAULT_SETTINGS, DisplaySettings
from tabbed_html.utils.logger import get_logger

LOGGER = get_logger(__name__)

ElementFactory = Callable[[], ET.Element]


class StructuralLocator:
    """Locate structural nodes by depth-first search, creating them when missing."""

    def __init__(self, settings: DisplaySettings = DEFAULT_SETTINGS) -> None:
        self._selectors = build_selectors(settings)

    def selector(self, kind: StructuralKind) -> KindSelector:
        return self._selectors[kind]

    def locate(self, document: OutputDocument, kind: StructuralKind) -> Optional[ET.Element]:
        """Return the first node of ``kind`` in document order, if any; never modifies ``document``."""
        return document.first(self._selectors[kind])

    def locate_or_create(
        self,
        document: OutputDocument,
        kind: StructuralKind,
        factory: Optional[ElementFactory] = None,
    ) -> ET.Element:
        """Return the existing node of ``kind`` or attach a new one.

        ``factory`` builds a pre-filled node (e.g. a style node holding asset
        text); it is only called when no node exists yet. Several existing
        matches resolve to the first and record a warning.
        """
        selector = self._selectors[kind]
        found = document.find_all(selector)
        if found:
            self._warn_if_ambiguous(document, kind, found)
            return found[0]
        created = factory() if factory is not None else selector.create()
        document.region(selector.region).append(created)
        LOGGER.debug("Created %s node <%s>", kind.value, selector.tag)
        return created

    def _warn_if_ambiguous(self, document: OutputDocument, kind: StructuralKind, found: List[ET.Element]) -> None:
        if len(found) < 2:
            return
        message = f"{len(found)} existing {kind.value} nodes found; using the first"
        LOGGER.warning(message)
        document.record(Severity.WARNING, message)

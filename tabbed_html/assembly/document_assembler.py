"""Merge fragments into one document with a button bar and a content container."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Sequence, Set, Tuple
from xml.etree import ElementTree as ET

from tabbed_html.assembly.asset_injector import AssetCache, AssetInjector
from tabbed_html.assembly.button_factory import TabButtonFactory
from tabbed_html.assembly.structural_locator import StructuralLocator
from tabbed_html.model.document_model import OutputDocument
from tabbed_html.model.elements import Fragment, Severity, StructuralKind
from tabbed_html.model.errors import MissingIdentifierError, MissingTitleError
from tabbed_html.model.settings import DEFAULT_SETTINGS, DisplaySettings
from tabbed_html.parser.fragment_loader import load_fragments
from tabbed_html.parser.title_resolver import TitleResolver
from tabbed_html.utils.logger import get_logger
from tabbed_html.utils.xml_utils import find_parent, iter_depth_first, strip_namespaces

LOGGER = get_logger(__name__)


class DocumentAssembler:
    """Build a tabbed display from an ordered list of fragments.

    Buttons and content blocks are appended in fragment order. Problems with
    a single fragment are logged and recorded on the document; only a missing
    style or script resource aborts assembly.
    """

    def __init__(
        self,
        settings: DisplaySettings = DEFAULT_SETTINGS,
        asset_cache: Optional[AssetCache] = None,
    ) -> None:
        self._settings = settings
        self._locator = StructuralLocator(settings)
        self._injector = AssetInjector(self._locator, asset_cache)
        self._titles = TitleResolver(settings)
        self._buttons = TabButtonFactory(settings)

    def ensure_structure(
        self, document: OutputDocument, title: Optional[str]
    ) -> Tuple[ET.Element, ET.Element]:
        """Make sure heading, style, script, button bar and content container exist.

        Returns the button bar and the content container.
        """
        fresh = self._locator.selector(StructuralKind.HEADING).create()
        fresh.text = title
        heading = self._locator.locate_or_create(document, StructuralKind.HEADING, lambda: fresh)
        if heading is not fresh and title is not None and (heading.text or "").strip() != title:
            LOGGER.debug("Keeping existing heading %r; title %r ignored", heading.text, title)
        self._injector.ensure_style(document, self._settings.style_resource)
        self._injector.ensure_script(document, self._settings.script_resource)
        button_bar = self._locator.locate_or_create(document, StructuralKind.BUTTON_BAR)
        container = self._locator.locate_or_create(document, StructuralKind.CONTENT_CONTAINER)
        return button_bar, container

    def assemble(
        self,
        title: Optional[str],
        fragments: Sequence[Fragment],
        document: Optional[OutputDocument] = None,
    ) -> OutputDocument:
        """Return ``document`` (or a new one) with every fragment merged in order."""
        document = document if document is not None else OutputDocument.new()
        button_bar, container = self.ensure_structure(document, title)

        seen_ids = self._existing_ids(container)
        for fragment in fragments:
            self._merge_fragment(document, fragment, button_bar, container, seen_ids)

        LOGGER.info(
            "Assembled %d fragment(s) into %d button(s) with %d diagnostic(s)",
            len(fragments),
            len(button_bar),
            len(document.diagnostics),
        )
        return document

    def assemble_files(
        self,
        title: Optional[str],
        paths: Iterable[Path],
        document: Optional[OutputDocument] = None,
    ) -> OutputDocument:
        """Load fragment files, then assemble; unparsable files are skipped."""
        fragments, failures = load_fragments(paths)
        document = self.assemble(title, fragments, document)
        for failure in failures:
            document.record(Severity.ERROR, str(failure), failure.source.name)
        return document

    # ------------------------------------------------------------------
    # Per-fragment merge
    def _merge_fragment(
        self,
        document: OutputDocument,
        fragment: Fragment,
        button_bar: ET.Element,
        container: ET.Element,
        seen_ids: Set[str],
    ) -> None:
        identifier = fragment.identifier(self._settings.content_class)
        if identifier is not None and identifier in seen_ids:
            self._degrade(document, fragment, f"duplicate id {identifier!r}; fragment skipped")
            return
        if identifier is not None:
            seen_ids.add(identifier)

        try:
            label = self._titles.resolve(fragment)
            button = self._buttons.build(fragment, label)
        except (MissingTitleError, MissingIdentifierError) as exc:
            self._degrade(document, fragment, f"{exc}; no button created")
        else:
            self._buttons.append(button_bar, button)

        content = fragment.content_node(self._settings.content_class)
        if content is None:
            self._degrade(
                document,
                fragment,
                f"no element with class {self._settings.content_class!r}; button has no content",
            )
            return

        self._detach(fragment, content)
        strip_namespaces(content)
        if identifier is not None and content.get("id") != identifier:
            content.set("id", identifier)
        container.append(content)

    def _degrade(self, document: OutputDocument, fragment: Fragment, message: str) -> None:
        LOGGER.warning("%s: %s", fragment.label, message)
        document.record(Severity.WARNING, message, fragment.label)

    def _detach(self, fragment: Fragment, content: ET.Element) -> None:
        if content is fragment.root:
            return
        parent = find_parent(fragment.root, content)
        if parent is not None:
            parent.remove(content)

    def _existing_ids(self, container: ET.Element) -> Set[str]:
        return {
            element.get("id")
            for element in iter_depth_first(container, include_root=False)
            if element.get("id")
        }

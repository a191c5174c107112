"""Insert the tab style sheet and script into the document head, once each."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional
from xml.etree import ElementTree as ET

from tabbed_html.assembly.structural_locator import StructuralLocator
from tabbed_html.model.document_model import OutputDocument
from tabbed_html.model.elements import Severity, StructuralKind
from tabbed_html.model.errors import AssetNotFoundError
from tabbed_html.utils.logger import get_logger

LOGGER = get_logger(__name__)

DEFAULT_RESOURCE_DIR = Path(__file__).resolve().parent.parent / "resources"


class ResourceLoader:
    """Read named text resources from a directory."""

    def __init__(self, directory: Path = DEFAULT_RESOURCE_DIR) -> None:
        self.directory = Path(directory)

    def load(self, name: str) -> Optional[str]:
        """Return the resource text, or ``None`` when it exists but cannot be read.

        Raises ``AssetNotFoundError`` when no such resource exists.
        """
        path = self.directory / name
        if not path.is_file():
            raise AssetNotFoundError(name, self.directory)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.warning("Cannot read resource %s in %s; %s", name, self.directory, exc)
            return None


class AssetCache:
    """Memoizes resource text by name; share one instance to reuse it across runs."""

    def __init__(self, loader: Optional[ResourceLoader] = None) -> None:
        self._loader = loader or ResourceLoader()
        self._texts: Dict[str, Optional[str]] = {}

    def get(self, name: str) -> Optional[str]:
        if name not in self._texts:
            self._texts[name] = self._loader.load(name)
        return self._texts[name]


class AssetInjector:
    """Ensure the document head has one style and one script node."""

    def __init__(self, locator: StructuralLocator, cache: Optional[AssetCache] = None) -> None:
        self._locator = locator
        self._cache = cache or AssetCache()

    def ensure_style(self, document: OutputDocument, resource_name: str) -> ET.Element:
        return self._ensure(document, StructuralKind.STYLE, resource_name)

    def ensure_script(self, document: OutputDocument, resource_name: str) -> ET.Element:
        return self._ensure(document, StructuralKind.SCRIPT, resource_name)

    def _ensure(self, document: OutputDocument, kind: StructuralKind, resource_name: str) -> ET.Element:
        return self._locator.locate_or_create(
            document, kind, lambda: self._build_node(document, kind, resource_name)
        )

    def _build_node(self, document: OutputDocument, kind: StructuralKind, resource_name: str) -> ET.Element:
        text = self._cache.get(resource_name)
        element = self._locator.selector(kind).create()
        if text is None:
            message = f"{kind.value} resource {resource_name} is unreadable; inserted an empty node"
            document.record(Severity.WARNING, message)
        else:
            element.text = text
        if kind is StructuralKind.SCRIPT:
            element.set("type", "text/javascript")
        return element

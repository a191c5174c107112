"""In-memory representation of fragments, buttons and structural markers."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional
from xml.etree import ElementTree as ET

from tabbed_html.model.settings import DisplaySettings
from tabbed_html.utils.xml_utils import find_first, matches

HEAD = "head"
BODY = "body"


class StructuralKind(enum.Enum):
    """Nodes that occur at most once in an assembled document."""

    HEADING = "heading"
    STYLE = "style"
    SCRIPT = "script"
    BUTTON_BAR = "button_bar"
    CONTENT_CONTAINER = "content_container"


@dataclass(frozen=True, slots=True)
class KindSelector:
    """How a structural kind is recognised and, when absent, created.

    Subtrees carrying ``skip_class`` are not searched, so markup inside merged
    content blocks never counts as a structural node.
    """

    tag: str
    region: str
    class_name: Optional[str] = None
    children_only: bool = False
    skip_class: Optional[str] = None

    def create(self) -> ET.Element:
        attributes = {"class": self.class_name} if self.class_name else {}
        return ET.Element(self.tag, attributes)


def build_selectors(settings: DisplaySettings) -> Dict[StructuralKind, KindSelector]:
    """Selector table; style and script must be direct children of head."""
    outside_content = settings.content_container_class
    return {
        StructuralKind.HEADING: KindSelector("h1", BODY, skip_class=outside_content),
        StructuralKind.STYLE: KindSelector("style", HEAD, children_only=True),
        StructuralKind.SCRIPT: KindSelector("script", HEAD, children_only=True),
        StructuralKind.BUTTON_BAR: KindSelector(
            "div", BODY, class_name=settings.button_bar_class, skip_class=outside_content
        ),
        StructuralKind.CONTENT_CONTAINER: KindSelector(
            "div", BODY, class_name=settings.content_container_class
        ),
    }


class Severity(str, enum.Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass(slots=True)
class Diagnostic:
    """A degradation noticed while assembling; assembly continued past it."""

    severity: Severity
    message: str
    fragment: Optional[str] = None

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {"severity": self.severity.value, "message": self.message, "fragment": self.fragment}


@dataclass(slots=True)
class Fragment:
    """One independently produced block of (X)HTML to be shown in one tab.

    ``root`` normally carries the identifier, the content class and an
    optional ``title`` attribute, e.g.
    ``<div id="table1" class="tabcontent" title="Table 1">``. When the content
    node sits inside a wrapper, its own ``id`` is the identifier; the wrapper
    root's ``id`` is used only when the content node has none.
    """

    root: ET.Element
    source: Optional[Path] = None

    @property
    def root_id(self) -> Optional[str]:
        value = (self.root.get("id") or "").strip()
        return value or None

    def content_node(self, content_class: str) -> Optional[ET.Element]:
        """Return the first node (root included) carrying ``content_class``."""
        return find_first(self.root, matches(class_name=content_class))

    def identifier(self, content_class: str) -> Optional[str]:
        node = self.content_node(content_class)
        own_id = (node.get("id") or "").strip() if node is not None else ""
        return own_id or self.root_id

    @property
    def label(self) -> str:
        """Short name used in log records and diagnostics."""
        if self.source is not None:
            return self.source.name
        return self.root_id or f"<{self.root.tag}>"


@dataclass(slots=True)
class TabButton:
    """Navigation control bound to one content block by identifier."""

    label: str
    target_id: str
    display_class: str
    button_class: str = "tablinks"
    function_name: str = "openTab"

    @property
    def onclick(self) -> str:
        return (
            f"{self.function_name}(event, {_js_string(self.target_id)}, "
            f"{_js_string(self.display_class)})"
        )

    def to_element(self) -> ET.Element:
        element = ET.Element("button", {"class": self.button_class, "onclick": self.onclick})
        element.text = self.label
        return element


def _js_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"

"""Composite output document that the assembler fills in."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional
from xml.etree import ElementTree as ET

from tabbed_html.model.elements import HEAD, Diagnostic, KindSelector, Severity
from tabbed_html.utils.xml_utils import find_all, find_first, local_name, matches, strip_namespaces


@dataclass(slots=True)
class OutputDocument:
    """An ``<html>`` tree with head and body regions plus assembly diagnostics."""

    root: ET.Element
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @classmethod
    def new(cls) -> "OutputDocument":
        return cls(ET.Element("html"))

    @classmethod
    def from_element(cls, root: ET.Element) -> "OutputDocument":
        """Wrap a previously produced, possibly partial, document tree."""
        if local_name(root) != "html":
            raise ValueError(f"Expected an <html> root element, found <{local_name(root)}>")
        return cls(strip_namespaces(root))

    @property
    def head(self) -> ET.Element:
        head = find_first(self.root, matches("head"), children_only=True)
        if head is None:
            head = ET.Element("head")
            self.root.insert(0, head)
        return head

    @property
    def body(self) -> ET.Element:
        body = find_first(self.root, matches("body"), children_only=True)
        if body is None:
            body = ET.SubElement(self.root, "body")
        return body

    def region(self, name: str) -> ET.Element:
        """Return (creating if needed) the head or body region."""
        return self.head if name == HEAD else self.body

    def find_all(self, selector: KindSelector) -> List[ET.Element]:
        """Return nodes matching ``selector`` in document order without modifying the tree."""
        region = find_first(self.root, matches(selector.region), children_only=True)
        if region is None:
            return []
        prune = matches(class_name=selector.skip_class) if selector.skip_class else None
        return find_all(
            region,
            matches(selector.tag, selector.class_name),
            include_root=False,
            children_only=selector.children_only,
            prune=prune,
        )

    def first(self, selector: KindSelector) -> Optional[ET.Element]:
        found = self.find_all(selector)
        return found[0] if found else None

    def record(self, severity: Severity, message: str, fragment: Optional[str] = None) -> Diagnostic:
        diagnostic = Diagnostic(severity=severity, message=message, fragment=fragment)
        self.diagnostics.append(diagnostic)
        return diagnostic

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]

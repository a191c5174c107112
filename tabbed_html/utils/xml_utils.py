"""Helper functions to parse and search (X)HTML element trees."""
from __future__ import annotations

from html.parser import HTMLParser
from pathlib import Path
from typing import Callable, Iterator, List, Optional
from xml.etree import ElementTree as ET

ElementPredicate = Callable[[ET.Element], bool]

VOID_ELEMENTS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}
)


def parse_xml(data: bytes) -> ET.ElementTree:
    """Parse XML from raw bytes with sane defaults."""
    return ET.ElementTree(ET.fromstring(data))


def parse_file(path: Path) -> ET.ElementTree:
    """Parse an XML/XHTML file from disk."""
    return parse_xml(path.read_bytes())


class _HtmlTreeBuilder(HTMLParser):
    """Feed ``html.parser`` events into an ElementTree ``TreeBuilder``.

    Void elements are closed as soon as they open, and elements left open by
    a mismatched end tag are closed up to the matching one. Text and elements
    outside the first top-level element are dropped.
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self._builder = ET.TreeBuilder()
        self._open: List[str] = []
        self._has_root = False

    def handle_starttag(self, tag: str, attrs: list) -> None:
        if self._has_root and not self._open:
            return
        self._builder.start(tag, {name: value if value is not None else "" for name, value in attrs})
        self._has_root = True
        if tag in VOID_ELEMENTS:
            self._builder.end(tag)
        else:
            self._open.append(tag)

    def handle_endtag(self, tag: str) -> None:
        if tag not in self._open:
            return
        while self._open:
            current = self._open.pop()
            self._builder.end(current)
            if current == tag:
                break

    def handle_data(self, data: str) -> None:
        if self._open:
            self._builder.data(data)

    def close(self) -> ET.Element:
        super().close()
        while self._open:
            self._builder.end(self._open.pop())
        if not self._has_root:
            raise ValueError("No element found in HTML input")
        return self._builder.close()


def parse_html(text: str) -> ET.Element:
    """Parse serialized HTML (void tags, raw script text) into an element tree."""
    parser = _HtmlTreeBuilder()
    parser.feed(text)
    return parser.close()


def local_name(element: ET.Element) -> str:
    """Return the tag without its ``{namespace}`` prefix."""
    tag = element.tag
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def class_tokens(element: ET.Element) -> list[str]:
    """Return the whitespace separated tokens of the ``class`` attribute."""
    return (element.get("class") or "").split()


def has_class(element: ET.Element, class_name: str) -> bool:
    return class_name in class_tokens(element)


def matches(tag: Optional[str] = None, class_name: Optional[str] = None) -> ElementPredicate:
    """Build a predicate on local tag name and/or a required class token."""

    def predicate(element: ET.Element) -> bool:
        if tag is not None and local_name(element) != tag:
            return False
        if class_name is not None and not has_class(element, class_name):
            return False
        return True

    return predicate


def iter_depth_first(
    root: ET.Element,
    *,
    include_root: bool = True,
    prune: Optional[ElementPredicate] = None,
) -> Iterator[ET.Element]:
    """Yield elements in document order (pre-order, depth-first).

    Descendants matching ``prune`` are skipped together with their subtree.
    """
    stack = [root] if include_root else list(reversed(list(root)))
    while stack:
        element = stack.pop()
        if not isinstance(element.tag, str):
            continue
        if prune is not None and element is not root and prune(element):
            continue
        yield element
        stack.extend(reversed(list(element)))


def find_all(
    root: ET.Element,
    predicate: ElementPredicate,
    *,
    include_root: bool = True,
    children_only: bool = False,
    prune: Optional[ElementPredicate] = None,
) -> list[ET.Element]:
    """Return every element matching ``predicate`` in document order."""
    if children_only:
        return [child for child in root if isinstance(child.tag, str) and predicate(child)]
    return [
        element
        for element in iter_depth_first(root, include_root=include_root, prune=prune)
        if predicate(element)
    ]


def find_first(
    root: ET.Element,
    predicate: ElementPredicate,
    *,
    include_root: bool = True,
    children_only: bool = False,
) -> Optional[ET.Element]:
    """Return the first element matching ``predicate`` in document order."""
    if children_only:
        return next((child for child in root if isinstance(child.tag, str) and predicate(child)), None)
    for element in iter_depth_first(root, include_root=include_root):
        if predicate(element):
            return element
    return None


def text_content(element: ET.Element) -> str:
    """Concatenate all descendant text and collapse runs of whitespace."""
    return " ".join("".join(element.itertext()).split())


def strip_namespaces(root: ET.Element) -> ET.Element:
    """Rewrite ``{ns}tag`` names to bare local names in place."""
    for element in iter_depth_first(root):
        element.tag = local_name(element)
        for key in [key for key in element.attrib if key.startswith("{")]:
            element.attrib[key.rsplit("}", 1)[-1]] = element.attrib.pop(key)
    return root


def find_parent(root: ET.Element, target: ET.Element) -> Optional[ET.Element]:
    """Return the parent of ``target`` within ``root`` (ElementTree keeps no back links)."""
    for element in iter_depth_first(root):
        for child in element:
            if child is target:
                return element
    return None

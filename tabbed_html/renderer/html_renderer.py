"""Serialize an assembled document into an HTML file."""
from __future__ import annotations

from pathlib import Path
from xml.etree import ElementTree as ET

from tabbed_html.model.document_model import OutputDocument

DOCTYPE = "<!DOCTYPE html>"


class HtmlRenderer:
    """Write the document tree as HTML (script and style text left unescaped)."""

    def __init__(self, output_path: Path) -> None:
        self._output_path = output_path

    def render(self, model: OutputDocument) -> None:
        self._output_path.parent.mkdir(parents=True, exist_ok=True)
        self._output_path.write_text(self.to_html(model), encoding="utf-8")

    @staticmethod
    def to_html(model: OutputDocument) -> str:
        markup = ET.tostring(model.root, encoding="unicode", method="html")
        return f"{DOCTYPE}\n{markup}\n"

"""Helpers to persist assembly diagnostics for debugging."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from tabbed_html.model.document_model import OutputDocument
from tabbed_html.model.elements import StructuralKind, build_selectors
from tabbed_html.model.settings import DEFAULT_SETTINGS, DisplaySettings


class DebugDumper:
    """Writes a JSON summary of an assembled document for inspection."""

    def __init__(self, directory: Path, settings: DisplaySettings = DEFAULT_SETTINGS) -> None:
        self.directory = directory
        self._selectors = build_selectors(settings)

    def dump(self, model: OutputDocument) -> Path:
        """Persist button targets, content ids and diagnostics as JSON."""
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / "assembly_report.json"
        target.write_text(json.dumps(self.summarize(model), indent=2), encoding="utf-8")
        return target

    def summarize(self, model: OutputDocument) -> Dict[str, Any]:
        """Describe the document; the tree and its diagnostics are left untouched."""
        heading = model.first(self._selectors[StructuralKind.HEADING])
        button_bar = model.first(self._selectors[StructuralKind.BUTTON_BAR])
        container = model.first(self._selectors[StructuralKind.CONTENT_CONTAINER])
        return {
            "title": heading.text if heading is not None else None,
            "buttons": [
                {"label": button.text, "onclick": button.get("onclick")}
                for button in (button_bar if button_bar is not None else [])
            ],
            "contents": [block.get("id") for block in (container if container is not None else [])],
            "diagnostics": [diagnostic.as_dict() for diagnostic in model.diagnostics],
        }

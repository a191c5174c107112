"""Build the tab buttons that switch between content blocks."""
from __future__ import annotations

from xml.etree import ElementTree as ET

from tabbed_html.model.elements import Fragment, TabButton
from tabbed_html.model.errors import MissingIdentifierError
from tabbed_html.model.settings import DEFAULT_SETTINGS, DisplaySettings


class TabButtonFactory:
    """Create one button per fragment, bound to its identifier and display class.

    The button only declares the binding; ``openTab`` in the injected script
    hides the other blocks of the display class and marks the button active.
    """

    def __init__(self, settings: DisplaySettings = DEFAULT_SETTINGS) -> None:
        self._settings = settings

    def build(self, fragment: Fragment, label: str) -> TabButton:
        target_id = fragment.identifier(self._settings.content_class)
        if target_id is None:
            raise MissingIdentifierError(f"Fragment {fragment.label} has no id to bind a button to")
        return TabButton(
            label=label,
            target_id=target_id,
            display_class=self._settings.content_class,
            button_class=self._settings.button_class,
            function_name=self._settings.script_function,
        )

    def append(self, button_bar: ET.Element, button: TabButton) -> ET.Element:
        element = button.to_element()
        button_bar.append(element)
        return element

"""Derive the label shown on a fragment's tab button."""
from __future__ import annotations

from tabbed_html.model.elements import Fragment
from tabbed_html.model.errors import MissingTitleError
from tabbed_html.model.settings import DEFAULT_SETTINGS, DisplaySettings
from tabbed_html.utils.xml_utils import find_first, matches, text_content

TITLE_ATTRIBUTE = "title"
TITLE_ELEMENT = "title"


class TitleResolver:
    """Resolve a label from, in order: ``title`` attribute, ``<title>`` element, identifier."""

    def __init__(self, settings: DisplaySettings = DEFAULT_SETTINGS) -> None:
        self._settings = settings

    def resolve(self, fragment: Fragment) -> str:
        for candidate in (
            self._from_attribute(fragment),
            self._from_title_element(fragment),
            fragment.identifier(self._settings.content_class),
        ):
            if candidate:
                return candidate
        raise MissingTitleError(f"No title, title element or id found in {fragment.label}")

    def _from_attribute(self, fragment: Fragment) -> str:
        return (fragment.root.get(TITLE_ATTRIBUTE) or "").strip()

    def _from_title_element(self, fragment: Fragment) -> str:
        element = find_first(fragment.root, matches(TITLE_ELEMENT), include_root=False)
        if element is None:
            return ""
        return text_content(element)

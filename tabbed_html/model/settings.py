"""Names shared between the generated markup and the bundled assets."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DisplaySettings:
    """Class names and resource names used when assembling a tabbed display.

    The defaults match ``resources/tab_button.css`` and
    ``resources/tab_button.js``; changing a class name without shipping
    matching assets produces markup the script will not toggle.
    """

    content_class: str = "tabcontent"
    button_bar_class: str = "tab"
    content_container_class: str = "tabcontentdiv"
    button_class: str = "tablinks"
    style_resource: str = "tab_button.css"
    script_resource: str = "tab_button.js"
    script_function: str = "openTab"


DEFAULT_SETTINGS = DisplaySettings()

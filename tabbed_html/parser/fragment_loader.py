"""Read fragment files from disk and turn them into ``Fragment`` objects."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Tuple
from xml.etree import ElementTree as ET

from tabbed_html.model.elements import Fragment
from tabbed_html.model.errors import FragmentParseError
from tabbed_html.utils.logger import get_logger
from tabbed_html.utils.xml_utils import parse_file

LOGGER = get_logger(__name__)


def load_fragment(path: Path) -> Fragment:
    """Parse one well-formed (X)HTML file into a fragment."""
    try:
        tree = parse_file(path)
    except OSError as exc:
        raise FragmentParseError(path, exc.strerror or str(exc)) from exc
    except ET.ParseError as exc:
        raise FragmentParseError(path, str(exc)) from exc
    LOGGER.debug("Parsed fragment %s (root <%s>)", path.name, tree.getroot().tag)
    return Fragment(root=tree.getroot(), source=path)


def load_fragments(paths: Iterable[Path]) -> Tuple[List[Fragment], List[FragmentParseError]]:
    """Load every path in order, collecting failures instead of stopping."""
    fragments: List[Fragment] = []
    failures: List[FragmentParseError] = []
    for path in paths:
        try:
            fragments.append(load_fragment(Path(path)))
        except FragmentParseError as exc:
            LOGGER.warning("%s", exc)
            failures.append(exc)
    return fragments, failures

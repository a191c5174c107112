"""Entry-point for building a tabbed HTML display from fragment files."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from tabbed_html.assembly.asset_injector import AssetCache, ResourceLoader
from tabbed_html.assembly.document_assembler import DocumentAssembler
from tabbed_html.model.document_model import OutputDocument
from tabbed_html.model.errors import ExistingDocumentError
from tabbed_html.renderer.html_renderer import HtmlRenderer
from tabbed_html.utils.debug import DebugDumper
from tabbed_html.utils.logger import get_logger, set_verbose
from tabbed_html.utils.xml_utils import parse_html

LOGGER = get_logger(__name__)


def load_existing_document(path: Path) -> OutputDocument:
    """Parse a previously written display so new tabs can be merged into it.

    The file is read as HTML, so void elements such as ``<br>`` written by
    :class:`HtmlRenderer` load back without error.
    """
    try:
        return OutputDocument.from_element(parse_html(path.read_text(encoding="utf-8")))
    except (OSError, ValueError) as exc:
        raise ExistingDocumentError(path, str(exc)) from exc


def build_tabbed_display(
    fragment_paths: Sequence[Path],
    title: Optional[str],
    existing: Optional[Path] = None,
    resource_dir: Optional[Path] = None,
) -> OutputDocument:
    """Load fragments and assemble them into one tabbed document."""
    cache = AssetCache(ResourceLoader(resource_dir)) if resource_dir is not None else None
    document = load_existing_document(existing) if existing is not None else None
    return DocumentAssembler(asset_cache=cache).assemble_files(title, fragment_paths, document)


def main(
    fragment_files: Sequence[str],
    output_file: str,
    title: Optional[str] = None,
    existing_file: Optional[str] = None,
    resource_dir: Optional[str] = None,
    debug_dir: Optional[str] = None,
) -> OutputDocument:
    """Run fragment loading → assembly → HTML rendering."""
    fragment_paths = [Path(name).resolve() for name in fragment_files]
    missing = [path for path in fragment_paths if not path.exists()]
    if missing:
        raise FileNotFoundError(f"Fragment file(s) not found: {', '.join(str(p) for p in missing)}")

    existing_path = Path(existing_file).resolve() if existing_file else None
    if existing_path is not None and not existing_path.exists():
        raise FileNotFoundError(f"Existing document not found: {existing_path}")

    LOGGER.info("Building tabbed display from %d fragment(s)", len(fragment_paths))
    document = build_tabbed_display(
        fragment_paths,
        title,
        existing=existing_path,
        resource_dir=Path(resource_dir) if resource_dir else None,
    )

    output_path = Path(output_file).resolve()
    LOGGER.info("Writing %s", output_path)
    HtmlRenderer(output_path).render(document)

    if debug_dir is not None:
        DebugDumper(Path(debug_dir)).dump(document)
    return document


def cli(argv: Optional[Sequence[str]] = None) -> None:
    """Command line wrapper around :func:`main`."""
    parser = argparse.ArgumentParser(description="Combine HTML fragments into one page with tab buttons")
    parser.add_argument("fragments", nargs="+", help="Fragment files, one tab each, in display order")
    parser.add_argument("--output", required=True, help="HTML file to write")
    parser.add_argument("--title", help="Heading shown above the tabs (ignored if --existing has one)")
    parser.add_argument("--existing", help="Previously generated display to merge new tabs into")
    parser.add_argument("--resources", help="Directory holding tab_button.css and tab_button.js")
    parser.add_argument("--debug-dir", help="Directory to write an assembly_report.json into")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    set_verbose(args.verbose)
    main(
        args.fragments,
        args.output,
        title=args.title,
        existing_file=args.existing,
        resource_dir=args.resources,
        debug_dir=args.debug_dir,
    )


if __name__ == "__main__":  # pragma: no cover
    cli()

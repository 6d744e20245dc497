"""
Command-line interface for pagedoc.

Usage:
    pagedoc info document.json
    pagedoc metrics document.json --page page-1
    pagedoc validate document.json
    pagedoc normalize legacy.json --output fixed.json
    pagedoc new --paper A4 --output blank.json
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .api import create_document
from .exceptions import PageDocError
from .export.json_exporter import JSONExporter, to_wire
from .importers.json_importer import load_document
from .models.document import Document
from .selectors import get_effective_page_metrics, get_pages
from .utils.enums import Orientation
from .utils.logger import LOG_LEVELS, configure_logging
from .utils.paper_sizes import PAPER_SIZES
from .validator import DocumentValidator


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pagedoc",
        description="pagedoc - page layout document tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pagedoc info document.json
  pagedoc metrics document.json --page page-1 --json
  pagedoc validate document.json --no-repair
  pagedoc normalize legacy.json -o fixed.json
  pagedoc new --paper LETTER --landscape -o blank.json
        """,
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Log level (default: WARNING)"
    )
    parser.add_argument(
        "--version", "-v",
        action="store_true",
        help="Show version and exit"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    info_parser = subparsers.add_parser("info", help="Show document summary")
    info_parser.add_argument("input", help="Input JSON document")
    info_parser.add_argument("--json", action="store_true", help="Output as JSON")

    metrics_parser = subparsers.add_parser("metrics", help="Show page rectangles")
    metrics_parser.add_argument("input", help="Input JSON document")
    metrics_parser.add_argument("--page", help="Only this page id")
    metrics_parser.add_argument("--json", action="store_true", help="Output as JSON")

    validate_parser = subparsers.add_parser("validate", help="Check document invariants")
    validate_parser.add_argument("input", help="Input JSON document")
    validate_parser.add_argument(
        "--no-repair",
        action="store_true",
        help="Validate the file as stored, without the load-time repair"
    )
    validate_parser.add_argument("--json", action="store_true", help="Output as JSON")

    normalize_parser = subparsers.add_parser("normalize", help="Repair and migrate a document")
    normalize_parser.add_argument("input", help="Input JSON document")
    normalize_parser.add_argument(
        "-o", "--output",
        help="Output file path (default: input name with .normalized.json)"
    )

    new_parser = subparsers.add_parser("new", help="Create a document with one page")
    new_parser.add_argument("-o", "--output", required=True, help="Output file path")
    new_parser.add_argument("--name", default="New Document", help="Document name")
    new_parser.add_argument("--paper", choices=sorted(PAPER_SIZES), default="A4", help="Paper size")
    new_parser.add_argument("--landscape", action="store_true", help="Landscape orientation")

    subparsers.add_parser("version", help="Show version information")

    return parser


def _load(path: str, repair: bool = True) -> Document:
    input_path = Path(path)
    if not input_path.exists():
        raise FileNotFoundError(f"File not found: {input_path}")
    return load_document(input_path, repair=repair)


def cmd_info(args, console: Console) -> int:
    """Handle info command."""
    doc = _load(args.input)
    info = {
        "id": doc.id,
        "name": doc.name,
        "version": doc.version,
        "unit": doc.unit.value,
        "presets": len(doc.preset_order),
        "pages": len(doc.page_order),
        "nodes": len(doc.nodes_by_id),
        "images": len(doc.assets.image_order) if doc.assets else 0,
        "guides": len(doc.guides.order) if doc.guides else 0,
    }

    if args.json:
        console.print_json(json.dumps(info))
        return 0

    table = Table(title=f"{doc.name} ({doc.id})")
    table.add_column("Property", style="cyan")
    table.add_column("Value", justify="right")
    for key, value in info.items():
        table.add_row(key, str(value))
    console.print(table)

    presets = Table(title="Presets")
    presets.add_column("Id", style="cyan")
    presets.add_column("Name")
    presets.add_column("Size", justify="right")
    presets.add_column("Pages", justify="right")
    for preset_id in doc.preset_order:
        preset = doc.presets_by_id.get(preset_id)
        if preset is None:
            continue
        used = sum(1 for page in get_pages(doc) if page.preset_id == preset_id)
        presets.add_row(preset_id, preset.name, f"{preset.size.width} x {preset.size.height}", str(used))
    console.print(presets)
    return 0


def cmd_metrics(args, console: Console) -> int:
    """Handle metrics command."""
    doc = _load(args.input)
    page_ids = [args.page] if args.page else list(doc.page_order)

    results = {}
    for page_id in page_ids:
        metrics = get_effective_page_metrics(doc, page_id)
        if metrics is None:
            console.print(f"[red]Page not found or preset missing:[/red] {page_id}")
            return 1
        results[page_id] = metrics

    if args.json:
        console.print_json(json.dumps({pid: to_wire(m.rects) for pid, m in results.items()}))
        return 0

    table = Table(title="Page metrics")
    table.add_column("Page", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Content", justify="right")
    table.add_column("Body", justify="right")
    table.add_column("Header", justify="right")
    table.add_column("Footer", justify="right")

    def fmt(rect) -> str:
        return f"{rect.x},{rect.y} {rect.w}x{rect.h}"

    for page_id, m in results.items():
        r = m.rects
        table.add_row(page_id, f"{r.page_w}x{r.page_h}", fmt(r.content_rect), fmt(r.body_rect),
                      fmt(r.header_rect), fmt(r.footer_rect))
    console.print(table)
    return 0


def cmd_validate(args, console: Console) -> int:
    """Handle validate command."""
    doc = _load(args.input, repair=not args.no_repair)
    validator = DocumentValidator(doc)
    validator.validate()

    if args.json:
        console.print_json(validator.generate_report("json"))
    else:
        console.print(validator.generate_report("text"), markup=False)
    return 1 if validator.has_errors() else 0


def cmd_normalize(args, console: Console) -> int:
    """Handle normalize command."""
    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else input_path.with_suffix(".normalized.json")

    doc = _load(args.input)
    if not JSONExporter(doc).export(output_path):
        return 1
    console.print(f"Saved: {output_path}")
    return 0


def cmd_new(args, console: Console) -> int:
    """Handle new command."""
    orientation = Orientation.LANDSCAPE if args.landscape else Orientation.PORTRAIT
    doc = create_document(args.name, paper=args.paper, orientation=orientation)
    if not JSONExporter(doc).export(args.output):
        return 1
    console.print(f"Created: {args.output}")
    return 0


def cmd_version(args=None, console: Optional[Console] = None) -> int:
    """Handle version command."""
    from .version import __version__
    (console or Console()).print(f"pagedoc v{__version__}")
    return 0


COMMANDS = {
    "info": cmd_info,
    "metrics": cmd_metrics,
    "validate": cmd_validate,
    "normalize": cmd_normalize,
    "new": cmd_new,
    "version": cmd_version,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    console = Console()

    if args.version:
        return cmd_version(args, console)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    configure_logging(args.log_level)
    try:
        return handler(args, console)
    except (PageDocError, FileNotFoundError) as e:
        Console(stderr=True).print(f"[red]Error:[/red] {e}", highlight=False)
        return 1


if __name__ == "__main__":
    sys.exit(main())

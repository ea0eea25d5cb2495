"""
sdmarkup CLI - rewrite data-* directives and browse the vocabulary.

Usage:
    # Rewrite a template with Microdata (default) or RDFa
    python -m sdmarkup parse listing.html --output listing.out.html
    python -m sdmarkup parse listing.html --semantic rdfa --suffix item

    # Read from stdin, write to stdout
    cat listing.html | python -m sdmarkup parse -

    # Browse the vocabulary
    python -m sdmarkup types --filter Object
    python -m sdmarkup inspect Movie
    python -m sdmarkup inspect Movie director

    # Show what a search engine would extract from a page
    python -m sdmarkup extract listing.out.html --syntax microdata
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .config import get_default_semantic
from .constants import SUPPORTED_SEMANTICS
from .parsers import MarkupParser
from .utils.logger import MarkupLogger, configure_global_logging, get_logger
from .vocabulary import VocabularyGraph, load_vocabulary

console = Console()


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _load_vocabulary(args: argparse.Namespace) -> VocabularyGraph:
    return load_vocabulary(Path(args.vocabulary) if args.vocabulary else None)


def cmd_parse(args: argparse.Namespace, logger: MarkupLogger) -> int:
    """Rewrite data-* directives in a document."""
    html = _read_input(args.file)
    parser = MarkupParser(args.semantic, suffix=args.suffix, vocabulary=_load_vocabulary(args))

    with logger.time_operation("rewrite", source=args.file):
        result = parser.parse(html)

    if args.output:
        Path(args.output).write_text(result, encoding="utf-8")
    else:
        sys.stdout.write(result)

    logger.log_document_rewritten(args.file, parser.get_semantic(), len(html), len(result))
    return 0


def cmd_types(args: argparse.Namespace, logger: MarkupLogger) -> int:
    """List available vocabulary types."""
    vocabulary = _load_vocabulary(args)
    names = vocabulary.get_available_types()
    if args.filter:
        names = [n for n in names if args.filter.lower() in n.lower()]

    table = Table(title=f"Vocabulary types ({len(names)})")
    table.add_column("Type", style="bold")
    table.add_column("Extends")
    table.add_column("Own properties", justify="right")

    for name in names:
        schema = vocabulary.get_type_schema(name)
        table.add_row(name, schema.extends or "-", str(len(schema.properties)))

    console.print(table)
    return 0


def cmd_inspect(args: argparse.Namespace, logger: MarkupLogger) -> int:
    """Show a type's properties, or one property's expected types."""
    vocabulary = _load_vocabulary(args)

    if not vocabulary.is_type_available(args.type):
        console.print(f"[red]Unknown type: {args.type}[/red]")
        return 1

    chain = " > ".join([args.type] + vocabulary.get_ancestors(args.type))

    if args.property:
        if not vocabulary.is_property_in_type(args.type, args.property):
            console.print(f"[red]Property {args.property} is not available in {chain}[/red]")
            return 1
        expected = vocabulary.get_expected_types(args.type, args.property)
        display = vocabulary.get_expected_display(args.type, args.property)
        console.print(f"[bold]{args.type}.{args.property}[/bold] ({chain})")
        console.print(f"  Expected types: {', '.join(expected) or '-'}")
        console.print(f"  Display: {display.value}")
        return 0

    table = Table(title=chain)
    table.add_column("Property", style="bold")
    table.add_column("Expected types")
    table.add_column("Display")

    for prop_name, expected in sorted(vocabulary.get_properties(args.type).items()):
        display = vocabulary.get_expected_display(args.type, prop_name)
        table.add_row(prop_name, ", ".join(expected), display.value)

    console.print(table)
    return 0


def cmd_extract(args: argparse.Namespace, logger: MarkupLogger) -> int:
    """Print the annotations found in a document as JSON."""
    from .extractors.structured_data import SUPPORTED_SYNTAXES, StructuredDataExtractor

    html = _read_input(args.file)
    syntaxes = [args.syntax] if args.syntax else SUPPORTED_SYNTAXES
    results = StructuredDataExtractor().summarize(html, base_url=args.base_url or "", syntaxes=syntaxes)

    payload = {r.source_type: {"types": r.types, "items": r.items} for r in results}
    sys.stdout.write(json.dumps(payload, indent=2, default=str) + "\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sdmarkup",
        description="Convert data-* directives into Microdata or RDFa Lite annotations",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level",
    )
    parser.add_argument("--log-file", help="Also log to this file under ./logs")
    parser.add_argument("--vocabulary", help="Vocabulary data file (defaults to the bundled schema.org subset)")

    subparsers = parser.add_subparsers(dest="command")

    parse_parser = subparsers.add_parser("parse", help="Rewrite data-* directives in an HTML file")
    parse_parser.add_argument("file", help="HTML file, or - for stdin")
    parse_parser.add_argument(
        "--semantic",
        default=get_default_semantic(),
        help=f"Output semantic: {' or '.join(SUPPORTED_SEMANTICS)}",
    )
    parse_parser.add_argument("--suffix", action="append", help="Extra data-* suffix (repeatable)")
    parse_parser.add_argument("-o", "--output", help="Write the result here instead of stdout")

    types_parser = subparsers.add_parser("types", help="List vocabulary types")
    types_parser.add_argument("--filter", help="Only types containing this text")

    inspect_parser = subparsers.add_parser("inspect", help="Show a type or property")
    inspect_parser.add_argument("type", help="Type name, e.g. Movie")
    inspect_parser.add_argument("property", nargs="?", help="Property name, e.g. director")

    extract_parser = subparsers.add_parser("extract", help="Extract Microdata/RDFa from an HTML file")
    extract_parser.add_argument("file", help="HTML file, or - for stdin")
    extract_parser.add_argument("--syntax", choices=["microdata", "rdfa"], help="Only this syntax")
    extract_parser.add_argument("--base-url", help="Base URL for resolving relative URLs")

    return parser


COMMANDS = {
    "parse": cmd_parse,
    "types": cmd_types,
    "inspect": cmd_inspect,
    "extract": cmd_extract,
}


def main(argv: Optional[list[str]] = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 1

    configure_global_logging(args.log_level)
    logger = get_logger(log_level=args.log_level, log_file=args.log_file)

    try:
        return command(args, logger)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"{args.command} failed", exception=e)
        return 1


if __name__ == "__main__":
    sys.exit(main())

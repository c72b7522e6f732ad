"""Main CLI entry point for the xml-combinators command-line tool.

Reads XML-subset documents from disk, parses them and prints either the
element trees or a validation report.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from xml_combinators import __version__
from xml_combinators.api import ParseResult, XMLSubsetParser
from xml_combinators.grammar import Element
from xml_combinators.shared import (
    ConfigError,
    DiagnosticSeverity,
    ParserConfig,
    TrailingInputPolicy,
    get_logger,
)

FileResult = Tuple[Path, ParseResult]

# Length of the failure slice quoted in text output
FAILURE_PREVIEW_LENGTH = 40


def load_config(args: argparse.Namespace) -> ParserConfig:
    """Build the parser configuration from a config file and command-line flags."""
    config = ParserConfig.strict()
    if getattr(args, "config", None):
        config = ParserConfig.from_json(args.config.read_text())

    overrides: Dict[str, Any] = {}
    if getattr(args, "allow_trailing", False):
        overrides["trailing_input"] = TrailingInputPolicy.IGNORE
    if getattr(args, "encoding", None):
        overrides["file_encoding"] = args.encoding
    return config.override(**overrides) if overrides else config


class DocumentProcessor:
    """Parses a batch of files with one shared parser."""

    def __init__(self, config: ParserConfig):
        self.config = config
        self.parser = XMLSubsetParser(config=config)
        self.logger = get_logger(__name__, config.correlation_id, "cli_processor")

    def process(self, paths: List[Path]) -> List[FileResult]:
        results = []
        for path in paths:
            result = self.parser.parse_file(path)
            self.logger.debug(
                "Processed file",
                extra={"file": str(path), "success": result.success}
            )
            results.append((path, result))
        return results


def render_outline(element: Element, indent: str = "  ", level: int = 0) -> List[str]:
    """Render an element tree as an indented outline, one element per line."""
    attributes = "".join(f' {key}="{value}"' for key, value in element.attributes)
    lines = [f"{indent * level}{element.name}{attributes}"]
    for child in element.children:
        lines.extend(render_outline(child, indent, level + 1))
    return lines


def _failure_message(result: ParseResult) -> str:
    errors = [
        d for d in result.diagnostics
        if d.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
    ]
    message = errors[0].message if errors else "Parse failed"
    if result.source_length:
        snippet = result.remaining[:FAILURE_PREVIEW_LENGTH]
        return f"{message} at offset {result.offset}: {snippet!r}"
    return message


def format_results(results: List[FileResult], format_type: str) -> str:
    """Format parsed trees for output."""
    if format_type == "json":
        payload = []
        for path, result in results:
            entry = result.to_dict()
            entry["file"] = str(path)
            payload.append(entry)
        return json.dumps(payload, indent=2)

    lines: List[str] = []
    for path, result in results:
        if not result.success:
            lines.append(f"✗ {path}: {_failure_message(result)}")
            continue
        if len(results) > 1:
            lines.append(f"# {path}")
        if format_type == "xml":
            lines.append(result.element.to_xml())
        else:
            lines.extend(render_outline(result.element))
        if result.remaining.strip():
            lines.append(f"(unconsumed: {result.remaining.strip()[:FAILURE_PREVIEW_LENGTH]!r})")
    return "\n".join(lines)


def format_validation(results: List[FileResult], format_type: str) -> str:
    """Format a pass/fail report."""
    if format_type == "json":
        return json.dumps(
            [
                {
                    "file": str(path),
                    "valid": result.success,
                    "offset": None if result.success else result.offset,
                    "errors": [
                        d.message for d in result.diagnostics
                        if d.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
                    ],
                }
                for path, result in results
            ],
            indent=2,
        )

    valid_count = sum(1 for _, result in results if result.success)
    lines = [f"Validated {len(results)} files, {valid_count} valid", "-" * 50]
    for path, result in results:
        if result.success:
            lines.append(f"✓ {path} ({result.element_count} elements)")
        else:
            lines.append(f"✗ {path}")
            lines.append(f"   Error: {_failure_message(result)}")
    return "\n".join(lines)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="xml-combinators",
        description="Parse documents written in a small XML subset"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Quiet output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_common(command: argparse.ArgumentParser) -> None:
        command.add_argument("paths", nargs="+", type=Path, help="Files to parse")
        command.add_argument(
            "--allow-trailing",
            action="store_true",
            help="Accept input left over after the root element"
        )
        command.add_argument("--encoding", help="File encoding (default: utf-8)")
        command.add_argument("--config", "-c", type=Path, help="JSON configuration file")

    parse_parser = subparsers.add_parser("parse", help="Parse files and print their trees")
    add_common(parse_parser)
    parse_parser.add_argument(
        "--format", "-f",
        choices=["json", "text", "xml"],
        default="text",
        help="Output format (default: text)"
    )
    parse_parser.add_argument("--output", "-o", type=Path, help="Output file (default: stdout)")

    validate_parser = subparsers.add_parser("validate", help="Check that files parse")
    add_common(validate_parser)
    validate_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)"
    )

    return parser


def cmd_parse(args: argparse.Namespace, config: ParserConfig) -> int:
    """Handle parse command."""
    results = DocumentProcessor(config).process(args.paths)
    formatted_output = format_results(results, args.format)

    if args.output:
        try:
            args.output.write_text(formatted_output + "\n")
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(formatted_output)

    return 0 if all(result.success for _, result in results) else 1


def cmd_validate(args: argparse.Namespace, config: ParserConfig) -> int:
    """Handle validate command."""
    results = DocumentProcessor(config).process(args.paths)
    print(format_validation(results, args.format))
    return 0 if all(result.success for _, result in results) else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        config = load_config(args)
    except (ConfigError, OSError) as e:
        print(f"Could not load configuration: {e}", file=sys.stderr)
        return 1

    try:
        if args.command == "parse":
            return cmd_parse(args, config)
        return cmd_validate(args, config)
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())

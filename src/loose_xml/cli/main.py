"""Main CLI entry point for the loose-xml command-line tool.

Provides checking of entity definition files, re-formatting and a token dump
for debugging the tokenizer.
"""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from loose_xml import __version__
from loose_xml.api import LooseXMLParser
from loose_xml.shared import (
    ConfigError,
    DiagnosticSeverity,
    LooseXMLConfig,
    configure_logging,
    get_logger,
)
from loose_xml.tokenization import Tokenizer
from loose_xml.tree import ParseError, format_element

XML_SUFFIXES = {".xml"}
MAX_ERRORS_SHOWN = 5


def load_config(config_path: Optional[Path]) -> LooseXMLConfig:
    """Load configuration from a JSON file, or return the defaults."""
    if config_path is None:
        return LooseXMLConfig.default()
    return LooseXMLConfig.from_json(config_path.read_text(encoding="utf-8"))


def find_xml_files(path: Path, recursive: bool = False) -> Iterator[Path]:
    """Expand a path argument into the documents it names."""
    if path.is_dir():
        pattern = "**/*" if recursive else "*"
        for candidate in sorted(path.glob(pattern)):
            if candidate.is_file() and candidate.suffix.lower() in XML_SUFFIXES:
                yield candidate
    else:
        yield path


class FileChecker:
    """Parses files and summarizes their syntax errors."""

    def __init__(self, config: LooseXMLConfig, strict: bool = False) -> None:
        self.parser = LooseXMLParser(config)
        self.strict = strict
        self.logger = get_logger(__name__, config.logging.correlation_id, "cli_checker")

    def check_file(self, file_path: Path) -> Dict[str, Any]:
        """Parse a single file and return a result summary."""
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warning("Could not read file", extra={"file_path": str(file_path)})
            return {"file": str(file_path), "success": False, "error": str(e)}

        if self.strict:
            try:
                root = self.parser.parse(text)
                errors: List[ParseError] = []
            except ParseError as e:
                root = None
                errors = [e]
            severity = DiagnosticSeverity.CRITICAL
        else:
            root, errors = self.parser.parse_lenient(text)
            severity = DiagnosticSeverity.ERROR

        metrics = self.parser.last_metrics
        return {
            "file": str(file_path),
            "success": not errors,
            "root": root.tag if root is not None else None,
            "element_count": metrics.elements_built if metrics else 0,
            "processing_time_ms": metrics.processing_time_ms if metrics else 0.0,
            "diagnostics": [
                error.to_diagnostic(severity, self.parser.correlation_id).to_dict()
                for error in errors
            ],
        }

    def check_paths(self, paths: List[Path], recursive: bool = False) -> List[Dict[str, Any]]:
        """Check every document named by ``paths``."""
        return [
            self.check_file(file_path)
            for path in paths
            for file_path in find_xml_files(path, recursive)
        ]


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="loose-xml",
        description="Check, format and inspect loose-xml entity definition files"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path (JSON)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    check_parser = subparsers.add_parser("check", help="Report syntax errors")
    check_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Files or directories to check"
    )
    check_parser.add_argument(
        "--recursive", "-r",
        action="store_true",
        help="Recursively process directories"
    )
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Stop at the first error in each file"
    )
    check_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)"
    )

    format_parser = subparsers.add_parser("format", help="Re-format a file")
    format_parser.add_argument("path", type=Path, help="File to format")
    format_parser.add_argument(
        "--indent",
        type=int,
        help="Spaces per nesting level"
    )
    format_parser.add_argument(
        "--line-separator",
        help="Line separator, e.g. '\\r\\n' (escapes are interpreted)"
    )
    format_parser.add_argument(
        "--no-self-close",
        action="store_true",
        help="Write empty elements as <A></A>"
    )
    format_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    tokens_parser = subparsers.add_parser("tokens", help="Dump the token stream")
    tokens_parser.add_argument("path", type=Path, help="File to tokenize")

    return parser


def format_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format check results for output."""
    if format_type == "json":
        return json.dumps(results, indent=2)

    if not results:
        return "No files to check."

    clean = sum(1 for result in results if result.get("success", False))
    lines = [f"Checked {len(results)} files, {clean} without errors", "-" * 60]

    for result in results:
        status = "ok  " if result.get("success", False) else "FAIL"
        lines.append(f"{status} {result['file']}")

        if "error" in result:
            lines.append(f"     {result['error']}")
            continue

        diagnostics = result.get("diagnostics", [])
        for diagnostic in diagnostics[:MAX_ERRORS_SHOWN]:
            position = diagnostic.get("position") or {}
            lines.append(
                f"     {position.get('line', '?')}:{position.get('column', '?')} "
                f"{diagnostic['message']}"
            )
        if len(diagnostics) > MAX_ERRORS_SHOWN:
            lines.append(f"     ... and {len(diagnostics) - MAX_ERRORS_SHOWN} more errors")

    return "\n".join(lines)


def cmd_check(args: argparse.Namespace, config: LooseXMLConfig) -> int:
    """Handle check command."""
    checker = FileChecker(config, strict=args.strict)
    results = checker.check_paths(args.paths, args.recursive)
    print(format_results(results, args.format))

    if not results:
        return 1
    return 0 if all(result.get("success", False) for result in results) else 1


def cmd_format(args: argparse.Namespace, config: LooseXMLConfig) -> int:
    """Handle format command."""
    overrides: Dict[str, Any] = {}
    if args.indent is not None:
        overrides["indent"] = args.indent
    if args.line_separator is not None:
        overrides["line_separator"] = (
            args.line_separator.encode("utf-8").decode("unicode_escape")
        )
    if args.no_self_close:
        overrides["self_close"] = False
    format_config = replace(config.format, **overrides)

    parser = LooseXMLParser(config)
    root, errors = parser.parse_lenient(args.path.read_text(encoding="utf-8"))
    for error in errors:
        print(f"{args.path}: {error}", file=sys.stderr)

    output = format_element(root, format_config) + format_config.line_separator
    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Formatted output written to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(output)
    return 0 if not errors else 1


def cmd_tokens(args: argparse.Namespace) -> int:
    """Handle tokens command."""
    tokenizer = Tokenizer(args.path.read_text(encoding="utf-8"))
    for token in tokenizer:
        print(f"{tokenizer.position()}\t{token.kind.name}\t{token.text!r}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
    except (OSError, ValueError, ConfigError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 2

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")
    else:
        configure_logging(config.logging.level)

    try:
        if args.command == "check":
            return cmd_check(args, config)
        if args.command == "format":
            return cmd_format(args, config)
        if args.command == "tokens":
            return cmd_tokens(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1
    except ConfigError as e:
        print(f"Invalid option: {e}", file=sys.stderr)
        return 2
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())

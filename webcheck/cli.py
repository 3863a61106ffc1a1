"""CLI entrypoints for webcheck commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .file_scanner import FileScanner
from .logging import configure_logging
from .models import AnalysisResponse
from .orchestrator import StaticAnalyzer
from .report import format_text_report

_FAIL_THRESHOLDS = ("error", "warning", "never")


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    def defaults(value: object) -> dict[str, object]:
        return {"default": argparse.SUPPRESS if suppress_default else value}

    volume = parser.add_mutually_exclusive_group()
    volume.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Increase log verbosity for troubleshooting.",
        **defaults(False),
    )
    volume.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log warnings and errors.",
        **defaults(False),
    )
    parser.add_argument(
        "--log-file",
        metavar="FILE",
        help="Also write debug-level logs to FILE.",
        **defaults(None),
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webcheck",
        description="Check web source files for unbalanced structure and undefined selectors.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Analyze a directory or a single file.",
    )
    _add_logging_options(check_parser, suppress_default=True)
    check_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory or file to analyze (defaults to current directory).",
    )
    check_parser.add_argument(
        "--config",
        default=None,
        help="Path to a .webcheck.yml file (defaults to the one beside PATH).",
    )
    check_parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format for the report.",
    )
    check_parser.add_argument(
        "--fail-on",
        choices=_FAIL_THRESHOLDS,
        default="error",
        help="Lowest severity that makes the command exit with status 1.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP analysis service.",
    )
    _add_logging_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for webcheck commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=Path(args.log_file) if args.log_file else None,
    )

    if args.command == "check":
        target = Path(args.path)
        config_source = Path(args.config) if args.config else target
        try:
            config = load_config(config_source)
            analyzer = StaticAnalyzer.from_config(config)
            files = FileScanner(exclude_paths=config.exclude_paths).scan(target)
        except (ConfigError, ValueError) as exc:
            parser.exit(1, f"webcheck: invalid configuration: {exc}\n")
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")

        response = analyzer.analyze(files)
        if args.format == "json":
            print(json.dumps(response.to_dict(), indent=2))
        else:
            print(format_text_report(response))
        if _should_fail(response, args.fail_on):
            parser.exit(1)
    elif args.command == "serve":  # pragma: no cover - integration path
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _should_fail(response: AnalysisResponse, threshold: str) -> bool:
    summary = response.lint.summary
    if threshold == "error":
        return summary.error_count > 0
    if threshold == "warning":
        return summary.error_count > 0 or summary.warning_count > 0
    return False


if __name__ == "__main__":
    main(sys.argv[1:])

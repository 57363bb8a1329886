"""Command line interface for washing log output."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.console import Console
from rich.text import Text

from .duration import format_duration
from .errors import ErrorCode, LogWashError
from .file_manager import FileManager
from .margin import render_entry_margin, render_margin
from .models import LogEntry, LogSettings, LogStyle, WashResult
from .pagination import grow_cutoff
from .reflog import decode_reflog_subject
from .runtime import load_settings
from .theme import LOG_THEME
from .trace import validate_trace_spec
from .washer import LogWasher

logger = logging.getLogger(__name__)

file_manager = FileManager()


def _print_payload(payload: dict[str, Any], as_json: bool) -> None:
    if as_json:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    status = payload.get("status", "unknown").upper()
    message = payload.get("message", "")
    print(f"[{status}] {message}")

    if payload.get("status") == "error":
        error_code = payload.get("error_code", "")
        suggestion = payload.get("suggestion", "")
        if error_code:
            print(f"error_code: {error_code}")
        if suggestion:
            print(f"suggestion: {suggestion}")
        return

    for key in (
        "duration",
        "label",
        "text",
        "style",
        "command",
        "options",
        "type",
        "argument",
        "cutoff",
    ):
        if key in payload and payload[key] not in ("", None):
            print(f"{key}: {payload[key]}")


def _error_payload(exc: Exception) -> dict[str, Any]:
    if isinstance(exc, LogWashError):
        return exc.to_payload()
    if isinstance(exc, ValidationError):
        errors: Any
        try:
            errors = exc.errors(include_context=False, include_input=False)
        except TypeError:
            errors = exc.errors()
        return {
            "status": "error",
            "error_code": ErrorCode.INVALID_CONFIG.value,
            "message": "Settings validation failed",
            "suggestion": "Check config file, LOGWASH_* variables and command arguments.",
            "details": {"errors": errors},
        }
    if isinstance(exc, ValueError):
        return {
            "status": "error",
            "error_code": ErrorCode.INVALID_CONFIG.value,
            "message": str(exc),
            "suggestion": "Fix the LOGWASH_* environment variables and retry.",
            "details": {},
        }
    logger.exception("Unhandled CLI exception", exc_info=exc)
    return {
        "status": "error",
        "error_code": ErrorCode.INTERNAL_ERROR.value,
        "message": str(exc),
        "suggestion": "Retry with --log-level debug for diagnostics.",
        "details": {},
    }


def _render_wash(result: WashResult, settings: LogSettings, log_view: bool) -> None:
    console = Console(theme=LOG_THEME, highlight=False, soft_wrap=True)
    entries: dict[str, LogEntry] = {entry.hash: entry for entry in result.entries if entry.hash}
    margin_width = settings.margin.total_width
    body_width = max(20, console.width - margin_width - 1)
    for line in result.lines:
        if not settings.show_margin or line.kind in ("more", "separator"):
            console.print(line.text)
            continue
        body = line.text.copy()
        body.truncate(body_width, overflow="ellipsis", pad=True)
        entry = entries.get(line.entry_hash or "") if line.kind == "entry" else None
        if entry is not None:
            margin = render_entry_margin(entry, settings.margin, log_view=log_view)
        else:
            margin = render_margin(None, None, settings.margin, log_view=log_view)
        console.print(Text.assemble(body, " ", margin))


def _read_input(path_value: str) -> str:
    if path_value and path_value != "-":
        return file_manager.read_text(Path(path_value).expanduser())
    return sys.stdin.read()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="logwash", description="Wash version-control log output")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="warning",
        help="Diagnostics written to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    wash = subparsers.add_parser("wash", help="Parse and render raw log output")
    wash.add_argument(
        "-s",
        "--style",
        choices=[style.value for style in LogStyle],
        default=LogStyle.ONELINE.value,
        help="Grammar used to parse the input",
    )
    wash.add_argument("-f", "--file", default="", help="Read log output from a file (default: stdin)")
    wash.add_argument("-n", "--cutoff", type=int, default=None, help="Maximum entries shown")
    wash.add_argument("--all", action="store_true", help="Use the infinite cutoff")
    wash.add_argument(
        "--no-pagination",
        action="store_true",
        help="Not a paged log view: no cutoff and no reserved fringe column",
    )
    wash.add_argument("--unicode-graph", action="store_true", help="Draw the graph with unicode glyphs")
    wash.add_argument("--no-margin", action="store_true", help="Hide the author/date margin")
    wash.add_argument("--abbrev", type=int, default=None, help="Abbreviated hash length")
    wash.add_argument("--config", default="", help="YAML settings file")
    wash.add_argument("--json", action="store_true", help="Output machine-readable JSON")

    duration = subparsers.add_parser("duration", help="Format a duration in seconds")
    duration.add_argument("seconds", type=float, help="Duration in seconds")
    duration.add_argument("--unit-width", type=int, default=None, help="1 for abbreviations")
    duration.add_argument("--config", default="", help="YAML settings file")
    duration.add_argument("--json", action="store_true", help="Output machine-readable JSON")

    reflog = subparsers.add_parser("reflog-subject", help="Decode a reflog subject")
    reflog.add_argument("subject", help="Subject such as 'commit (amend): message'")
    reflog.add_argument("--json", action="store_true", help="Output machine-readable JSON")

    trace = subparsers.add_parser("trace", help="Validate a line-trace expression")
    trace.add_argument("trace", help="START,END or /REGEX/ or :FUNCNAME")
    trace.add_argument("path", help="File to trace")
    trace.add_argument("--json", action="store_true", help="Output machine-readable JSON")

    more = subparsers.add_parser("more", help="Compute the cutoff for the next pass")
    more.add_argument("-n", "--cutoff", type=int, default=None, help="Current cutoff")
    grow = more.add_mutually_exclusive_group()
    grow.add_argument("--add", type=int, default=None, help="Grow the cutoff by this many entries")
    grow.add_argument("--all", action="store_true", help="Jump to the infinite cutoff")
    more.add_argument("--config", default="", help="YAML settings file")
    more.add_argument("--json", action="store_true", help="Output machine-readable JSON")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    as_json = bool(getattr(args, "json", False))
    logging.basicConfig(level=args.log_level.upper(), stream=sys.stderr)

    try:
        if args.command == "wash":
            settings = load_settings(
                config_path=args.config,
                overrides={
                    "abbrev": args.abbrev,
                    "unicode_graph": True if args.unicode_graph else None,
                    "show_margin": False if args.no_margin else None,
                },
            )
            log_view = not args.no_pagination
            cutoff = settings.infinite_length if args.all else args.cutoff
            result = LogWasher(settings).wash(
                _read_input(args.file),
                args.style,
                cutoff=cutoff,
                log_view=log_view,
            )
            if not as_json:
                _render_wash(result, settings, log_view)
                return 0
            response = result.to_payload()
            response["message"] = f"Washed {result.produced_count} entries"
        elif args.command == "duration":
            settings = load_settings(config_path=args.config)
            unit_width = settings.margin.unit_width if args.unit_width is None else args.unit_width
            response = {
                "status": "success",
                "message": "Duration formatted",
                "seconds": args.seconds,
                "duration": format_duration(args.seconds, settings.margin.duration_spec, unit_width),
            }
        elif args.command == "reflog-subject":
            decoded = decode_reflog_subject(args.subject)
            response = {
                "status": "success",
                "message": "Reflog subject decoded",
                "command": decoded.command,
                "options": decoded.options,
                "type": decoded.type,
                "label": decoded.label,
                "text": decoded.text,
                "style": decoded.style.value,
            }
        elif args.command == "trace":
            response = {
                "status": "success",
                "message": "Trace is valid",
                "argument": f"-L{validate_trace_spec(args.trace, args.path)}",
            }
        else:
            settings = load_settings(config_path=args.config)
            current = settings.cutoff_length if args.cutoff is None else args.cutoff
            grow_arg: int | bool | None = True if args.all else args.add
            response = {
                "status": "success",
                "message": "Next cutoff computed",
                "previous_cutoff": current,
                "cutoff": grow_cutoff(current, grow_arg, settings.infinite_length),
            }

        _print_payload(response, as_json=as_json)
        return 0
    except Exception as exc:  # noqa: BLE001
        payload = _error_payload(exc)
        _print_payload(payload, as_json=as_json)
        return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))

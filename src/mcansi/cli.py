import argparse
import logging
import sys
from pathlib import Path

from rich.logging import RichHandler

from mcansi import __version__
from mcansi.console import enable_virtual_terminal
from mcansi.patterns import contains_legacy_codes, strip_legacy_codes
from mcansi.settings import Schema, SettingsError, load_settings
from mcansi.settings_schema import SCHEMA
from mcansi.transcoder import MalformedColorEscape, transcode

log = logging.getLogger("mcansi")


def setup_logging(verbose: bool = False) -> None:
    """Log to stderr with Rich."""
    handler = RichHandler(show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    log.handlers[:] = [handler]
    log.setLevel(logging.DEBUG if verbose else logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcansi", description="Convert section sign color codes to ANSI"
    )
    parser.add_argument("text", nargs="*", help="Text to convert (default: read stdin)")
    parser.add_argument(
        "--legacy",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Collapse RGB colors to the 16 palette colors",
    )
    parser.add_argument("--max-retries", type=int, help="Passes after a markup failure")
    parser.add_argument(
        "--check", action="store_true", help="Exit 0 if the text contains legacy codes"
    )
    parser.add_argument("--strip", action="store_true", help="Remove escapes instead")
    parser.add_argument("--config", type=Path, help="Path to settings JSON")
    parser.add_argument("--verbose", "-v", action="store_true")
    parser.add_argument("--version", action="version", version=f"mcansi v{__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(Schema(SCHEMA), args.config)
        legacy = settings.get("transcode.legacy", bool)
        max_retries = settings.get("transcode.max_retries", int)
        enable_windows_ansi = settings.get("console.enable_windows_ansi", bool)
    except SettingsError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    if args.legacy is not None:
        legacy = args.legacy
    if args.max_retries is not None:
        max_retries = args.max_retries

    text = " ".join(args.text) if args.text else sys.stdin.read()

    if args.check:
        return 0 if contains_legacy_codes(text) else 1

    if args.strip:
        sys.stdout.write(strip_legacy_codes(text))
        return 0

    if enable_windows_ansi and enable_virtual_terminal():
        log.debug("Enabled virtual terminal processing")

    try:
        output = transcode(text, legacy=legacy, max_retries=max_retries)
    except MalformedColorEscape as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    sys.stdout.write(output)
    return 0


def run() -> None:
    sys.exit(main())

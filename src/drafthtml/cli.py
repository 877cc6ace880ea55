"""Command-line entry points for converting files.

``drafthtml-render`` turns raw JSON content into HTML; ``drafthtml-parse``
turns HTML into raw JSON content.  Both read a file argument or stdin.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from logging.handlers import RotatingFileHandler

from rich.console import Console

from drafthtml import __version__
from drafthtml.config import Settings, get_settings
from drafthtml.export import to_html
from drafthtml.input_pipeline import from_html

console = Console()
err_console = Console(stderr=True)

_EXIT_UNREADABLE = 2
_CONSOLE_HANDLER_NAME = "drafthtml.console"


def _setup_logging(settings: Settings) -> None:
    """Configure logging to the console and, optionally, a rotating file.

    Runs once per process; later calls leave the installed handlers alone.
    """
    root_logger = logging.getLogger()
    if any(h.get_name() == _CONSOLE_HANDLER_NAME for h in root_logger.handlers):
        return
    root_logger.setLevel(logging.DEBUG)

    # Console handler - less verbose
    console_handler = logging.StreamHandler()
    console_handler.set_name(_CONSOLE_HANDLER_NAME)
    console_handler.setLevel(settings.log.level)
    console_formatter = logging.Formatter("%(levelname)s: %(message)s")
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if settings.log.log_dir is None:
        return

    log_dir = settings.log.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "drafthtml.log"

    # File handler - detailed logging with rotation (10MB, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(file_formatter)
    root_logger.addHandler(file_handler)

    logging.info("Logging configured. Log file: %s", log_file.absolute())


def _build_parser(prog: str, description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description=description)
    parser.add_argument(
        "file",
        nargs="?",
        help="input file (reads stdin when omitted or '-')",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def _read_input(path: str | None) -> str | None:
    """Read the input file or stdin; None (with a message) if unreadable."""
    if path is None or path == "-":
        return sys.stdin.read()
    try:
        with open(path, encoding="utf-8") as handle:
            return handle.read()
    except OSError as exc:
        err_console.print(f"[red]Cannot read {path}:[/] {exc}")
        return None


def run_render(argv: list[str] | None = None) -> int:
    """Render raw JSON content to HTML on stdout.  Returns the exit status."""
    args = _build_parser(
        "drafthtml-render", "Convert raw rich text JSON content to HTML."
    ).parse_args(argv)
    settings = get_settings()
    _setup_logging(settings)

    source = _read_input(args.file)
    if source is None:
        return _EXIT_UNREADABLE

    html = to_html(source, settings)
    console.print(html, markup=False, highlight=False, soft_wrap=True)
    return 0


def run_parse(argv: list[str] | None = None) -> int:
    """Parse HTML into raw JSON content on stdout.  Returns the exit status."""
    args = _build_parser(
        "drafthtml-parse", "Convert HTML to raw rich text JSON content."
    ).parse_args(argv)
    settings = get_settings()
    _setup_logging(settings)

    source = _read_input(args.file)
    if source is None:
        return _EXIT_UNREADABLE

    document = from_html(source, settings)
    console.print_json(json.dumps(document.to_dict(), ensure_ascii=False))
    return 0


def render() -> None:
    """Entry point for ``drafthtml-render``."""
    sys.exit(run_render())


def parse() -> None:
    """Entry point for ``drafthtml-parse``."""
    sys.exit(run_parse())

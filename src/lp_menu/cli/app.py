"""Command-line entry point for lp-menu.

Parses arguments into a :class:`~lp_menu.core.models.MenuConfig`, routes
to the option menu or to ``doctor``, and owns the process exit code.

:func:`cli` is the only place exceptions are turned into messages:
:class:`~lp_menu.exceptions.LpMenuError` prints its message and hint,
``KeyboardInterrupt`` exits with 130, anything else is reported as an
unexpected error.  The menu itself reports recoverable errors inline
and keeps running, so only start-up failures normally reach this far.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from lp_menu.cli import exit_codes
from lp_menu.cli.console import configure_logging, console, escape_markup
from lp_menu.core.models import MenuConfig
from lp_menu.exceptions import LpMenuError
from lp_menu.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``lp-menu [FILE ...]`` — open the option menu for the given files
      (or for the text buffer when no files are given)
    * ``lp-menu doctor``     — environment diagnostics
    * ``lp-menu --version``
    """
    parser = argparse.ArgumentParser(
        prog="lp-menu",
        description="Interactive option menu for the CUPS lp command.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Files to print, or 'doctor' to run diagnostics.",
    )
    parser.add_argument(
        "--text",
        default="",
        help="Initial text buffer, printed via stdin when no files are given.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the lp command line instead of running it.",
    )
    parser.add_argument(
        "--lp",
        default="lp",
        metavar="PATH",
        help="lp executable (default: %(default)s).",
    )
    parser.add_argument(
        "--lpstat",
        default="lpstat",
        metavar="PATH",
        help="lpstat executable used for printer completion (default: %(default)s).",
    )
    parser.add_argument(
        "--lpoptions",
        default="lpoptions",
        metavar="PATH",
        help="lpoptions executable used for option discovery (default: %(default)s).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=5.0,
        metavar="SECONDS",
        help="Time limit for lpstat/lpoptions queries (default: %(default)s).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every external command and its exit status.",
    )
    return parser


def _config_from_args(args: argparse.Namespace) -> MenuConfig:
    return MenuConfig(
        lp=args.lp,
        lpstat=args.lpstat,
        lpoptions=args.lpoptions,
        timeout=args.timeout,
        files=tuple(Path(name).expanduser() for name in args.files),
        text=args.text,
        dry_run=args.dry_run,
    )


# ---------------------------------------------------------------------------
# Command dispatch (no business logic)
# ---------------------------------------------------------------------------

def _handle_menu(config: MenuConfig) -> int:
    """Run the interactive option menu.

    Flow:
    1. Instantiate the subprocess runner + print service.
    2. Open a menu session seeded with the files and text buffer.
    3. Loop until the user quits.
    """
    from lp_menu.cli.menu import MenuSession
    from lp_menu.core.print_service import PrintService
    from lp_menu.infra.cups_commands import SubprocessRunner

    service = PrintService(SubprocessRunner(), config)
    session = MenuSession(
        service,
        files=config.files,
        buffer=config.text,
        dry_run=config.dry_run,
    )
    return session.run()


def _handle_doctor(config: MenuConfig) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from lp_menu.cli.doctor import run_doctor

    return run_doctor(config)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the lp-menu CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_intermixed_args(argv)
    configure_logging(args.verbose)

    if args.files == ["doctor"]:
        args.files = []
        return _handle_doctor(_config_from_args(args))

    return _handle_menu(_config_from_args(args))


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except LpMenuError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape_markup(exc)}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(exc)}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)

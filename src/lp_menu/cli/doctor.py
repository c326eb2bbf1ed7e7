"""``lp-menu doctor`` — environment diagnostics command.

Probes the interpreter, the questionary prompt library and the three
CUPS client executables the menu shells out to, then renders one row
per probe.  ``lp`` is the only hard requirement: without ``lpstat`` and
``lpoptions`` the menu still works, it just loses completion and
printer-specific options.

Rendering uses a Rich table when Rich is importable and a fixed-width
plain-text table on stderr otherwise.
"""

from __future__ import annotations

import platform
import re
import sys
from collections.abc import Sequence
from typing import NamedTuple

from lp_menu.cli import exit_codes
from lp_menu.cli.console import console, escape_markup
from lp_menu.core.models import MenuConfig
from lp_menu.infra.tool_detector import ToolStatus, detect_tool
from lp_menu.version import __version__

OK = "OK"
WARN = "WARN"
FAIL = "FAIL"

_LEVEL_STYLE = {OK: "green", WARN: "yellow", FAIL: "red"}
_MARKUP_RE = re.compile(r"\[/?[a-z ]+\]")


class Check(NamedTuple):
    """One diagnostics row; *status* is ``OK``, ``WARN`` or ``FAIL``."""

    label: str
    value: str
    status: str


# ---------------------------------------------------------------------------
# Probes
# ---------------------------------------------------------------------------

def _python_version_check() -> Check:
    version = platform.python_version()
    if sys.version_info[:2] >= (3, 10):
        return Check("Python", version, OK)
    return Check("Python", f"{version} (>=3.10 required)", FAIL)


def _questionary_check() -> Check:
    try:
        import questionary
    except ImportError:
        return Check("questionary", "NOT INSTALLED", FAIL)
    return Check("questionary", str(getattr(questionary, "__version__", "unknown")), OK)


def _tool_check(tool: ToolStatus, *, required: bool) -> Check:
    """Row for one CUPS client executable.

    A missing required tool fails the run; a missing query tool only
    disables completion and warns.
    """
    if tool.found:
        return Check(tool.name, str(tool.path) if tool.path else "found", OK)
    return Check(tool.name, "not found", FAIL if required else WARN)


def _os_check() -> Check:
    system = platform.system()
    display = "macOS" if system == "Darwin" else system
    value = f"{display} {platform.release()} ({platform.machine()})"
    if system == "Windows":
        return Check("OS", f"{value}, no CUPS", WARN)
    return Check("OS", value, OK)


def _lpmenu_version_check() -> Check:
    return Check("lp-menu", __version__, OK)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _say(markup: str, *, rich_available: bool) -> None:
    if rich_available:
        console.print(markup)
    else:
        print(_MARKUP_RE.sub("", markup), file=sys.stderr)


def _render_table(checks: Sequence[Check]) -> bool:
    """Render *checks*; return whether Rich was available."""
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        print("\nlp-menu doctor", file=sys.stderr)
        print("=" * 60, file=sys.stderr)
        print(f"{'Component':<12} {'Value':<38} Status", file=sys.stderr)
        print("-" * 60, file=sys.stderr)
        for check in checks:
            print(f"{check.label:<12} {check.value:<38} {check.status}", file=sys.stderr)
        print(file=sys.stderr)
        return False

    table = Table(title="lp-menu doctor", header_style="bold cyan", border_style="dim")
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=6)
    for check in checks:
        style = _LEVEL_STYLE[check.status]
        table.add_row(
            escape_markup(check.label),
            escape_markup(check.value),
            f"[{style}]{check.status}[/{style}]",
        )

    console.print()
    console.print(table)
    console.print()
    return True


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(config: MenuConfig | None = None) -> int:
    """Run every probe and print the summary.

    The executables probed are the ones configured in *config*, so
    ``lp-menu --lp /opt/cups/bin/lp doctor`` checks the same binary the
    menu would run.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` unless a probe reports ``FAIL``.
    """
    config = config or MenuConfig()
    tools = [detect_tool(name) for name in (config.lp, config.lpstat, config.lpoptions)]
    checks = [
        _lpmenu_version_check(),
        _python_version_check(),
        _questionary_check(),
        *(_tool_check(tool, required=index == 0) for index, tool in enumerate(tools)),
        _os_check(),
    ]

    rich_available = _render_table(checks)

    missing = [tool for tool in tools if not tool.found]
    if missing:
        _say("[yellow]Some CUPS client tools are missing.[/yellow]", rich_available=rich_available)
        _say("Install using one of the following commands:\n", rich_available=rich_available)
        for command in missing[0].install_commands:
            _say(f"  [bold]{command}[/bold]", rich_available=rich_available)
        _say("", rich_available=rich_available)

    if any(check.status == FAIL for check in checks):
        _say("[bold red]Some checks failed.[/bold red]", rich_available=rich_available)
        return exit_codes.GENERAL_ERROR

    _say("[bold green]All checks passed.[/bold green]", rich_available=rich_available)
    return exit_codes.SUCCESS

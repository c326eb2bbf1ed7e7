"""Infrastructure: CUPS client tool detection and platform guidance.

Locates ``lp``, ``lpstat`` and ``lpoptions`` on the system PATH and
provides platform-specific installation guidance when they are
missing.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Result of a PATH probe for one executable.

    Attributes
    ----------
    name : str
        Executable name or path that was probed.
    found : bool
        Whether the executable was located.
    path : Path | None
        Absolute path to the executable, or ``None``.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the CUPS client tools
        on the current platform.  Empty when the tool is present.
    """

    name: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_tool(name: str) -> ToolStatus:
    """Probe the system for executable *name*.

    Returns a :class:`ToolStatus` regardless of whether the tool is
    present — the caller decides whether to abort or merely warn.
    """
    result = shutil.which(name)

    if result is not None:
        return ToolStatus(
            name=name,
            found=True,
            path=Path(result).resolve(),
            install_commands=(),
        )

    return ToolStatus(
        name=name,
        found=False,
        path=None,
        install_commands=_platform_install_commands(),
    )


def cups_install_hint() -> str | None:
    """Return a multi-line install hint for the current platform."""
    commands = _platform_install_commands()
    if not commands:
        return None
    lines = ["Install the CUPS client tools using one of:"]
    lines.extend(f"  {cmd}" for cmd in commands)
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

def _platform_install_commands() -> tuple[str, ...]:
    """Return install commands appropriate for the current OS."""
    system = platform.system().lower()
    if system == "linux":
        return (
            "sudo apt install cups-client",
            "sudo dnf install cups-client",
            "sudo pacman -S cups",
        )
    if system == "darwin":
        # CUPS ships with macOS; a missing lp means a broken PATH.
        return ("brew install cups",)
    if system.endswith("bsd"):
        return ("pkg install cups",)
    return ("Please install CUPS from https://openprinting.github.io/cups/",)

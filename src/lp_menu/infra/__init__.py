"""Infrastructure layer — external system integration.

This layer wraps all interaction with the CUPS client tools and the
operating system.  Every raw ``OSError`` / ``subprocess`` exception is
caught here and re-raised as a :class:`~lp_menu.exceptions.LpMenuError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from lp_menu.infra.cups_commands import SubprocessRunner
from lp_menu.infra.tool_detector import ToolStatus, cups_install_hint, detect_tool

__all__: list[str] = [
    "SubprocessRunner",
    "ToolStatus",
    "cups_install_hint",
    "detect_tool",
]

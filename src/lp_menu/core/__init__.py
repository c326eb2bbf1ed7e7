"""Core / service layer — option definitions, parsing and job assembly.

Rules
-----
* No ``print()`` calls.
* No subprocess calls; external commands go through
  :class:`~lp_menu.core.protocols.CommandRunner`.
* No imports from ``cli`` or ``infra``.
"""

from lp_menu.core.models import (
    CommandResult,
    DiscoveredOption,
    FlagChoice,
    JobResult,
    MenuConfig,
    OptionSpec,
    PrintJob,
    PrintOptions,
)
from lp_menu.core.print_service import PrintService
from lp_menu.core.protocols import CommandRunner

__all__: list[str] = [
    "CommandResult",
    "CommandRunner",
    "DiscoveredOption",
    "FlagChoice",
    "JobResult",
    "MenuConfig",
    "OptionSpec",
    "PrintJob",
    "PrintOptions",
    "PrintService",
]

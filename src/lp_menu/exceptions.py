"""Custom exception hierarchy for lp-menu.

All exceptions that cross layer boundaries must inherit from
:class:`LpMenuError`.  Raw ``subprocess`` / ``OSError`` exceptions must
NEVER propagate beyond the infrastructure layer — they are caught there
and re-raised as a typed subclass defined here.

Hierarchy
---------
LpMenuError
├── InvalidOptionError
├── NothingToPrintError
├── ToolNotFoundError
├── CommandError
│   └── PrintJobError
└── EnvironmentError
"""

from __future__ import annotations


class LpMenuError(Exception):
    """Base exception for all lp-menu errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Option values ---------------------------------------------------------

class InvalidOptionError(LpMenuError):
    """Raised when a user-entered option value fails validation."""


class NothingToPrintError(LpMenuError):
    """Raised when no files are selected and the text buffer is empty."""


# --- External tools --------------------------------------------------------

class ToolNotFoundError(LpMenuError):
    """Raised when a CUPS client executable cannot be located."""


class CommandError(LpMenuError):
    """Raised when an external command cannot be run to completion."""


class PrintJobError(CommandError):
    """Raised when ``lp`` fails to start or exits with a nonzero status."""


# --- Environment -----------------------------------------------------------

class EnvironmentError(LpMenuError):
    """Raised when a required runtime dependency is not available."""


def append_cups_client_suggestion(hint: str) -> str:
    """Append CUPS client install guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Check the CUPS client tools with:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    lp-menu doctor",
        )
    )

"""Transient job status display for ``lp`` submissions.

Shows a Rich spinner while ``lp`` runs and replaces it with a one-line
result once the job has been accepted or rejected.  The spinner is
transient: it leaves no trace in the terminal scrollback.

Design
------
* :class:`JobStatus` wraps a :class:`rich.status.Status`.
* Shutdown-safe: stopping an already stopped status is a no-op.
* No ``print()`` — Rich handles all rendering.
"""

from __future__ import annotations

from typing import Any

from lp_menu.cli.console import console, escape_markup, get_rich_console
from lp_menu.core.models import JobResult
from lp_menu.exceptions import EnvironmentError


class JobStatus:
    """Spinner shown while a print job is being submitted.

    Usage::

        with JobStatus("Sending to office…") as status:
            result = service.run_job(options, files, buffer)
            status.succeed(result)
    """

    def __init__(self, message: str = "Sending job to lp…") -> None:
        try:
            from rich.status import Status
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "rich is not installed. Install with: pip install rich",
            ) from exc

        self._status: Any = Status(
            f"[bold blue]{message}",
            console=get_rich_console(),
            spinner="dots",
        )
        self._started: bool = False

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> JobStatus:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        if not self._started:
            self._status.start()
            self._started = True

    def stop(self) -> None:
        """Stop the spinner (idempotent)."""
        if self._started:
            self._status.stop()
            self._started = False

    # ------------------------------------------------------------------
    # Outcome
    # ------------------------------------------------------------------

    def succeed(self, result: JobResult) -> None:
        self.stop()
        console.print(f"[bold green]✓[/bold green] {escape_markup(result.message)}")

    def fail(self, message: str) -> None:
        self.stop()
        console.print(f"[bold red]✗[/bold red] {escape_markup(message)}")

"""Core print service — option discovery and ``lp`` invocation.

This is the central service consumed by the CLI layer.  It depends on
a :class:`~lp_menu.core.protocols.CommandRunner` injected at
construction time, keeping the core free of any ``subprocess`` import.

Responsibilities
----------------
* Query ``lpstat`` / ``lpoptions`` for completion candidates and
  printer-specific options, degrading to empty results on failure.
* Assemble a :class:`PrintJob` from the current options, files and
  text buffer.
* Submit the job and translate the outcome into a :class:`JobResult`
  or :class:`~lp_menu.exceptions.PrintJobError`.
* Remember the last successfully used options for the lifetime of the
  process.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from lp_menu.core.models import (
    DiscoveredOption,
    JobResult,
    MenuConfig,
    PrintJob,
    PrintOptions,
)
from lp_menu.core.option_parser import (
    parse_default_destination,
    parse_lpoptions,
    parse_name_list,
    parse_request_id,
)
from lp_menu.core.options import PRINTER_KEY, SERVER_KEY, args_value
from lp_menu.core.protocols import CommandRunner
from lp_menu.exceptions import (
    CommandError,
    InvalidOptionError,
    LpMenuError,
    NothingToPrintError,
    PrintJobError,
    append_cups_client_suggestion,
)

logger = logging.getLogger(__name__)


class PrintService:
    """Builds and runs ``lp`` invocations.

    Parameters
    ----------
    runner:
        Any object satisfying the :class:`CommandRunner` protocol.
    config:
        Tool names and query timeout.
    """

    def __init__(self, runner: CommandRunner, config: MenuConfig | None = None) -> None:
        self._runner: CommandRunner = runner
        self._config: MenuConfig = config or MenuConfig()
        self._last_options: PrintOptions = PrintOptions()

    # ------------------------------------------------------------------
    # Remembered defaults
    # ------------------------------------------------------------------

    @property
    def last_options(self) -> PrintOptions:
        """Copy of the options used by the last successful job."""
        return self._last_options.copy()

    def remember(self, options: PrintOptions) -> None:
        self._last_options = options.copy()

    # ------------------------------------------------------------------
    # Queries (never raise; empty results fall back to free text)
    # ------------------------------------------------------------------

    def list_printers(self, server: str | None = None) -> list[str]:
        """Destination names from ``lpstat -e``."""
        output = self._query(self._config.lpstat, *_server_args(server), "-e")
        return parse_name_list(output) if output else []

    def list_servers(self) -> list[str]:
        """Server names from ``lpstat -H``."""
        output = self._query(self._config.lpstat, "-H")
        return parse_name_list(output) if output else []

    def default_printer(self, server: str | None = None) -> str | None:
        """The system default destination from ``lpstat -d``."""
        output = self._query(self._config.lpstat, *_server_args(server), "-d")
        return parse_default_destination(output) if output else None

    def discover_options(
        self,
        printer: str | None = None,
        server: str | None = None,
    ) -> list[DiscoveredOption]:
        """Printer-specific options from ``lpoptions -l``."""
        args: list[str] = list(_server_args(server))
        if printer:
            args.extend(("-d", printer))
        args.append("-l")
        output = self._query(self._config.lpoptions, *args)
        if not output:
            return []
        discovered = parse_lpoptions(output)
        logger.debug("discovered %d printer options", len(discovered))
        return discovered

    def _query(self, tool: str, *args: str) -> str | None:
        """Run a query command; ``None`` on any failure or empty output."""
        try:
            executable = self._runner.resolve(tool)
            result = self._runner.run(
                [executable, *args],
                timeout=self._config.timeout,
            )
        except LpMenuError as exc:
            logger.debug("query %s %s failed: %s", tool, " ".join(args), exc)
            return None

        if not result.ok:
            logger.debug(
                "query %s %s exited with status %d: %s",
                tool,
                " ".join(args),
                result.returncode,
                result.stderr.strip(),
            )
            return None
        return result.stdout if result.stdout.strip() else None

    # ------------------------------------------------------------------
    # Job assembly
    # ------------------------------------------------------------------

    def build_job(
        self,
        options: PrintOptions,
        files: Sequence[Path] = (),
        buffer: str = "",
    ) -> PrintJob:
        """Assemble the ``lp`` command for *options*.

        The server flag always comes first: ``lp`` applies its arguments
        in order, so ``-d`` must be looked up on the selected server.
        Files are appended after the flags.  With no files the buffer
        content is piped on stdin instead.

        Raises
        ------
        NothingToPrintError
            No files and an empty buffer.
        InvalidOptionError
            A selected file does not exist.
        ToolNotFoundError
            The ``lp`` executable cannot be found.
        """
        for path in files:
            if not path.is_file():
                raise InvalidOptionError(
                    f"File not found: {path}",
                    hint="Remove it from the file list or fix the path.",
                )

        if not files and not buffer:
            raise NothingToPrintError(
                "Nothing to print.",
                hint="Select one or more files or enter text into the buffer.",
            )

        executable = self._runner.resolve(self._config.lp)
        argv = (executable, *_ordered_flags(options), *(str(path) for path in files))
        stdin = None if files else buffer.encode("utf-8")
        return PrintJob(argv=argv, stdin=stdin)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit(self, job: PrintJob) -> JobResult:
        """Run *job* and report the outcome.

        Raises
        ------
        PrintJobError
            When ``lp`` cannot be started or exits nonzero.
        """
        try:
            result = self._runner.run(job.argv, input_data=job.stdin)
        except CommandError as exc:
            raise PrintJobError(
                f"Could not run lp: {exc}",
                hint=exc.hint,
            ) from exc

        if not result.ok:
            detail = result.stderr.strip() or f"lp exited with status {result.returncode}"
            raise PrintJobError(
                detail,
                hint=append_cups_client_suggestion(
                    "Check the printer name and that the print server is reachable.",
                ),
            )

        request_id = parse_request_id(result.stdout)
        if request_id is not None:
            message = f"Print job {request_id} submitted."
        else:
            message = "Print job submitted."
        logger.debug("lp succeeded: %s", result.stdout.strip())
        return JobResult(request_id=request_id, message=message)

    def run_job(
        self,
        options: PrintOptions,
        files: Sequence[Path] = (),
        buffer: str = "",
    ) -> JobResult:
        """Build, submit and remember *options* on success."""
        job = self.build_job(options, files, buffer)
        outcome = self.submit(job)
        self.remember(options)
        return outcome


def _server_args(server: str | None) -> tuple[str, ...]:
    return ("-h", server) if server else ()


def _ordered_flags(options: PrintOptions) -> list[str]:
    server = options.get(SERVER_KEY) or ()
    rest = [token for key, args in options.items() if key != SERVER_KEY for token in args]
    return [*server, *rest]


def selected_printer(options: PrintOptions) -> str | None:
    """Printer name currently held in *options*, if any."""
    return args_value(options.get(PRINTER_KEY))


def selected_server(options: PrintOptions) -> str | None:
    """Server currently held in *options*, if any."""
    return args_value(options.get(SERVER_KEY))

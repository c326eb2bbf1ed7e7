"""The interactive ``lp`` option menu.

:class:`MenuSession` runs the show-menu / edit-option / print loop.  It
owns the option state being built, the file list and the text buffer,
and delegates every external query and the submission itself to
:class:`~lp_menu.core.print_service.PrintService`.

Recoverable :class:`~lp_menu.exceptions.LpMenuError`s raised while
handling an action are reported and the loop continues; only
cancelling the main menu or choosing *Quit* ends the session.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from lp_menu.cli import exit_codes
from lp_menu.cli.console import console, escape_markup
from lp_menu.cli.prompts import (
    UNSET,
    display_summary,
    option_value,
    prompt_buffer,
    prompt_choice,
    prompt_completion,
    prompt_discovered,
    prompt_discovered_option,
    prompt_files,
    prompt_main_menu,
    prompt_validated,
)
from lp_menu.cli.status import JobStatus
from lp_menu.core.models import DiscoveredOption, OptionSpec, PrintOptions
from lp_menu.core.options import (
    COPIES_KEY,
    ENUMERATED_OPTIONS,
    FIT_TO_PAGE_ARGS,
    FIT_TO_PAGE_KEY,
    PAGES_KEY,
    PRINTER_KEY,
    SERVER_KEY,
    TITLE_KEY,
    copies_args,
    page_ranges_args,
    printer_args,
    server_args,
    title_args,
)
from lp_menu.core.print_service import PrintService, selected_printer, selected_server
from lp_menu.exceptions import LpMenuError, PrintJobError

PRINT = "print"
QUIT = "quit"


class MenuSession:
    """One interactive menu run.

    The initial options are the ones remembered by *service* from its
    last successful job, so a second session in the same process starts
    where the previous one left off.
    """

    def __init__(
        self,
        service: PrintService,
        *,
        files: Sequence[Path] = (),
        buffer: str = "",
        dry_run: bool = False,
    ) -> None:
        self._service = service
        self._dry_run = dry_run
        self.options: PrintOptions = service.last_options
        self.files: list[Path] = list(files)
        self.buffer: str = buffer
        self._discovered: dict[tuple[str | None, str | None], list[DiscoveredOption]] = {}

        self._handlers: dict[str, Callable[[], None]] = {
            PRINTER_KEY: self.edit_printer,
            SERVER_KEY: self.edit_server,
            PAGES_KEY: lambda: self._edit_text(PAGES_KEY, "Page ranges (e.g. 1-4,7):", page_ranges_args),
            COPIES_KEY: lambda: self._edit_text(COPIES_KEY, "Copies:", copies_args),
            TITLE_KEY: lambda: self._edit_text(TITLE_KEY, "Job title:", title_args),
            FIT_TO_PAGE_KEY: self.toggle_fit_to_page,
            "printer-options": self.edit_printer_options,
            "files": self.edit_files,
            "buffer": self.edit_buffer,
            "show": self.show_command,
            PRINT: self.print_job,
            "reset": self.reset,
            "clear": self.clear_options,
        }
        for spec in ENUMERATED_OPTIONS:
            self._handlers[spec.key] = _bind_choice(self, spec)

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> int:
        """Show the menu until the user quits; return an exit code."""
        while True:
            display_summary(self.options, self.files, self.buffer)
            action = prompt_main_menu(self._main_choices())

            if action is None or action == QUIT:
                return exit_codes.SUCCESS

            self.dispatch(action)

    def dispatch(self, action: str) -> None:
        """Run the handler for *action*, reporting recoverable errors."""
        handler = self._handlers.get(action)
        if handler is None:
            raise ValueError(f"unknown menu action: {action!r}")
        try:
            handler()
        except LpMenuError as exc:
            _report(exc)

    def _main_choices(self) -> list[tuple[str, str] | None]:
        def entry(key: str, title: str) -> tuple[str, str]:
            args = self.options.get(key)
            if args is not None:
                title = f"{title}  [{option_value(key, args)}]"
            return title, key

        return [
            ("Print", PRINT),
            None,
            *(entry(spec.key, spec.title) for spec in ENUMERATED_OPTIONS),
            entry(PRINTER_KEY, "Printer"),
            entry(SERVER_KEY, "Server"),
            entry(PAGES_KEY, "Page ranges"),
            entry(COPIES_KEY, "Copies"),
            entry(TITLE_KEY, "Job title"),
            entry(FIT_TO_PAGE_KEY, "Fit to page"),
            ("Printer-specific options…", "printer-options"),
            None,
            (f"Files ({len(self.files)})", "files"),
            ("Edit text buffer", "buffer"),
            ("Show command", "show"),
            ("Reset to last used", "reset"),
            ("Clear all options", "clear"),
            ("Quit", QUIT),
        ]

    # ------------------------------------------------------------------
    # Option handlers
    # ------------------------------------------------------------------

    def edit_choice(self, spec: OptionSpec) -> None:
        answer = prompt_choice(spec, self.options.get(spec.key))
        if answer is None:
            return
        if answer is UNSET:
            self.options.unset(spec.key)
        else:
            self.options.set(spec.key, answer)

    def edit_printer(self) -> None:
        server = selected_server(self.options)
        candidates = self._service.list_printers(server)
        current = selected_printer(self.options) or self._service.default_printer(server)
        if not candidates:
            console.print("[dim]No printer list available; type a destination name.[/dim]")

        answer = prompt_completion("Printer:", candidates, default=current)
        if answer is None:
            return
        if answer:
            self.options.set(PRINTER_KEY, printer_args(answer))
        else:
            self.options.unset(PRINTER_KEY)

    def edit_server(self) -> None:
        candidates = self._service.list_servers()
        if not candidates:
            console.print("[dim]No server list available; type HOST[:PORT].[/dim]")

        answer = prompt_completion(
            "Server:",
            candidates,
            default=selected_server(self.options),
        )
        if answer is None:
            return
        if answer:
            self.options.set(SERVER_KEY, server_args(answer))
        else:
            self.options.unset(SERVER_KEY)

    def _edit_text(
        self,
        key: str,
        message: str,
        convert: Callable[[str], tuple[str, ...]],
    ) -> None:
        current = self.options.get(key)
        answer = prompt_validated(message, convert, default=current[-1] if current else None)
        if answer is None:
            return
        if answer:
            self.options.set(key, convert(answer))
        else:
            self.options.unset(key)

    def toggle_fit_to_page(self) -> None:
        if FIT_TO_PAGE_KEY in self.options:
            self.options.unset(FIT_TO_PAGE_KEY)
        else:
            self.options.set(FIT_TO_PAGE_KEY, FIT_TO_PAGE_ARGS)

    def discovered_options(self) -> list[DiscoveredOption]:
        """Printer-specific options for the selected printer and server."""
        key = (selected_printer(self.options), selected_server(self.options))
        if key not in self._discovered:
            self._discovered[key] = self._service.discover_options(*key)
        return self._discovered[key]

    def edit_printer_options(self) -> None:
        discovered = self.discovered_options()
        if not discovered:
            console.print("[yellow]No printer-specific options available.[/yellow]")
            return

        option = prompt_discovered_option(discovered)
        if option is None:
            return

        current_args = self.options.get(option.state_key)
        current = current_args[-1].split("=", 1)[-1] if current_args else None
        value = prompt_discovered(option, current)
        if value is None:
            return
        if value is UNSET:
            self.options.unset(option.state_key)
        else:
            self.options.set(option.state_key, option.args_for(value))

    # ------------------------------------------------------------------
    # Content handlers
    # ------------------------------------------------------------------

    def edit_files(self) -> None:
        files = prompt_files(self.files)
        if files is not None:
            self.files = files

    def edit_buffer(self) -> None:
        text = prompt_buffer(self.buffer)
        if text is not None:
            self.buffer = text

    # ------------------------------------------------------------------
    # Job handlers
    # ------------------------------------------------------------------

    def show_command(self) -> None:
        job = self._service.build_job(self.options, self.files, self.buffer)
        console.print(f"[bold]{escape_markup(job.command_line)}[/bold]")
        if job.stdin is not None:
            console.print(f"[dim]  < text buffer ({len(job.stdin)} bytes)[/dim]")

    def print_job(self) -> None:
        """Submit the job; in dry-run mode only show the command."""
        if self._dry_run:
            self.show_command()
            return

        with JobStatus() as status:
            try:
                result = self._service.run_job(self.options, self.files, self.buffer)
            except PrintJobError as exc:
                status.fail(str(exc))
                if exc.hint:
                    console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")
                return
            status.succeed(result)

    def reset(self) -> None:
        self.options = self._service.last_options

    def clear_options(self) -> None:
        self.options.clear()


def _bind_choice(session: MenuSession, spec: OptionSpec) -> Callable[[], None]:
    return lambda: session.edit_choice(spec)


def _report(exc: LpMenuError) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape_markup(exc)}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")

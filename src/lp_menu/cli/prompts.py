"""Interactive prompts and the option summary table.

This module is responsible for:

* Rendering a Rich table of the options, files and buffer currently
  selected.
* Asking for one option value at a time via questionary (select lists,
  autocompletion with a free-text fallback, validated text input).

All display-related logic lives here — no subprocess calls, no job
assembly.  Every prompt returns ``None`` when the user cancels so the
caller can leave the option untouched.
"""

from __future__ import annotations

import shlex
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from lp_menu.cli.console import console, escape_markup
from lp_menu.core.models import DiscoveredOption, OptionSpec, PrintOptions
from lp_menu.core.options import ENUMERATED_OPTIONS, args_value
from lp_menu.exceptions import EnvironmentError, InvalidOptionError

UNSET: Any = object()
"""Returned by choice prompts when the user picks ``(unset)``."""

_UNSET_TITLE = "(unset)"


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for the option summary."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms, no I/O)
# ---------------------------------------------------------------------------

_FREE_FORM_TITLES: dict[str, str] = {
    "printer": "Printer",
    "server": "Server",
    "pages": "Page ranges",
    "copies": "Copies",
    "title": "Job title",
    "fit-to-page": "Fit to page",
}


def _option_title(key: str) -> str:
    for spec in ENUMERATED_OPTIONS:
        if spec.key == key:
            return spec.title
    if key.startswith("printer:"):
        return key.split(":", 1)[1]
    return _FREE_FORM_TITLES.get(key, key)


def option_value(key: str, args: tuple[str, ...]) -> str:
    """Human-readable value for the argv fragment stored under *key*."""
    for spec in ENUMERATED_OPTIONS:
        if spec.key == key:
            choice = spec.find(args)
            return choice.label if choice is not None else " ".join(args)
    if key == "fit-to-page":
        return "yes"
    if key.startswith("printer:"):
        value = args_value(args) or ""
        return value.split("=", 1)[-1]
    return args_value(args) or " ".join(args)


def _buffer_summary(buffer: str) -> str:
    """Render the buffer as ``"3 lines, 42 chars"`` or ``"empty"``."""
    if not buffer:
        return "empty"
    lines = buffer.count("\n") + (0 if buffer.endswith("\n") else 1)
    return f"{lines} line{'s' if lines != 1 else ''}, {len(buffer)} chars"


def _choice_title(label: str, selected: bool) -> str:
    return f"{label}  ✓" if selected else label


# ---------------------------------------------------------------------------
# Rich table display
# ---------------------------------------------------------------------------

def display_summary(
    options: PrintOptions,
    files: Sequence[Path],
    buffer: str,
) -> None:
    """Print a Rich table summarising the job being built."""
    table_class = _import_rich_table()

    table = table_class(
        title="lp options",
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("Option", justify="left", min_width=14)
    table.add_column("Value", justify="left", min_width=20)

    if not options:
        table.add_row("[dim]—[/dim]", "[dim]printer defaults[/dim]")
    for key, args in options.items():
        table.add_row(
            escape_markup(_option_title(key)),
            escape_markup(option_value(key, args)),
        )

    console.print()
    console.print(table)
    if files:
        names = ", ".join(str(p) for p in files)
        console.print(f"[bold cyan]Files:[/bold cyan]  {escape_markup(names)}")
    else:
        console.print(f"[bold cyan]Buffer:[/bold cyan] {_buffer_summary(buffer)}")
    console.print()


# ---------------------------------------------------------------------------
# Public prompt functions
# ---------------------------------------------------------------------------

def prompt_choice(spec: OptionSpec, current: tuple[str, ...] | None) -> Any:
    """Ask for one of *spec*'s choices.

    Returns
    -------
    tuple[str, ...] | UNSET | None
        The argv fragment of the chosen entry, :data:`UNSET` to remove
        the option, or ``None`` when cancelled.
    """
    questionary = _import_questionary()

    choices = [
        questionary.Choice(
            title=_choice_title(choice.label, choice.args == current),
            value=choice.args,
        )
        for choice in spec.choices
    ]
    choices.append(questionary.Choice(title=_UNSET_TITLE, value=UNSET))

    return questionary.select(
        f"{spec.title}:",
        choices=choices,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()


def prompt_discovered(option: DiscoveredOption, current: str | None) -> Any:
    """Ask for a value of a printer-specific option.

    Returns the chosen value, :data:`UNSET`, or ``None`` when cancelled.
    """
    questionary = _import_questionary()

    choices = []
    for value in option.choices:
        title = value
        if value == option.default:
            title += " (printer default)"
        choices.append(
            questionary.Choice(title=_choice_title(title, value == current), value=value),
        )
    choices.append(questionary.Choice(title=_UNSET_TITLE, value=UNSET))

    return questionary.select(
        f"{option.label}:",
        choices=choices,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()


def prompt_discovered_option(options: Sequence[DiscoveredOption]) -> DiscoveredOption | None:
    """Pick which printer-specific option to change."""
    questionary = _import_questionary()

    choices = [
        questionary.Choice(title=f"{option.label} ({option.key})", value=option)
        for option in options
    ]
    return questionary.select(
        "Printer option:",
        choices=choices,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()


def prompt_completion(
    message: str,
    candidates: Sequence[str],
    default: str | None = None,
) -> str | None:
    """Ask for a name, completing from *candidates* when there are any.

    With no candidates this is plain free-text input.  Returns the
    stripped answer, ``""`` when the user clears the field, or ``None``
    when cancelled.
    """
    questionary = _import_questionary()

    if candidates:
        question = questionary.autocomplete(
            message,
            choices=list(candidates),
            default=default or "",
        )
    else:
        question = questionary.text(message, default=default or "")

    answer = question.ask()
    if answer is None:
        return None
    return answer.strip()


def prompt_validated(
    message: str,
    convert: Callable[[str], object],
    default: str | None = None,
) -> str | None:
    """Ask for free text that *convert* accepts.

    The questionary validator shows the :class:`InvalidOptionError`
    message inline.  An empty answer is returned as ``""`` so the
    caller can treat it as "unset".
    """
    questionary = _import_questionary()

    def _validate(text: str) -> bool | str:
        if not text.strip():
            return True
        try:
            convert(text)
        except InvalidOptionError as exc:
            return str(exc)
        return True

    answer = questionary.text(message, default=default or "", validate=_validate).ask()
    if answer is None:
        return None
    return answer.strip()


def prompt_files(current: Sequence[Path]) -> list[Path] | None:
    """Ask for the files to print, shell-quoted and space separated.

    An empty answer clears the list (the buffer is printed instead).
    """
    questionary = _import_questionary()

    default = shlex.join(str(p) for p in current)
    answer = questionary.text(
        "Files to print (empty to print the buffer):",
        default=default,
    ).ask()
    if answer is None:
        return None
    try:
        parts = shlex.split(answer)
    except ValueError as exc:
        raise InvalidOptionError(
            f"Could not parse file list: {exc}",
            hint="Quote file names that contain spaces.",
        ) from exc
    return [Path(part).expanduser() for part in parts]


def prompt_buffer(current: str) -> str | None:
    """Edit the text buffer piped to ``lp`` when no files are selected."""
    questionary = _import_questionary()

    return questionary.text(
        "Text to print (Esc then Enter to finish):",
        default=current,
        multiline=True,
    ).ask()


def prompt_main_menu(entries: Sequence[tuple[str, str] | None]) -> str | None:
    """Ask for the next menu action.

    *entries* are ``(title, action)`` pairs; ``None`` draws a separator.
    """
    questionary = _import_questionary()

    choices: list[Any] = [
        questionary.Separator() if entry is None
        else questionary.Choice(title=entry[0], value=entry[1])
        for entry in entries
    ]
    return questionary.select(
        "Choose an option to change, or Print:",
        choices=choices,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()

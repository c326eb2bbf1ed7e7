"""Domain models for lp-menu.

Value objects are **frozen** dataclasses with no behaviour beyond data
access.  :class:`PrintOptions` is the one mutable container: the ordered
set of flags the menu is currently building.
"""

from __future__ import annotations

import shlex
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path


# ---------------------------------------------------------------------------
# Static option enumerations
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FlagChoice:
    """One human-readable choice and the ``lp`` argv fragment it maps to."""

    label: str
    """Text shown in the menu (e.g. ``"Landscape"``)."""

    args: tuple[str, ...]
    """Argv tokens appended to the command (e.g. ``("-o", "number-up=2")``)."""


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """A named enumeration of mutually exclusive :class:`FlagChoice` entries."""

    key: str
    title: str
    choices: tuple[FlagChoice, ...]

    def find(self, args: tuple[str, ...] | None) -> FlagChoice | None:
        """Return the choice whose args equal *args*, if any."""
        for choice in self.choices:
            if choice.args == args:
                return choice
        return None


# ---------------------------------------------------------------------------
# Printer-specific options reported by ``lpoptions -l``
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DiscoveredOption:
    """A printer-specific option parsed from ``lpoptions -l`` output."""

    key: str
    """PPD / IPP keyword (e.g. ``"Duplex"``)."""

    label: str
    """Human-readable label (e.g. ``"2-Sided Printing"``)."""

    choices: tuple[str, ...]
    """Allowed values in the order reported by the printer."""

    default: str | None = None
    """Value marked with ``*`` in the listing, or ``None``."""

    flag: str = "-o"

    @property
    def state_key(self) -> str:
        """Key under which the selected value is held in :class:`PrintOptions`."""
        return f"printer:{self.key}"

    def args_for(self, value: str) -> tuple[str, ...]:
        """Return the argv fragment selecting *value*."""
        return (self.flag, f"{self.key}={value}")


# ---------------------------------------------------------------------------
# Mutable option state
# ---------------------------------------------------------------------------

class PrintOptions:
    """Ordered mapping of option key to argv fragment.

    The flattened :attr:`flags` list is the argument list handed to
    ``lp``.  Re-setting a key keeps its original position.
    """

    def __init__(self, entries: dict[str, tuple[str, ...]] | None = None) -> None:
        self._entries: dict[str, tuple[str, ...]] = dict(entries or {})

    def set(self, key: str, args: tuple[str, ...]) -> None:
        self._entries[key] = tuple(args)

    def unset(self, key: str) -> None:
        self._entries.pop(key, None)

    def get(self, key: str) -> tuple[str, ...] | None:
        return self._entries.get(key)

    def clear(self) -> None:
        self._entries.clear()

    def copy(self) -> PrintOptions:
        return PrintOptions(self._entries)

    def items(self) -> list[tuple[str, tuple[str, ...]]]:
        return list(self._entries.items())

    @property
    def flags(self) -> list[str]:
        """Flat, ordered argv tokens for every option currently set."""
        return [token for args in self._entries.values() for token in args]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return len(self._entries) > 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrintOptions):
            return NotImplemented
        return self.items() == other.items()

    def __repr__(self) -> str:
        return f"PrintOptions({self._entries!r})"


# ---------------------------------------------------------------------------
# Jobs and command results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PrintJob:
    """A fully assembled ``lp`` invocation."""

    argv: tuple[str, ...]
    """Executable path followed by flags and file paths."""

    stdin: bytes | None = None
    """Buffer content piped to ``lp`` when no files are given."""

    @property
    def command_line(self) -> str:
        """Shell-quoted rendering of :attr:`argv` for display."""
        return shlex.join(self.argv)


@dataclass(frozen=True, slots=True)
class JobResult:
    """Outcome of a successful ``lp`` submission."""

    request_id: str | None
    """Job identifier reported by ``lp`` (e.g. ``"office-42"``), if any."""

    message: str
    """One-line status text for the user."""


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of an external command."""

    argv: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


# ---------------------------------------------------------------------------
# Runtime configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MenuConfig:
    """Settings collected from the command line."""

    lp: str = "lp"
    lpstat: str = "lpstat"
    lpoptions: str = "lpoptions"
    timeout: float = 5.0
    """Seconds allowed for ``lpstat`` / ``lpoptions`` queries."""

    files: tuple[Path, ...] = field(default_factory=tuple)
    text: str = ""
    dry_run: bool = False

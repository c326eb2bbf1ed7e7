"""Static ``lp`` option definitions and free-form value validators.

Every function in this module is a **pure** transformation — no I/O,
no side effects, fully deterministic.

Enumerated options map a menu label to an argv fragment.  Free-form
options (printer, server, page ranges, copies, title) are validated and
converted to their fragment by a ``*_args`` function that raises
:class:`~lp_menu.exceptions.InvalidOptionError` on bad input.
"""

from __future__ import annotations

import re

from lp_menu.core.models import FlagChoice, OptionSpec
from lp_menu.exceptions import InvalidOptionError


def _o(value: str) -> tuple[str, ...]:
    return ("-o", value)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

ORIENTATION = OptionSpec(
    key="orientation",
    title="Orientation",
    choices=(
        FlagChoice("Portrait", _o("orientation-requested=3")),
        FlagChoice("Landscape", _o("orientation-requested=4")),
        FlagChoice("Reverse landscape", _o("orientation-requested=5")),
        FlagChoice("Reverse portrait", _o("orientation-requested=6")),
    ),
)

QUALITY = OptionSpec(
    key="quality",
    title="Quality",
    choices=(
        FlagChoice("Draft", _o("print-quality=3")),
        FlagChoice("Normal", _o("print-quality=4")),
        FlagChoice("High", _o("print-quality=5")),
    ),
)

SIDES = OptionSpec(
    key="sides",
    title="Sides",
    choices=(
        FlagChoice("One-sided", _o("sides=one-sided")),
        FlagChoice("Two-sided, long edge", _o("sides=two-sided-long-edge")),
        FlagChoice("Two-sided, short edge", _o("sides=two-sided-short-edge")),
    ),
)

MEDIA = OptionSpec(
    key="media",
    title="Paper size",
    choices=(
        FlagChoice("Letter", _o("media=letter")),
        FlagChoice("Legal", _o("media=legal")),
        FlagChoice("A4", _o("media=a4")),
        FlagChoice("A3", _o("media=a3")),
        FlagChoice("A5", _o("media=a5")),
        FlagChoice("Tabloid", _o("media=tabloid")),
    ),
)

NUMBER_UP = OptionSpec(
    key="number-up",
    title="Pages per sheet",
    choices=tuple(
        FlagChoice(str(n), _o(f"number-up={n}")) for n in (1, 2, 4, 6, 9, 16)
    ),
)

ENUMERATED_OPTIONS: tuple[OptionSpec, ...] = (
    ORIENTATION,
    QUALITY,
    SIDES,
    MEDIA,
    NUMBER_UP,
)

# Keys for the free-form options held in PrintOptions.
PRINTER_KEY = "printer"
SERVER_KEY = "server"
PAGES_KEY = "pages"
COPIES_KEY = "copies"
TITLE_KEY = "title"
FIT_TO_PAGE_KEY = "fit-to-page"

FIT_TO_PAGE_ARGS: tuple[str, ...] = _o("fit-to-page")

MAX_COPIES = 9999


# ---------------------------------------------------------------------------
# Free-form validators
# ---------------------------------------------------------------------------

def _require_token(value: str, what: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise InvalidOptionError(f"{what} must not be empty.")
    if any(ch.isspace() for ch in stripped):
        raise InvalidOptionError(
            f"Invalid {what.lower()}: {stripped!r}",
            hint=f"A {what.lower()} cannot contain whitespace.",
        )
    return stripped


def printer_args(name: str) -> tuple[str, ...]:
    """Return ``("-d", NAME)`` for a destination name."""
    return ("-d", _require_token(name, "Printer name"))


def server_args(server: str) -> tuple[str, ...]:
    """Return ``("-h", HOST[:PORT])`` for a print server."""
    return ("-h", _require_token(server, "Server"))


_RANGE_RE = re.compile(r"^(\d+)(?:-(\d+))?$")


def normalize_page_ranges(value: str) -> str:
    """Validate a page list such as ``"1-4, 7,9-12"`` and return ``"1-4,7,9-12"``.

    Each comma-separated item is ``N`` or ``N-M`` with ``1 <= N <= M``.
    """
    compact = "".join(value.split())
    if not compact:
        raise InvalidOptionError("Page ranges must not be empty.")

    for item in compact.split(","):
        match = _RANGE_RE.match(item)
        if match is None:
            raise InvalidOptionError(
                f"Invalid page range: {item!r}",
                hint="Use page numbers and ranges, e.g. 1-4,7,9-12",
            )
        start = int(match.group(1))
        end = int(match.group(2)) if match.group(2) is not None else start
        if start < 1 or end < start:
            raise InvalidOptionError(
                f"Invalid page range: {item!r}",
                hint="Pages start at 1 and a range must not run backwards.",
            )
    return compact


def page_ranges_args(value: str) -> tuple[str, ...]:
    """Return ``("-P", LIST)`` for a validated page list."""
    return ("-P", normalize_page_ranges(value))


def copies_args(value: str | int) -> tuple[str, ...]:
    """Return ``("-n", N)`` for ``1 <= N <= MAX_COPIES``."""
    try:
        count = int(str(value).strip())
    except ValueError as exc:
        raise InvalidOptionError(
            f"Invalid number of copies: {value!r}",
            hint="Enter a whole number.",
        ) from exc
    if not 1 <= count <= MAX_COPIES:
        raise InvalidOptionError(
            f"Invalid number of copies: {count}",
            hint=f"Copies must be between 1 and {MAX_COPIES}.",
        )
    return ("-n", str(count))


def title_args(title: str) -> tuple[str, ...]:
    """Return ``("-t", TITLE)`` for a non-empty job title."""
    stripped = title.strip()
    if not stripped:
        raise InvalidOptionError("Job title must not be empty.")
    return ("-t", stripped)


def args_value(args: tuple[str, ...] | None) -> str | None:
    """Return the value token of a two-token fragment like ``("-d", "x")``."""
    if not args or len(args) < 2:
        return None
    return args[-1]

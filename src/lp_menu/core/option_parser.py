"""Pure parsers for CUPS client command output.

Every function here takes the captured text of a command and returns
domain values — no I/O, no side effects.

* ``lpoptions -l``  → :class:`DiscoveredOption` list
* ``lpstat -e`` / ``lpstat -H`` → candidate name list
* ``lpstat -d``     → default destination
* ``lp``            → request id
"""

from __future__ import annotations

import re

from lp_menu.core.models import DiscoveredOption


# ---------------------------------------------------------------------------
# lpoptions -l
# ---------------------------------------------------------------------------

def parse_option_line(line: str) -> DiscoveredOption | None:
    """Parse one ``Key/Label: *Default Other ...`` line.

    Returns ``None`` for blank or malformed lines.
    """
    head, sep, tail = line.partition(":")
    if not sep:
        return None

    key, _, label = head.strip().partition("/")
    key = key.strip()
    label = label.strip() or key
    if not key or any(ch.isspace() for ch in key):
        return None

    choices: list[str] = []
    default: str | None = None
    for token in tail.split():
        value = token.lstrip("*")
        if not value:
            continue
        if token.startswith("*"):
            default = value
        choices.append(value)

    if not choices:
        return None

    return DiscoveredOption(
        key=key,
        label=label,
        choices=tuple(choices),
        default=default,
    )


def parse_lpoptions(output: str) -> list[DiscoveredOption]:
    """Parse the full ``lpoptions -l`` listing.

    Later duplicates of a key are ignored.
    """
    seen: set[str] = set()
    result: list[DiscoveredOption] = []
    for line in output.splitlines():
        option = parse_option_line(line)
        if option is None or option.key in seen:
            continue
        seen.add(option.key)
        result.append(option)
    return result


# ---------------------------------------------------------------------------
# Newline-delimited listings
# ---------------------------------------------------------------------------

def parse_name_list(output: str) -> list[str]:
    """Split newline-delimited names, dropping blanks and duplicates."""
    seen: set[str] = set()
    names: list[str] = []
    for line in output.splitlines():
        name = line.strip()
        if name and name not in seen:
            seen.add(name)
            names.append(name)
    return names


def parse_default_destination(output: str) -> str | None:
    """Extract NAME from ``system default destination: NAME``."""
    for line in output.splitlines():
        head, sep, tail = line.partition(":")
        if sep and head.strip().lower() == "system default destination":
            name = tail.strip()
            return name or None
    return None


# ---------------------------------------------------------------------------
# lp
# ---------------------------------------------------------------------------

_REQUEST_ID_RE = re.compile(r"request id is (\S+)")


def parse_request_id(output: str) -> str | None:
    """Return the job id from ``request id is office-42 (1 file(s))``."""
    match = _REQUEST_ID_RE.search(output)
    if match is None:
        return None
    return match.group(1)

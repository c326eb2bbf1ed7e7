"""``subprocess`` backed implementation of :class:`~lp_menu.core.protocols.CommandRunner`.

This module is the **only** place in the codebase that spawns
processes.  ``OSError`` and ``subprocess`` exceptions are caught here
and re-raised as typed :class:`~lp_menu.exceptions.LpMenuError`
subclasses — nothing raw escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence

from lp_menu.core.models import CommandResult
from lp_menu.exceptions import CommandError, ToolNotFoundError
from lp_menu.infra.tool_detector import cups_install_hint

logger = logging.getLogger(__name__)


class SubprocessRunner:
    """Concrete :class:`CommandRunner` built on :func:`subprocess.run`.

    Usage::

        runner = SubprocessRunner()
        result = runner.run(["lpstat", "-e"], timeout=5)
    """

    def resolve(self, name: str) -> str:
        """Locate *name* on PATH (or accept an existing path as-is)."""
        found = shutil.which(name)
        if found is None:
            raise ToolNotFoundError(
                f"{name} is not installed or not on PATH.",
                hint=cups_install_hint(),
            )
        return found

    def run(
        self,
        argv: Sequence[str],
        *,
        input_data: bytes | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        """Run *argv*, feeding *input_data* on stdin when given."""
        args = tuple(argv)
        logger.debug("running %s", args)

        try:
            completed = subprocess.run(
                args,
                input=input_data,
                capture_output=True,
                timeout=timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ToolNotFoundError(
                f"{args[0]} is not installed or not on PATH.",
                hint=cups_install_hint(),
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise CommandError(
                f"{args[0]} did not finish within {timeout:g} seconds.",
            ) from exc
        except OSError as exc:
            raise CommandError(f"Could not start {args[0]}: {exc}") from exc

        result = CommandResult(
            argv=args,
            returncode=completed.returncode,
            stdout=_decode(completed.stdout),
            stderr=_decode(completed.stderr),
        )
        logger.debug("%s exited with status %d", args[0], result.returncode)
        return result


def _decode(data: bytes | None) -> str:
    """Decode captured output, replacing undecodable bytes."""
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")

"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from lp_menu.core.models import CommandResult


class CommandRunner(Protocol):
    """Contract for running an external CUPS client command.

    Any object that implements :meth:`run` with the correct signature
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    def resolve(self, name: str) -> str:
        """Return the absolute path of executable *name*.

        Raises
        ------
        ToolNotFoundError
            When *name* cannot be found.
        """
        ...  # pragma: no cover

    def run(
        self,
        argv: Sequence[str],
        *,
        input_data: bytes | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        """Run *argv* to completion and capture its output.

        A nonzero exit status is **not** an error at this level; callers
        inspect :attr:`CommandResult.returncode`.

        Raises
        ------
        ToolNotFoundError
            When the executable does not exist.
        CommandError
            When the process cannot be started or times out.
        """
        ...  # pragma: no cover

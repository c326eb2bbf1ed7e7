"""Shared pytest fixtures and configuration for the lp-menu test suite.

Guidelines
----------
* No real printing — ``lp`` / ``lpstat`` / ``lpoptions`` are never run.
* Subprocess access is mocked at the infra boundary.
* questionary is mocked; no terminal interaction.
"""

from __future__ import annotations

from collections.abc import Sequence
from unittest.mock import MagicMock

import pytest

from lp_menu.core.models import CommandResult, MenuConfig
from lp_menu.core.print_service import PrintService


def make_result(
    argv: Sequence[str] = ("lp",),
    returncode: int = 0,
    stdout: str = "",
    stderr: str = "",
) -> CommandResult:
    return CommandResult(
        argv=tuple(argv),
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
    )


@pytest.fixture
def runner() -> MagicMock:
    """A CommandRunner double that resolves every tool under /usr/bin."""
    mock = MagicMock()
    mock.resolve.side_effect = lambda name: f"/usr/bin/{name}"
    mock.run.return_value = make_result()
    return mock


@pytest.fixture
def service(runner: MagicMock) -> PrintService:
    return PrintService(runner, MenuConfig())

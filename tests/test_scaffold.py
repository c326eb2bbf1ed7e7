"""Smoke tests — verify scaffold wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from lp_menu import __version__
from lp_menu.cli import exit_codes
from lp_menu.cli.app import _build_parser, _config_from_args, cli, main
from lp_menu.cli.console import configure_logging, escape_markup
from lp_menu.exceptions import (
    CommandError,
    EnvironmentError,
    InvalidOptionError,
    LpMenuError,
    NothingToPrintError,
    PrintJobError,
    ToolNotFoundError,
    append_cups_client_suggestion,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            InvalidOptionError,
            NothingToPrintError,
            ToolNotFoundError,
            CommandError,
                    PrintJobError,
            EnvironmentError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[LpMenuError]
    ) -> None:
        assert issubclass(exc_class, LpMenuError)

    def test_print_job_error_is_a_command_error(self) -> None:
        assert issubclass(PrintJobError, CommandError)

    def test_hint_is_stored(self) -> None:
        err = LpMenuError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        assert LpMenuError("boom").hint is None

    def test_cups_suggestion_appended_once(self) -> None:
        once = append_cups_client_suggestion("Check the printer.")
        twice = append_cups_client_suggestion(once)
        assert once.startswith("Check the printer.")
        assert "lp-menu doctor" in once
        assert twice == once


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_values(self) -> None:
        assert exit_codes.SUCCESS == 0
        assert exit_codes.GENERAL_ERROR == 1
        assert exit_codes.UNEXPECTED_ERROR == 2
        assert exit_codes.KEYBOARD_INTERRUPT == 130


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

class TestConfigFromArgs:
    def test_defaults(self) -> None:
        config = _config_from_args(_build_parser().parse_args([]))
        assert config.lp == "lp"
        assert config.lpstat == "lpstat"
        assert config.lpoptions == "lpoptions"
        assert config.timeout == 5.0
        assert config.files == ()
        assert config.text == ""
        assert config.dry_run is False

    def test_all_flags(self) -> None:
        args = _build_parser().parse_args(
            [
                "--lp", "/opt/cups/bin/lp",
                "--lpstat", "/opt/cups/bin/lpstat",
                "--lpoptions", "/opt/cups/bin/lpoptions",
                "--timeout", "2.5",
                "--text", "hello",
                "--dry-run",
                "a.pdf",
                "b.txt",
            ]
        )
        config = _config_from_args(args)
        assert config.lp == "/opt/cups/bin/lp"
        assert config.lpstat == "/opt/cups/bin/lpstat"
        assert config.lpoptions == "/opt/cups/bin/lpoptions"
        assert config.timeout == 2.5
        assert config.text == "hello"
        assert config.dry_run is True
        assert config.files == (Path("a.pdf"), Path("b.txt"))


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    @patch("lp_menu.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_dispatches(self, mock_doctor: MagicMock) -> None:
        assert main(["doctor"]) == exit_codes.SUCCESS
        mock_doctor.assert_called_once()
        config = mock_doctor.call_args[0][0]
        assert config.files == ()

    def test_files_route_to_menu(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from lp_menu.cli import app as app_module

        seen = {}

        def _fake_menu(config: object) -> int:
            seen["config"] = config
            return exit_codes.SUCCESS

        monkeypatch.setattr(app_module, "_handle_menu", _fake_menu)
        assert main(["report.pdf", "--dry-run"]) == exit_codes.SUCCESS
        assert seen["config"].files == (Path("report.pdf"),)
        assert seen["config"].dry_run is True

    def test_options_between_files(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from lp_menu.cli import app as app_module

        seen = {}

        def _fake_menu(config: object) -> int:
            seen["config"] = config
            return exit_codes.SUCCESS

        monkeypatch.setattr(app_module, "_handle_menu", _fake_menu)
        assert main(["a.pdf", "--dry-run", "b.pdf"]) == exit_codes.SUCCESS
        assert seen["config"].files == (Path("a.pdf"), Path("b.pdf"))
        assert seen["config"].dry_run is True

    def test_no_args_opens_menu(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from lp_menu.cli import app as app_module

        monkeypatch.setattr(app_module, "_handle_menu", lambda config: exit_codes.SUCCESS)
        assert main([]) == exit_codes.SUCCESS

    @patch("lp_menu.cli.menu.MenuSession")
    @patch("lp_menu.infra.cups_commands.SubprocessRunner")
    def test_handle_menu_wires_session(
        self,
        mock_runner_cls: MagicMock,
        mock_session_cls: MagicMock,
    ) -> None:
        mock_session_cls.return_value.run.return_value = exit_codes.SUCCESS

        assert main(["--text", "hello"]) == exit_codes.SUCCESS
        mock_runner_cls.assert_called_once_with()
        kwargs = mock_session_cls.call_args.kwargs
        assert kwargs["buffer"] == "hello"
        assert kwargs["files"] == ()
        assert kwargs["dry_run"] is False


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    @patch("lp_menu.cli.app.main", side_effect=ToolNotFoundError("lp missing", hint="install"))
    def test_known_error_exits_general(
        self, _mock_main: MagicMock, capsys: pytest.CaptureFixture[str],
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "lp missing" in err
        assert "install" in err

    @patch(
        "lp_menu.cli.app.main",
        side_effect=InvalidOptionError("Invalid title: 'Q3 [/draft]'", hint="Drop the [/b] tag"),
    )
    def test_bracketed_text_is_printed_literally(
        self, _mock_main: MagicMock, capsys: pytest.CaptureFixture[str],
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "'Q3 [/draft]'" in err
        assert "Drop the [/b] tag" in err

    @patch("lp_menu.cli.app.main", side_effect=KeyboardInterrupt)
    def test_keyboard_interrupt(self, _mock_main: MagicMock) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.KEYBOARD_INTERRUPT

    @patch("lp_menu.cli.app.main", side_effect=RuntimeError("kaboom"))
    def test_unexpected_error(
        self, _mock_main: MagicMock, capsys: pytest.CaptureFixture[str],
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.UNEXPECTED_ERROR
        assert "RuntimeError" in capsys.readouterr().err

    @patch("lp_menu.cli.app.main", return_value=exit_codes.SUCCESS)
    def test_success_exit(self, _mock_main: MagicMock) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

class TestConfigureLogging:
    def test_default_level_is_warning(self) -> None:
        configure_logging()
        logger = logging.getLogger("lp_menu")
        assert logger.level == logging.WARNING
        assert logger.propagate is False
        assert len(logger.handlers) == 1

    def test_verbose_is_debug_and_replaces_handler(self) -> None:
        configure_logging()
        configure_logging(verbose=True)
        logger = logging.getLogger("lp_menu")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1


class TestEscapeMarkup:
    def test_tags_are_escaped(self) -> None:
        assert escape_markup("bad [/media]") == "bad \\[/media]"

    def test_plain_text_unchanged(self) -> None:
        assert escape_markup("office-42") == "office-42"

    def test_without_rich_returns_text(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setitem(sys.modules, "rich.markup", None)
        assert escape_markup("bad [/media]") == "bad [/media]"

"""CLI console and logging helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``, ``doctor``)
remain functional even when Rich is not installed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from lp_menu.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()


def escape_markup(text: object) -> str:
	"""Escape *text* for interpolation into Rich markup.

	Without Rich the proxy prints markup verbatim, so the text is
	returned unchanged.
	"""
	try:
		from rich.markup import escape
	except ModuleNotFoundError:
		return str(text)
	return escape(str(text))


def _rich_log_handler() -> logging.Handler:
	"""Return a ``RichHandler`` on stderr or raise ``EnvironmentError``."""
	try:
		from rich.logging import RichHandler
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return RichHandler(
		console=get_rich_console(),
		show_time=False,
		show_path=False,
		markup=False,
	)


def configure_logging(verbose: bool = False) -> None:
	"""Route ``lp_menu`` log records to stderr.

	``verbose`` lowers the threshold to DEBUG so every external command
	and its exit status is shown.  Rich renders the records when it is
	installed.
	"""
	level = logging.DEBUG if verbose else logging.WARNING
	handler: logging.Handler
	try:
		handler = _rich_log_handler()
	except EnvironmentError:
		handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

	package_logger = logging.getLogger("lp_menu")
	for existing in list(package_logger.handlers):
		package_logger.removeHandler(existing)
	package_logger.addHandler(handler)
	package_logger.setLevel(level)
	package_logger.propagate = False

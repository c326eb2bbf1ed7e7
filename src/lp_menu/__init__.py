"""lp-menu — interactive option menu for the CUPS ``lp`` command.

Builds an ``lp`` argument list from menu choices and runs it.
"""

from lp_menu.version import __version__

__all__: list[str] = ["__version__"]

"""Allow ``python -m lp_menu`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m lp_menu`` behaves identically to the ``lp-menu`` console
script.
"""

from __future__ import annotations

from lp_menu.cli.app import cli

if __name__ == "__main__":
    cli()

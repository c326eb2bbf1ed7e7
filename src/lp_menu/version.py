"""Single source of truth for the lp-menu version string."""

__version__: str = "0.3.0"

"""Single source of truth for the kit-cli version."""

__version__ = "0.1.0"

# webmail_harvester/__init__.py
"""
Webmail Harvester package initializer.
Defines package version and exposes CLI.
"""
__version__ = "0.1.0"

# Expose CLI entry point
from webmail_harvester.cli import cli  # noqa: E402

__all__ = ["__version__", "cli"]

"""Rack power tracking package entry.

Provides a stable module entrypoint (python -m rackpower) while keeping the
top-level packages (core/, domain/, services/, ...) as they are.
"""

from rackpower.version import __version__  # single source of truth

__all__ = ["__version__"]

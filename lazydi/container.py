"""Default resolution context.

Most code should build and pass around its own ``ResolutionContext``. The
default context exists for module-level sugar such as ``value()`` and
``@injectable`` when no context is given.
"""

from __future__ import annotations

from pathlib import Path

from lazydi.config import Settings
from lazydi.core.resolver import ResolutionContext
from lazydi.logging_config import configure_logging

# Global context instance
_context: ResolutionContext | None = None


def create_context(settings: Settings | None = None) -> ResolutionContext:
    """Create a new, empty resolution context."""
    return ResolutionContext(settings)


def get_context(env_file: Path | None = None) -> ResolutionContext:
    """Get the default context.

    Args:
        env_file: Env file consulted when the context is first created

    Returns:
        Default ResolutionContext (created on first call)
    """
    global _context
    if _context is None:
        settings = Settings.from_env(env_file)
        configure_logging(level=settings.log_level, json_output=settings.log_json, colors=not settings.log_json)
        _context = ResolutionContext(settings)
    return _context


def reset_context() -> None:
    """Drop the default context (for testing)."""
    global _context
    _context = None

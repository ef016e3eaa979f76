"""
Framework configuration.

Module-level settings with explicit setters, read at the point of use so
changes apply to hinges that already exist.
"""

import logging

DEFAULT_DEBUG_LABEL = "-state-"
DEFAULT_DEBUG_LEVEL = logging.INFO

_debug_label: str = DEFAULT_DEBUG_LABEL
_debug_level: int = DEFAULT_DEBUG_LEVEL


def set_debug_label(label: str) -> None:
    """Set the tag used by ``debug`` stages registered without one."""
    global _debug_label
    if not label:
        raise ValueError("debug label must be a non-empty string")
    _debug_label = label


def get_debug_label() -> str:
    """Get the tag used by ``debug`` stages registered without one."""
    return _debug_label


def set_debug_level(level) -> None:
    """
    Set the logging level ``debug`` stages emit at.

    Args:
        level: A logging level number or name (e.g. ``"DEBUG"``)
    """
    global _debug_level
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level: {level!r}")
        level = resolved
    _debug_level = level


def get_debug_level() -> int:
    """Get the logging level ``debug`` stages emit at."""
    return _debug_level


def reset_config() -> None:
    """Restore every setting to its default."""
    global _debug_label, _debug_level
    _debug_label = DEFAULT_DEBUG_LABEL
    _debug_level = DEFAULT_DEBUG_LEVEL

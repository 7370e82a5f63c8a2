"""Helpers for configuring consistent logging output."""

from __future__ import annotations

import logging
import os

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_CONFIGURED = False


def _resolve_level(level: str | int | None) -> int:
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    try:
        return int(level)
    except (TypeError, ValueError):
        normalized = str(level).strip().upper()
        return getattr(logging, normalized, logging.INFO)


def configure_logging(level: str | int | None = None, *, force: bool = False) -> None:
    """Initialise root logging handlers.

    The level comes from ``level`` or, when omitted, the
    ``TAXABROWSER_LOG_LEVEL`` environment variable (default INFO).
    """
    global _CONFIGURED

    if _CONFIGURED and not force:
        return

    env_level = os.environ.get("TAXABROWSER_LOG_LEVEL")
    resolved_level = _resolve_level(level if level is not None else env_level)

    logging.basicConfig(level=resolved_level, format=_DEFAULT_FORMAT, force=force)
    logging.getLogger("taxabrowser").setLevel(resolved_level)
    _CONFIGURED = True


__all__ = ["configure_logging"]

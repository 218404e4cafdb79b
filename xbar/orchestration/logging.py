"""Centralized logging helpers for the xbar run loop and CLI."""

from __future__ import annotations

import logging
import os
import sys

_configured = False


def _resolve_level() -> int:
    raw = os.environ.get("XBAR_LOG_LEVEL", "").strip().upper()
    if raw:
        return getattr(logging, raw, logging.INFO)
    return logging.INFO


class _ConsoleHandler(logging.StreamHandler):
    """StreamHandler bound to whatever sys.stdout is at emit time."""

    @property
    def stream(self):
        return sys.stdout

    # StreamHandler.__init__ and setStream() assign here; output always follows sys.stdout.
    @stream.setter
    def stream(self, value):
        pass


def _attach_console_handler(logger: logging.Logger) -> None:
    handler = _ConsoleHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def configure_cli_logging(*, quiet: bool = False, verbose: bool = False) -> None:
    """Set xbar.* logger level from CLI flags. --quiet/--verbose override XBAR_LOG_LEVEL."""
    global _configured
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = _resolve_level()
    root = logging.getLogger("xbar")
    root.setLevel(level)
    if not root.handlers:
        _attach_console_handler(root)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return an xbar.<name> logger writing plain messages to the console."""
    root = logging.getLogger("xbar")
    if not _configured and not root.handlers:
        _attach_console_handler(root)
        root.setLevel(_resolve_level())
    return logging.getLogger(f"xbar.{name}")

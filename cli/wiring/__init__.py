"""Parser and dispatch wiring used by xbar_cli.main."""

from .dispatch import dispatch_command
from .parser import build_parser

__all__ = ["build_parser", "dispatch_command"]

"""CLI command dispatch wiring extracted from xbar_cli."""

from __future__ import annotations

import argparse
from typing import Any, Callable

from cli import handlers


def dispatch_command(parser: argparse.ArgumentParser, args: Any) -> int:
    """Dispatch parsed CLI args to the matching handler."""
    from xbar.orchestration.logging import configure_cli_logging

    quiet = getattr(args, "quiet", False)
    verbose = getattr(args, "verbose", False)
    configure_cli_logging(quiet=quiet, verbose=verbose)

    dispatch: dict[str, Callable[[], int]] = {
        "rule-sets": lambda: handlers.handle_rule_sets(args),
        "patch": lambda: handlers.handle_patch(args),
    }
    command = "rule-sets" if getattr(args, "list_rule_sets", False) else "patch"
    return dispatch[command]()

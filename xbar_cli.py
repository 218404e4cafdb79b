"""
xbar CLI

Entry point: environment loading, argument parsing and dispatch only.
All command logic lives in cli.handlers.
"""

from __future__ import annotations

import sys
from pathlib import Path

from dotenv import load_dotenv

from cli.wiring import build_parser, dispatch_command
from xbar import __version__


def _load_environment(env_file: Path | None = None) -> None:
    """Load XBAR_* settings from .env in the working directory (or env_file). .env wins over the shell."""
    path = env_file if env_file is not None else Path.cwd() / ".env"
    if path.is_file():
        load_dotenv(path, override=True)


def main(argv: list[str] | None = None) -> int:
    _load_environment()
    parser = build_parser(version=__version__)
    args = parser.parse_args(argv)
    return dispatch_command(parser, args)


if __name__ == "__main__":
    sys.exit(main())

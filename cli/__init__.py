"""CLI package for xbar: argument parser, dispatch and handlers.

Handlers import the xbar modules they need lazily so ``--help`` and
``--version`` stay cheap.
"""

__all__ = []

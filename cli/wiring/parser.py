"""Parser wiring for the xbar entrypoint."""

from __future__ import annotations

import argparse


def build_parser(*, version: str) -> argparse.ArgumentParser:
    """Configure the CLI parser. Positional paths are project files; none means search."""
    parser = argparse.ArgumentParser(
        prog="xbar",
        description="xbar: patch Carthage checkouts' Xcode projects for newer Xcode toolchains",
        epilog="With no paths, searches Carthage/Checkouts for *.xcodeproj. Use --list-rule-sets to see variants.",
    )
    parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {version}")
    parser.add_argument("paths", nargs="*", help="Project paths (.xcodeproj or project.pbxproj); default: search checkouts")
    _add_patch_options(parser)
    _add_output_options(parser)
    return parser


def _add_patch_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--rule-set", "-r", default=None, metavar="NAME", help="Rule set to apply (default: xcode12; env XBAR_RULE_SET)")
    parser.add_argument("--archs", default=None, metavar="LIST", help="Architectures to exclude: a set name or 'armv7,i386' (default: rule set's)")
    parser.add_argument("--deployment-target", default=None, metavar="VERSION", help="iOS deployment target to pin (default: rule set's, e.g. 11.0)")
    parser.add_argument("--checkout-dir", default=None, metavar="DIR", help="Directory searched when no paths are given (default: Carthage/Checkouts)")
    parser.add_argument("--list-rule-sets", action="store_true", help="List available rule sets and exit")


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--json", action="store_true", help="Print the run report as JSON at the end")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Warnings and errors only")
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Also show skipped projects and debug detail")

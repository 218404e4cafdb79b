"""xbar package.

Patches Xcode project files checked out by Carthage so that they build with
newer Xcode toolchains:

- xbar/core           rule tables and the pure build-setting patcher
- xbar/project        project model (pbxproj) and project discovery
- xbar/orchestration  run loop and logging

The command-line surface lives in ``xbar_cli`` and ``cli``.
"""

__version__ = "1.2.0"

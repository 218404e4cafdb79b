"""Architecture sets targeted for exclusion, one per tool revision."""

from __future__ import annotations

import re

from xbar.errors import ConfigurationError

ArchitectureSet = tuple[str, ...]

# Xcode 12 builds for arm64 simulators; device-only slices must be excluded.
XCODE12: ArchitectureSet = ("arm64", "arm64e", "armv7", "armv7s", "armv6", "armv8")

# Xcode 12 beta: 32-bit slices only.
BETA_CARTHAGE: ArchitectureSet = ("armv7", "i386")

ARCHITECTURE_SETS: dict[str, ArchitectureSet] = {
    "xcode12": XCODE12,
    "beta-carthage": BETA_CARTHAGE,
}


def architecture_set(name: str) -> ArchitectureSet:
    """Return the named architecture set. Raises ConfigurationError for unknown names."""
    try:
        return ARCHITECTURE_SETS[name]
    except KeyError:
        known = ", ".join(sorted(ARCHITECTURE_SETS))
        raise ConfigurationError(f"unknown architecture set {name!r} (known: {known})") from None


def parse_architectures(text: str) -> ArchitectureSet:
    """Build a set from 'armv7,i386' or 'armv7 i386'. Order kept, duplicates dropped."""
    archs: list[str] = []
    for token in re.split(r"[,\s]+", text or ""):
        if token and token not in archs:
            archs.append(token)
    if not archs:
        raise ConfigurationError("architecture list is empty")
    return tuple(archs)

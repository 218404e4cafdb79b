"""Build-setting rewrite rules and the rule sets (variants) built from them.

Each rule is bound to one build-setting key and is a predicate/rewrite pair:
``applies(value, context)`` decides whether the rule fires for the current
value, ``rewrite(value, context)`` returns the new value. A value is the
setting's string, ``None`` when the key is absent, or any other object for
list-valued settings (never rewritten).

Rule sets are plain data so a tool revision is a table entry, not a branch.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable

from xbar.core.architectures import BETA_CARTHAGE, XCODE12, ArchitectureSet
from xbar.errors import ConfigurationError

VALID_ARCHS = "VALID_ARCHS"
EXCLUDED_ARCHS = "EXCLUDED_ARCHS"
IPHONEOS_DEPLOYMENT_TARGET = "IPHONEOS_DEPLOYMENT_TARGET"

LEGACY_ARCH_STANDARD_KEYS = ("$(ARCHS_STANDARD)", "$(ARCHS_STANDARD_INCLUDING_64_BIT)")
ARCHS_STANDARD_64_BIT = "$(ARCHS_STANDARD_64_BIT)"

DEFAULT_DEPLOYMENT_TARGET = "11.0"


def _contains_substring(value: str, arch: str) -> bool:
    # Known defect kept on purpose: "armv7" is found inside "armv7s".
    return arch in value


def _contains_token(value: str, arch: str) -> bool:
    return arch in value.split()


CONTAINMENT: dict[str, Callable[[str, str], bool]] = {
    "substring": _contains_substring,
    "token": _contains_token,
}


@dataclass(frozen=True)
class PatchContext:
    """Run-wide inputs of the rules."""

    architectures: ArchitectureSet
    deployment_target: str | None = None
    containment: str = "substring"

    def contains(self, value: str, arch: str) -> bool:
        return CONTAINMENT[self.containment](value, arch)


@dataclass(frozen=True)
class Rule:
    name: str
    key: str
    applies: Callable[[Any, PatchContext], bool]
    rewrite: Callable[[Any, PatchContext], str]
    message: str


@dataclass(frozen=True)
class RuleSet:
    """A named, ordered rule list plus the defaults it was written for."""

    name: str
    rules: tuple[Rule, ...]
    architectures: ArchitectureSet
    deployment_target: str | None = None
    containment: str = "substring"
    # True: serialize the project after each changed configuration.
    write_each_configuration: bool = False
    description: str = ""

    def context(
        self,
        *,
        architectures: ArchitectureSet | None = None,
        deployment_target: str | None = None,
    ) -> PatchContext:
        """Build the patch context, overriding the rule set's defaults where given."""
        return PatchContext(
            architectures=architectures or self.architectures,
            deployment_target=deployment_target or self.deployment_target,
            containment=self.containment,
        )


# --- strip-valid-archs ---------------------------------------------------

def _valid_archs_present(value: Any, context: PatchContext) -> bool:
    return isinstance(value, str) and len(value) > 0


def _clear(value: Any, context: PatchContext) -> str:
    return ""


# --- remove-valid-arch-tokens --------------------------------------------

def _has_arch_token(value: Any, context: PatchContext) -> bool:
    if not isinstance(value, str):
        return False
    return any(f"{arch} " in value for arch in context.architectures)


def _remove_arch_tokens(value: Any, context: PatchContext) -> str:
    for arch in context.architectures:
        value = value.replace(f"{arch} ", "")
    return value


# --- normalize-arch-standard ---------------------------------------------

def _has_legacy_arch_standard(value: Any, context: PatchContext) -> bool:
    if not isinstance(value, str):
        return False
    return any(key in value for key in LEGACY_ARCH_STANDARD_KEYS)


def _arch_standard_64_bit(value: Any, context: PatchContext) -> str:
    return ARCHS_STANDARD_64_BIT


# --- exclude-architectures -----------------------------------------------

def _missing_exclusion(value: Any, context: PatchContext) -> bool:
    if value is None:
        return bool(context.architectures)
    if not isinstance(value, str):
        return False
    return any(not context.contains(value, arch) for arch in context.architectures)


def _append_exclusions(value: Any, context: PatchContext) -> str:
    excluded = value or ""
    for arch in context.architectures:
        if not context.contains(excluded, arch):
            excluded = f"{excluded} {arch}" if excluded else arch
    return excluded


# --- pin-deployment-target -----------------------------------------------

def _deployment_target_differs(value: Any, context: PatchContext) -> bool:
    if context.deployment_target is None or not isinstance(value, str):
        return False
    return value != context.deployment_target


def _deployment_target(value: Any, context: PatchContext) -> str:
    return context.deployment_target


STRIP_VALID_ARCHS = Rule(
    name="strip-valid-archs",
    key=VALID_ARCHS,
    applies=_valid_archs_present,
    rewrite=_clear,
    message="Found existing deprecated `VALID_ARCHS`, clearing these out",
)

REMOVE_VALID_ARCH_TOKENS = Rule(
    name="remove-valid-arch-tokens",
    key=VALID_ARCHS,
    applies=_has_arch_token,
    rewrite=_remove_arch_tokens,
    message="Removed excluded architectures from `VALID_ARCHS`",
)

NORMALIZE_ARCH_STANDARD = Rule(
    name="normalize-arch-standard",
    key=VALID_ARCHS,
    applies=_has_legacy_arch_standard,
    rewrite=_arch_standard_64_bit,
    message=f"Found legacy key in `VALID_ARCHS`, updating to use {ARCHS_STANDARD_64_BIT}",
)

EXCLUDE_ARCHITECTURES = Rule(
    name="exclude-architectures",
    key=EXCLUDED_ARCHS,
    applies=_missing_exclusion,
    rewrite=_append_exclusions,
    message="Updated values for `EXCLUDED_ARCHS`",
)

PIN_DEPLOYMENT_TARGET = Rule(
    name="pin-deployment-target",
    key=IPHONEOS_DEPLOYMENT_TARGET,
    applies=_deployment_target_differs,
    rewrite=_deployment_target,
    message="Updating iOS deployment target",
)

XCODE12_RULES = RuleSet(
    name="xcode12",
    rules=(STRIP_VALID_ARCHS, EXCLUDE_ARCHITECTURES, PIN_DEPLOYMENT_TARGET),
    architectures=XCODE12,
    deployment_target=DEFAULT_DEPLOYMENT_TARGET,
    description="Clear VALID_ARCHS, exclude device slices, pin iOS 11.0",
)

BETA_CARTHAGE_RULES = RuleSet(
    name="beta-carthage",
    rules=(REMOVE_VALID_ARCH_TOKENS, NORMALIZE_ARCH_STANDARD, EXCLUDE_ARCHITECTURES),
    architectures=BETA_CARTHAGE,
    write_each_configuration=True,
    description="Drop armv7/i386 from VALID_ARCHS and exclude them",
)

STRICT_RULES = replace(
    XCODE12_RULES,
    name="strict",
    containment="token",
    description="Like xcode12, matching EXCLUDED_ARCHS by whole token",
)

RULE_SETS: dict[str, RuleSet] = {
    rs.name: rs for rs in (XCODE12_RULES, BETA_CARTHAGE_RULES, STRICT_RULES)
}

DEFAULT_RULE_SET = XCODE12_RULES.name


def rule_set(name: str) -> RuleSet:
    """Return the named rule set. Raises ConfigurationError for unknown names."""
    try:
        return RULE_SETS[name]
    except KeyError:
        known = ", ".join(RULE_SETS)
        raise ConfigurationError(f"unknown rule set {name!r} (known: {known})") from None


def available_rule_sets() -> list[RuleSet]:
    return list(RULE_SETS.values())

"""Rule tables and the pure build-setting patcher."""

from .patcher import PatchResult, SettingChange, patch_settings
from .rules import PatchContext, Rule, RuleSet, available_rule_sets, rule_set

__all__ = [
    "PatchContext",
    "PatchResult",
    "Rule",
    "RuleSet",
    "SettingChange",
    "available_rule_sets",
    "patch_settings",
    "rule_set",
]

"""Pure build-setting patcher: current settings in, new settings and changes out.

No I/O and no logging here; callers decide what to print and what to write.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from xbar.core.rules import PatchContext, Rule


@dataclass(frozen=True)
class SettingChange:
    rule: str
    key: str
    old: Any
    new: str
    message: str = ""


@dataclass
class PatchResult:
    settings: dict[str, Any]
    changes: list[SettingChange] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.changes)


def patch_settings(
    settings: Mapping[str, Any],
    rules: Iterable[Rule],
    context: PatchContext,
) -> PatchResult:
    """
    Run rules in order against a copy of settings.

    Later rules see the values produced by earlier ones. A rule that fires but
    yields the value it was given is not recorded as a change.
    """
    working = dict(settings)
    result = PatchResult(settings=working)
    for rule in rules:
        old = working.get(rule.key)
        if not rule.applies(old, context):
            continue
        new = rule.rewrite(old, context)
        if new == old:
            continue
        working[rule.key] = new
        result.changes.append(
            SettingChange(rule=rule.name, key=rule.key, old=old, new=new, message=rule.message)
        )
    return result

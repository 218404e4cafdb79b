"""CLI handlers: patch run and rule-set listing."""

from __future__ import annotations

import json
from typing import Any


def _clog() -> Any:
    from xbar.orchestration.logging import get_logger

    return get_logger("cli")


def _err(msg: str) -> None:
    """Log unified error message (via logger, respects --quiet)."""
    _clog().error("xbar: %s", msg)


def handle_patch(args: Any) -> int:
    """Locate projects, patch them, print the rebuild hint (and the JSON report with --json)."""
    from xbar.config import resolve_run_config
    from xbar.errors import XbarError
    from xbar.orchestration.run import run_patch
    from xbar.project.locator import locate_projects

    try:
        config = resolve_run_config(args)
        located = locate_projects(config.paths, checkout_dir=config.checkout_dir)
    except XbarError as exc:
        _err(str(exc))
        return 1
    report = run_patch(located.projects, config.rules, config.context, skipped=located.skipped)
    if getattr(args, "json", False):
        print(json.dumps(report, indent=2, ensure_ascii=False))
    return 0


def handle_rule_sets(args: Any) -> int:
    """Print every rule set with its rules and defaults."""
    from xbar.core.rules import DEFAULT_RULE_SET, available_rule_sets

    rule_sets = available_rule_sets()
    if getattr(args, "json", False):
        print(json.dumps([_rule_set_dict(rs) for rs in rule_sets], indent=2, ensure_ascii=False))
        return 0
    for rs in rule_sets:
        marker = " (default)" if rs.name == DEFAULT_RULE_SET else ""
        print(f"{rs.name}{marker}: {rs.description}")
        print(f"  rules:             {', '.join(rule.name for rule in rs.rules)}")
        print(f"  architectures:     {', '.join(rs.architectures)}")
        print(f"  deployment target: {rs.deployment_target or '-'}")
        print(f"  match:             {rs.containment}")
        print(f"  writes:            {'per configuration' if rs.write_each_configuration else 'per project'}")
    return 0


def _rule_set_dict(rs: Any) -> dict[str, Any]:
    return {
        "name": rs.name,
        "description": rs.description,
        "rules": [rule.name for rule in rs.rules],
        "architectures": list(rs.architectures),
        "deployment_target": rs.deployment_target,
        "containment": rs.containment,
        "write_each_configuration": rs.write_each_configuration,
    }

"""Run configuration: CLI flag > XBAR_* environment > pyproject [tool.xbar] > rule-set default."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from xbar.core.architectures import ArchitectureSet, architecture_set, parse_architectures
from xbar.core.rules import DEFAULT_RULE_SET, PatchContext, RuleSet, rule_set
from xbar.errors import ConfigurationError
from xbar.project.locator import DEFAULT_CHECKOUT_DIR

ENV_PREFIX = "XBAR_"
OPTION_NAMES = ("rule_set", "archs", "deployment_target", "checkout_dir")

_VERSION_RE = re.compile(r"^\d+(\.\d+){0,2}$")


@dataclass(slots=True)
class RunConfig:
    """Resolved parameters of one run."""

    rules: RuleSet
    context: PatchContext
    paths: list[str] = field(default_factory=list)
    checkout_dir: str = DEFAULT_CHECKOUT_DIR


def read_pyproject_options(project_root: Path) -> dict[str, str]:
    """Return string options from the [tool.xbar] table of project_root/pyproject.toml."""
    pyproject = project_root / "pyproject.toml"
    if not pyproject.exists():
        return {}
    try:
        text = pyproject.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return {}
    m = re.search(r"^\[tool\.xbar\]\s*$(.*?)(?=^\[|\Z)", text, re.MULTILINE | re.DOTALL)
    if not m:
        return {}
    options: dict[str, str] = {}
    for name in OPTION_NAMES:
        value = re.search(rf'^{name}\s*=\s*["\']([^"\']*)["\']', m.group(1), re.MULTILINE)
        if value:
            options[name] = value.group(1).strip()
    return options


def resolve_option(
    name: str,
    override: str | None,
    project_root: Path,
    pyproject_options: dict[str, str] | None = None,
) -> str | None:
    """Resolve one option: override > XBAR_<NAME> > [tool.xbar] <name> > None."""
    if override is not None and override.strip():
        return override.strip()
    env_val = os.environ.get(ENV_PREFIX + name.upper())
    if env_val is not None and env_val.strip():
        return env_val.strip()
    if pyproject_options is None:
        pyproject_options = read_pyproject_options(project_root)
    return pyproject_options.get(name) or None


def _architectures(raw: str | None) -> ArchitectureSet | None:
    if raw is None:
        return None
    try:
        return architecture_set(raw)
    except ConfigurationError:
        return parse_architectures(raw)


def _deployment_target(raw: str | None) -> str | None:
    if raw is not None and not _VERSION_RE.match(raw):
        raise ConfigurationError(f"invalid deployment target {raw!r} (expected e.g. 11.0)")
    return raw


def resolve_run_config(args: Any, project_root: Path | None = None) -> RunConfig:
    """Build the RunConfig for parsed CLI args. Raises ConfigurationError."""
    root = project_root or Path.cwd()
    pyproject_options = read_pyproject_options(root)

    def option(name: str) -> str | None:
        return resolve_option(name, getattr(args, name, None), root, pyproject_options)

    rules = rule_set(option("rule_set") or DEFAULT_RULE_SET)
    context = rules.context(
        architectures=_architectures(option("archs")),
        deployment_target=_deployment_target(option("deployment_target")),
    )
    return RunConfig(
        rules=rules,
        context=context,
        paths=[str(p) for p in (getattr(args, "paths", None) or [])],
        checkout_dir=option("checkout_dir") or DEFAULT_CHECKOUT_DIR,
    )

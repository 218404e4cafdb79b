"""Project discovery: explicit paths, or a search of the Carthage checkouts."""

from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from xbar.errors import DiscoveryError, ProjectLoadError
from xbar.orchestration.logging import get_logger
from xbar.project.model import PROJECT_SUFFIX, Project

DEFAULT_CHECKOUT_DIR = "Carthage/Checkouts"


def _log() -> Any:
    return get_logger("locator")


@dataclass
class LocateResult:
    projects: list[Project] = field(default_factory=list)
    skipped: list[dict[str, str]] = field(default_factory=list)


def discovery_command(checkout_dir: str | Path = DEFAULT_CHECKOUT_DIR) -> list[str]:
    return ["find", str(checkout_dir), "-type", "d", "-name", f"*{PROJECT_SUFFIX.lstrip('.')}", "-print"]


def discover_project_paths(checkout_dir: str | Path = DEFAULT_CHECKOUT_DIR) -> list[str]:
    """
    Run the search command and return one path per non-blank output line.

    Raises DiscoveryError when the command cannot run or exits non-zero.
    """
    cmd = discovery_command(checkout_dir)
    shown = shlex.join(cmd)
    _log().info(
        "No arguments found, automatically looking for project files in %s using the following command:",
        checkout_dir,
    )
    _log().info("$ %s\n", shown)
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except OSError as exc:
        raise DiscoveryError(f"cannot run `{shown}`: {exc}") from exc
    if proc.returncode != 0:
        detail = (proc.stderr or "").strip() or f"exit code {proc.returncode}"
        raise DiscoveryError(f"`{shown}` failed: {detail}")
    paths = [line.strip() for line in proc.stdout.splitlines() if line.strip()]
    if not paths:
        _log().info("No project files found in %s.", checkout_dir)
    return paths


def load_projects(paths: Sequence[str]) -> LocateResult:
    """Parse each path in order. Unparsable paths are skipped without affecting the rest."""
    result = LocateResult()
    for path in paths:
        try:
            result.projects.append(Project.load(path))
        except ProjectLoadError as exc:
            # Skipped quietly; shown with --verbose and listed in the report.
            _log().debug("Skipping %s: %s", path, exc.cause)
            result.skipped.append({"path": path, "reason": str(exc.cause)})
    return result


def locate_projects(
    paths: Sequence[str] | None = None,
    *,
    checkout_dir: str | Path = DEFAULT_CHECKOUT_DIR,
) -> LocateResult:
    """Explicit paths are used verbatim; none means search checkout_dir."""
    if paths:
        candidates = list(paths)
    else:
        candidates = discover_project_paths(checkout_dir)
    return load_projects(candidates)

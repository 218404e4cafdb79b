"""Run loop: patch every configuration of every located project, save what changed."""

from __future__ import annotations

from typing import Any, Sequence

from xbar.core.patcher import PatchResult, patch_settings
from xbar.core.rules import PatchContext, RuleSet
from xbar.errors import ProjectWriteError
from xbar.orchestration.logging import get_logger
from xbar.project.model import BuildConfiguration, Project

REBUILD_COMMAND = "carthage build --cache-builds --platform iOS,watchOS"


def _log() -> Any:
    return get_logger("run")


def new_report(rules: RuleSet, context: PatchContext) -> dict[str, Any]:
    return {
        "rule_set": rules.name,
        "architectures": list(context.architectures),
        "deployment_target": context.deployment_target,
        "projects": [],
        "modified": [],
        "changes": [],
        "writes": 0,
        "skipped": [],
        "errors": [],
    }


def run_patch(
    projects: Sequence[Project],
    rules: RuleSet,
    context: PatchContext,
    *,
    skipped: Sequence[dict[str, str]] = (),
) -> dict[str, Any]:
    """
    Patch projects in order and return the run report.

    A project (or, for rule sets that write per configuration, a
    configuration) is saved only when at least one setting changed. Save
    failures are logged and reported; the remaining projects still run.
    """
    report = new_report(rules, context)
    report["skipped"].extend(skipped)
    _log().info(
        "Removing architectures `%s` from %s projects...\n",
        ", ".join(context.architectures),
        len(projects),
    )
    for project in projects:
        _patch_project(project, rules, context, report)
    _log().info("\nDone! Now use the following command to rebuild your workspace:")
    _log().info("$ %s", REBUILD_COMMAND)
    return report


def _patch_project(
    project: Project,
    rules: RuleSet,
    context: PatchContext,
    report: dict[str, Any],
) -> None:
    _log().info("Reading project: %s", project.path)
    report["projects"].append(project.path)
    project_changed = False
    for configuration in project.configurations():
        result = patch_settings(configuration.settings, rules.rules, context)
        if not result.changed:
            continue
        project_changed = True
        configuration.apply(result.settings)
        _record_changes(project, configuration, result, report)
        if rules.write_each_configuration:
            _save(project, report, configuration)
    if project_changed and not rules.write_each_configuration:
        _save(project, report)


def _record_changes(
    project: Project,
    configuration: BuildConfiguration,
    result: PatchResult,
    report: dict[str, Any],
) -> None:
    for change in result.changes:
        _log().info(
            "%s for %s: %r -> %r",
            change.message,
            configuration.label,
            change.old,
            change.new,
        )
        report["changes"].append(
            {
                "path": project.path,
                "configuration": configuration.name,
                "target": configuration.target_name,
                "rule": change.rule,
                "key": change.key,
                "old": change.old,
                "new": change.new,
            }
        )


def _save(
    project: Project,
    report: dict[str, Any],
    configuration: BuildConfiguration | None = None,
) -> None:
    try:
        project.save()
    except ProjectWriteError as exc:
        _log().error("An exception occurred while trying to save changes: %s", exc.cause)
        report["errors"].append(
            {
                "path": project.path,
                "configuration": configuration.name if configuration else None,
                "error": str(exc.cause),
            }
        )
        return
    report["writes"] += 1
    if project.path not in report["modified"]:
        report["modified"].append(project.path)
    if configuration is not None:
        _log().info("Saved changes for %s", configuration.label)
    else:
        _log().info("Saved changes for %s.", project.path)

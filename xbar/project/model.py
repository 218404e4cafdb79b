"""Project and build-configuration model on top of pbxproj (mod-pbxproj)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from pbxproj import XcodeProject

from xbar.core.rules import EXCLUDED_ARCHS, IPHONEOS_DEPLOYMENT_TARGET, VALID_ARCHS
from xbar.errors import ProjectLoadError, ProjectWriteError

PROJECT_FILE = "project.pbxproj"
PROJECT_SUFFIX = ".xcodeproj"
CONFIGURATION_SECTION = "XCBuildConfiguration"

# The only settings xbar reads or writes.
MANAGED_KEYS = (VALID_ARCHS, EXCLUDED_ARCHS, IPHONEOS_DEPLOYMENT_TARGET)


def project_file_path(path: str | Path) -> Path:
    """Accept either an .xcodeproj bundle or its project.pbxproj."""
    path = Path(path)
    if path.name == PROJECT_FILE:
        return path
    return path / PROJECT_FILE


def _target_name(build_settings: Any) -> str:
    for key in ("TARGET_NAME", "PRODUCT_NAME"):
        name = build_settings[key]
        if isinstance(name, str):
            return name
    return ""


@dataclass
class BuildConfiguration:
    """Snapshot of one XCBuildConfiguration, bound to its pbxproj object."""

    name: str
    target_name: str
    settings: dict[str, Any]
    source: Any = field(default=None, repr=False, compare=False)

    @classmethod
    def from_object(cls, obj: Any) -> BuildConfiguration:
        build_settings = obj["buildSettings"]
        settings: dict[str, Any] = {}
        for key in MANAGED_KEYS:
            value = build_settings[key]
            if value is not None:
                settings[key] = value
        return cls(
            name=obj["name"] or "",
            target_name=_target_name(build_settings),
            settings=settings,
            source=obj,
        )

    def apply(self, settings: Mapping[str, Any]) -> list[str]:
        """Write back keys whose value differs from the snapshot. Returns written keys."""
        build_settings = self.source["buildSettings"]
        written: list[str] = []
        for key, value in settings.items():
            if self.settings.get(key) == value:
                continue
            build_settings[key] = value
            self.settings[key] = value
            written.append(key)
        return written

    @property
    def label(self) -> str:
        return f"{self.target_name} ({self.name})" if self.target_name else self.name


class Project:
    """A parsed project file plus the path it was found at."""

    def __init__(self, path: str, xcode_project: XcodeProject) -> None:
        self.path = path
        self.xcode_project = xcode_project

    @classmethod
    def load(cls, path: str) -> Project:
        """Parse path. Raises ProjectLoadError on any parse or read failure."""
        try:
            xcode_project = XcodeProject.load(str(project_file_path(path)))
        except Exception as exc:
            raise ProjectLoadError(path, exc) from exc
        return cls(path, xcode_project)

    @property
    def project_file(self) -> Path:
        return project_file_path(self.path)

    def configurations(self) -> list[BuildConfiguration]:
        objects = self.xcode_project.objects.get_objects_in_section(CONFIGURATION_SECTION)
        return [BuildConfiguration.from_object(obj) for obj in objects]

    def save(self) -> None:
        """Serialize back to the original project.pbxproj. Raises ProjectWriteError."""
        try:
            self.xcode_project.save(str(self.project_file))
        except Exception as exc:
            raise ProjectWriteError(self.path, exc) from exc

    def __repr__(self) -> str:
        return f"Project({self.path!r})"

"""Error types raised by xbar."""

from __future__ import annotations


class XbarError(Exception):
    """Base class for all xbar errors."""


class ConfigurationError(XbarError):
    """Unknown rule set, empty architecture list or an invalid option value."""


class DiscoveryError(XbarError):
    """The project search command failed. Fatal: nothing is processed."""


class ProjectLoadError(XbarError):
    """A single project file could not be parsed."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"cannot read project {path}: {cause}")
        self.path = path
        self.cause = cause


class ProjectWriteError(XbarError):
    """A single project file could not be written back."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"cannot save project {path}: {cause}")
        self.path = path
        self.cause = cause

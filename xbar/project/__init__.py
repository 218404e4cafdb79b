"""Project model and discovery."""

from .locator import LocateResult, locate_projects
from .model import BuildConfiguration, Project

__all__ = ["BuildConfiguration", "LocateResult", "Project", "locate_projects"]

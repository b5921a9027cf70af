"""Layered dotenv loading for multi-site applications."""
from __future__ import annotations

from .loader import EnvironmentLoader, EnvironmentResolver, InvocationMode, MissingEnvironmentError
from .project import ProjectEnvironmentResolver

__all__ = [
    "EnvironmentLoader",
    "EnvironmentResolver",
    "InvocationMode",
    "MissingEnvironmentError",
    "ProjectEnvironmentResolver",
]

"""Patch build settings of targets inside generated Xcode projects."""

from podfix.errors import LoadError, NoMatchWarning, PodfixError, SaveError
from podfix.patcher import PatchedConfiguration, PatchReport, patch

__all__ = [
    "LoadError",
    "NoMatchWarning",
    "PatchReport",
    "PatchedConfiguration",
    "PodfixError",
    "SaveError",
    "patch",
]

__version__ = "0.1.0"

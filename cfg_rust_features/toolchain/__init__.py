"""rustc-backed collaborators: snippet prober and version inspector."""

from .base import BaseProber, Channel, RustcVersion, ToolchainSnapshot
from .prober import RustcProber
from .version import VersionInspector

__all__ = [
    "BaseProber",
    "Channel",
    "RustcProber",
    "RustcVersion",
    "ToolchainSnapshot",
    "VersionInspector",
]

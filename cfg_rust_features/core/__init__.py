"""Core engine: probe dispatch, aggregation and instruction emission."""

from .dispatch import ProbeResult
from .emitter import Emitter, emit_rerun_if_changed_file
from .engine import CfgRustFeatures, EnabledFeatures, emit
from .errors import (
    CfgRustFeaturesError,
    ProbeInfrastructureError,
    ToolchainUnavailableError,
    UnsupportedFeatureError,
)
from .toolchain import ToolchainContext

__all__ = [
    "CfgRustFeatures",
    "CfgRustFeaturesError",
    "EnabledFeatures",
    "Emitter",
    "ProbeInfrastructureError",
    "ProbeResult",
    "ToolchainContext",
    "ToolchainUnavailableError",
    "UnsupportedFeatureError",
    "emit",
    "emit_rerun_if_changed_file",
]

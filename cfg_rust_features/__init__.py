"""
cfg-rust-features

Set cfg options according to probing for Rust compiler, language, and
library features, from a cargo build script's point of view.
"""

__version__ = "0.1.2"

from .core import (
    CfgRustFeatures,
    CfgRustFeaturesError,
    EnabledFeatures,
    Emitter,
    ProbeInfrastructureError,
    ProbeResult,
    ToolchainContext,
    ToolchainUnavailableError,
    UnsupportedFeatureError,
    emit,
    emit_rerun_if_changed_file,
)
from .features import FeatureCategory, FeatureDescriptor, Probe, ProbeKind

__all__ = [
    "CfgRustFeatures",
    "CfgRustFeaturesError",
    "EnabledFeatures",
    "Emitter",
    "FeatureCategory",
    "FeatureDescriptor",
    "Probe",
    "ProbeInfrastructureError",
    "ProbeKind",
    "ProbeResult",
    "ToolchainContext",
    "ToolchainUnavailableError",
    "UnsupportedFeatureError",
    "emit",
    "emit_rerun_if_changed_file",
]

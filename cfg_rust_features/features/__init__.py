"""Registry of the Rust features that can be probed."""

from .registry import (
    DEFINITION,
    FeatureCategory,
    FeatureDescriptor,
    Probe,
    ProbeKind,
    feature_names,
    lookup,
)

__all__ = [
    "DEFINITION",
    "FeatureCategory",
    "FeatureDescriptor",
    "Probe",
    "ProbeKind",
    "feature_names",
    "lookup",
]

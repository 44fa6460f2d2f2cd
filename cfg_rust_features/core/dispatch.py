"""Runs a feature's probe strategy against a toolchain context."""

from ..features.registry import FeatureCategory, FeatureDescriptor, ProbeKind
from .toolchain import ToolchainContext

ProbeResult = frozenset[FeatureCategory] | None


def probe(descriptor: FeatureDescriptor, context: ToolchainContext) -> bool:
    """Whether the toolchain provides the feature."""
    strategy = descriptor.probe
    kind = strategy.kind
    if kind is ProbeKind.EXPRESSION:
        return context.prober.probe_expression(strategy.argument)
    if kind is ProbeKind.TYPE_EXISTS:
        return context.prober.probe_type(strategy.argument)
    if kind is ProbeKind.PATH_EXISTS:
        return context.prober.probe_path(strategy.argument)
    if kind is ProbeKind.ALWAYS_ENABLED:
        return True
    if kind is ProbeKind.CHANNEL_SUPPORTS_UNSTABLE:
        return context.snapshot.channel.supports_features()
    raise ValueError(f"unknown probe kind: {kind!r}")


def categorize(descriptor: FeatureDescriptor, enabled: bool) -> ProbeResult:
    """All of the feature's categories when enabled, else None."""
    return descriptor.categories if enabled else None

"""Probes requested features and emits cfg options for the ones rustc provides."""

from typing import Hashable, Iterable, TypeVar

from ..features.registry import FeatureDescriptor, lookup
from ..utils.config import Settings
from ..utils.logging import get_logger
from . import dispatch
from .dispatch import ProbeResult
from .emitter import Emitter
from .errors import UnsupportedFeatureError
from .toolchain import ToolchainContext

logger = get_logger(__name__)

K = TypeVar("K", bound=Hashable)

EnabledFeatures = dict[K, ProbeResult]

CFG_VERSION_WARNING = "Rust feature cfg_version is now stable. Consider using instead."


class CfgRustFeatures:
    """
    Information about the current Rust compiler, and the operations with it.

    The supported feature names correspond to The Unstable Book where
    appropriate, plus a few extras such as "rust1" and "unstable_features".
    Each emitted cfg option categorizes its feature as pertaining to the
    compiler (`rust_comp_feature`), the language (`rust_lang_feature`) or the
    standard library (`rust_lib_feature`).

    Example build-script use:

        CfgRustFeatures().emit_multiple(["never_type", "iter_zip", "unstable_features"])
    """

    def __init__(
        self,
        context: ToolchainContext | None = None,
        emitter: Emitter | None = None,
        settings: Settings | None = None,
    ):
        """
        Gather information about the current Rust compiler.

        Args:
            context: Toolchain to probe; detected from settings when omitted
            emitter: Instruction writer; stdout with the configured prefix when omitted
            settings: Settings to use; read from the environment and config file when omitted

        Raises:
            ToolchainUnavailableError: rustc could not be run or identified
            ProbeInfrastructureError: snippets cannot be compiled (e.g. bad OUT_DIR)
        """
        self.settings = settings or Settings.from_yaml()
        self.context = context or ToolchainContext.detect(self.settings)
        self.emitter = emitter or Emitter(
            prefix=self.settings.emit.prefix, scope=self.settings.emit.scope
        )

    def probe_feature(self, name: str) -> ProbeResult:
        """
        Test whether the current rustc provides a feature as stable (or, for
        "unstable_features", whether it accepts unstable ones at all).

        Returns the feature's categories if enabled, else None.

        Raises:
            UnsupportedFeatureError: the name is not recognized
        """
        return self._probe(self._lookup(name))

    def probe_multiple(self, names: Iterable[K]) -> EnabledFeatures[K]:
        """
        Probe each named feature, in the given order.

        Keys of the result are the caller's own values. The first unrecognized
        name aborts the whole call, and nothing probed before it is returned.

        Raises:
            UnsupportedFeatureError: a name is not recognized
        """
        enabled: EnabledFeatures[K] = {}
        for name in names:
            enabled[name] = self._probe(self._lookup(str(name)))
        return enabled

    def emit_multiple(self, names: Iterable[K]) -> EnabledFeatures[K]:
        """
        Like probe_multiple, and also emit a `rustc-cfg` instruction for each
        category of each enabled feature. Nothing is emitted if any name is
        unrecognized.

        Raises:
            UnsupportedFeatureError: a name is not recognized
        """
        enabled = self.probe_multiple(names)

        any_enabled = False
        for name, categories in enabled.items():
            if categories is not None:
                self.emitter.feature(str(name), categories)
                any_enabled = True

        if any_enabled and self.probe_feature("cfg_version") is not None:
            self.emitter.warning(CFG_VERSION_WARNING)
        return enabled

    # ── Internal helpers ───────────────────────────────────────────────────

    def _lookup(self, name: str) -> FeatureDescriptor:
        descriptor = lookup(name)
        if descriptor is None:
            logger.error("unsupported_feature", feature=name)
            raise UnsupportedFeatureError(name, issues_url=self.settings.emit.issues_url)
        return descriptor

    def _probe(self, descriptor: FeatureDescriptor) -> ProbeResult:
        result = dispatch.categorize(descriptor, dispatch.probe(descriptor, self.context))
        logger.debug(
            "feature_probed",
            feature=descriptor.name,
            enabled=result is not None,
            categories=sorted(c.value for c in result) if result else [],
        )
        return result


def emit(names: Iterable[K], build_script: str | None = None) -> EnabledFeatures[K]:
    """
    Convenience for a build script's main: optionally narrow the rerun trigger
    to the build script itself, then probe and emit the named features.

    Raises:
        ToolchainUnavailableError, ProbeInfrastructureError, UnsupportedFeatureError
    """
    settings = Settings.from_yaml()
    emitter = Emitter(prefix=settings.emit.prefix, scope=settings.emit.scope)
    if build_script:
        emitter.rerun_if_changed(build_script)
    return CfgRustFeatures(emitter=emitter, settings=settings).emit_multiple(names)

"""The toolchain context an engine probes against."""

from dataclasses import dataclass

from ..toolchain.base import BaseProber, ToolchainSnapshot
from ..toolchain.prober import RustcProber
from ..toolchain.version import VersionInspector
from ..utils.config import Settings


@dataclass(frozen=True)
class ToolchainContext:
    """A ready prober plus the compiler's version/channel snapshot."""

    prober: BaseProber
    snapshot: ToolchainSnapshot

    @classmethod
    def detect(cls, settings: Settings | None = None) -> "ToolchainContext":
        """Inspect the configured rustc and set up the prober.

        Raises ToolchainUnavailableError or ProbeInfrastructureError.
        """
        settings = settings or Settings.from_yaml()
        snapshot = VersionInspector(rustc=settings.rustc, timeout=settings.probing.timeout).read()
        prober = RustcProber(
            out_dir=settings.out_dir,
            rustc=settings.rustc,
            target=settings.target,
            rustflags=settings.get_rustflags(),
            timeout=settings.probing.timeout,
            keep_artifacts=settings.probing.keep_artifacts,
        )
        return cls(prober=prober, snapshot=snapshot)

"""Probes rustc by compiling small snippets in a scratch directory.

Each probe compiles one tiny library crate from stdin; the probe succeeds
when rustc exits with status 0.
"""

import itertools
import os
import shutil
import subprocess
from pathlib import Path

from ..core.errors import ProbeInfrastructureError
from ..utils.logging import get_logger
from .base import BaseProber

logger = get_logger(__name__)


class RustcProber(BaseProber):
    """Expression/type/path prober backed by a real rustc."""

    def __init__(
        self,
        out_dir: str | Path | None,
        rustc: str = "rustc",
        target: str | None = None,
        rustflags: list[str] | None = None,
        timeout: float = 120.0,
        keep_artifacts: bool = False,
    ):
        self.rustc = rustc
        self.target = target
        self.rustflags = list(rustflags or [])
        self.timeout = timeout
        self.keep_artifacts = keep_artifacts
        self.out_dir = self._check_out_dir(out_dir)
        self._uuid = itertools.count()

        # The prober is only usable if a trivially valid crate compiles.
        if not self.probe(""):
            raise ProbeInfrastructureError(
                f"{rustc!r} could not compile an empty crate",
                context={"rustc": rustc, "out_dir": str(self.out_dir), "target": target},
            )

    # ── Probes ─────────────────────────────────────────────────────────────

    def probe_expression(self, code: str) -> bool:
        """Check whether `code` compiles as an expression."""
        return self.probe(f"pub fn probe() {{ let _ = {code}; }}")

    def probe_type(self, type_expr: str) -> bool:
        """Check whether `type_expr` names a type."""
        return self.probe(f"pub type Probe = {type_expr};")

    def probe_path(self, path: str) -> bool:
        """Check whether `path` can be imported."""
        return self.probe(f"pub use {path};")

    def probe(self, source: str) -> bool:
        """Compile `source` as a library crate and report whether it succeeded."""
        crate_name = f"probe{next(self._uuid)}"
        command = [
            self.rustc,
            "-",
            "--crate-name",
            crate_name,
            "--crate-type=lib",
            "--emit=llvm-ir",
            "--out-dir",
            str(self.out_dir),
        ]
        if self.target:
            command += ["--target", self.target]
        command += self.rustflags

        try:
            result = subprocess.run(
                command,
                input=source,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning("probe_timed_out", crate=crate_name, timeout=self.timeout)
            return False
        except (FileNotFoundError, OSError) as e:
            logger.warning("probe_failed_to_run", crate=crate_name, error=str(e))
            return False
        finally:
            if not self.keep_artifacts:
                self._remove_artifacts(crate_name)

        logger.debug("probe_compiled", crate=crate_name, status=result.returncode)
        return result.returncode == 0

    # ── Internal helpers ───────────────────────────────────────────────────

    @staticmethod
    def _check_out_dir(out_dir: str | Path | None) -> Path:
        if not out_dir:
            raise ProbeInfrastructureError("OUT_DIR is not set; a scratch directory is required")
        path = Path(out_dir)
        if not path.is_dir():
            raise ProbeInfrastructureError(
                f"OUT_DIR {str(path)!r} is not a directory", context={"out_dir": str(path)}
            )
        if not os.access(path, os.W_OK):
            raise ProbeInfrastructureError(
                f"OUT_DIR {str(path)!r} is not writable", context={"out_dir": str(path)}
            )
        return path

    def _remove_artifacts(self, crate_name: str) -> None:
        for artifact in self.out_dir.glob(f"{crate_name}.*"):
            if artifact.is_dir():
                shutil.rmtree(artifact, ignore_errors=True)
            else:
                artifact.unlink(missing_ok=True)

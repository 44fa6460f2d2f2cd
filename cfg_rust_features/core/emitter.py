"""Writes build-script instructions for cargo.

Every instruction is one line, `<prefix>:<name>=<arg>`, written to stdout by
default and flushed immediately. Nothing written is ever taken back.
"""

import sys
from typing import Iterable, TextIO

from ..features.registry import FeatureCategory


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class Emitter:
    """Build-instruction channel writer."""

    def __init__(self, stream: TextIO | None = None, prefix: str = "cargo", scope: str = "rust"):
        if not prefix:
            raise ValueError("instruction prefix must not be empty")
        if not scope:
            raise ValueError("cfg scope must not be empty")
        self._stream = stream
        self.prefix = prefix
        self.scope = scope

    @property
    def stream(self) -> TextIO:
        # Resolved per write so a redirected sys.stdout is honored
        return self._stream if self._stream is not None else sys.stdout

    def instruction(self, name: str, arg: str | None = None) -> None:
        """Write one instruction. Empty names and empty arguments are rejected."""
        if not name:
            raise ValueError("instruction name must not be empty")
        if arg is not None and not arg:
            raise ValueError(f"argument of instruction {name!r} must not be empty")
        line = f"{self.prefix}:{name}" if arg is None else f"{self.prefix}:{name}={arg}"
        stream = self.stream
        stream.write(line + "\n")
        stream.flush()

    def feature(self, name: str, categories: Iterable[FeatureCategory | str]) -> None:
        """Set `<scope>_<category>_feature="<name>"` for each category.

        With the default scope this lets crate code use
        `#[cfg(rust_lib_feature = "iter_zip")]`.
        """
        for category in sorted(FeatureCategory(c) for c in categories):
            self.instruction(
                "rustc-cfg", f"{self.scope}_{category.value}_feature={_quote(name)}"
            )

    def warning(self, message: str) -> None:
        """Have cargo display a warning after the build script finishes."""
        self.instruction("warning", message)

    def rerun_if_changed(self, filename: str) -> None:
        """Have cargo rerun the build script only when `filename` changes."""
        self.instruction("rerun-if-changed", filename)


def emit_rerun_if_changed_file(filename: str) -> None:
    """Tell cargo to check only `filename`, not the whole package, for reruns.

    Intended to be called once for each file of a build script.
    """
    Emitter().rerun_if_changed(filename)

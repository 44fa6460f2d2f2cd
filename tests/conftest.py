"""Shared fakes for the engine tests."""

from datetime import date

import pytest
import structlog

from cfg_rust_features.core import CfgRustFeatures, Emitter, ToolchainContext
from cfg_rust_features.toolchain import BaseProber, Channel, RustcVersion, ToolchainSnapshot
from cfg_rust_features.utils import logging as log_utils
from cfg_rust_features.utils.config import Settings


class FakeProber(BaseProber):
    """Answers probes from a fixed set of snippets that "compile"."""

    def __init__(self, compiles: set[str] | None = None):
        self.compiles = compiles or set()
        self.calls: list[tuple[str, str]] = []

    def probe_expression(self, code: str) -> bool:
        self.calls.append(("expression", code))
        return code in self.compiles

    def probe_type(self, type_expr: str) -> bool:
        self.calls.append(("type", type_expr))
        return type_expr in self.compiles

    def probe_path(self, path: str) -> bool:
        self.calls.append(("path", path))
        return path in self.compiles


def make_context(
    channel: Channel = Channel.STABLE, compiles: set[str] | None = None
) -> ToolchainContext:
    """A context with a fixed 1.70.0 snapshot and a FakeProber."""
    snapshot = ToolchainSnapshot(
        version=RustcVersion(1, 70, 0), channel=channel, date=date(2023, 5, 31)
    )
    return ToolchainContext(prober=FakeProber(compiles), snapshot=snapshot)


@pytest.fixture
def settings():
    """Defaults plus whatever the environment sets."""
    return Settings()


@pytest.fixture
def stable_engine(settings):
    """Engine on a stable toolchain where only iter_zip's path resolves."""
    return CfgRustFeatures(
        context=make_context(compiles={"std::iter::zip"}),
        emitter=Emitter(),
        settings=settings,
    )


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo any structlog configuration a test applies, closing its log file."""
    saved = structlog.get_config()
    yield
    if log_utils._factory is not None:
        log_utils._factory.close()
        log_utils._factory = None
    structlog.configure(**saved)

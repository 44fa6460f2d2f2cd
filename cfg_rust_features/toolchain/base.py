"""Interfaces and value types shared by the toolchain collaborators."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
import datetime
from enum import Enum


class Channel(str, Enum):
    """Release track of a rustc build."""

    STABLE = "stable"
    BETA = "beta"
    NIGHTLY = "nightly"
    DEV = "dev"

    def supports_features(self) -> bool:
        """Whether `#![feature(...)]` is accepted by compilers of this channel."""
        return self in (Channel.NIGHTLY, Channel.DEV)


@dataclass(frozen=True, order=True)
class RustcVersion:
    """A `major.minor.patch` compiler version."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass(frozen=True)
class ToolchainSnapshot:
    """Version, channel and commit date of the compiler, read once."""

    version: RustcVersion
    channel: Channel
    date: datetime.date | None = None


class BaseProber(ABC):
    """Abstract base class for expression/type/path probers.

    Implementations are expected to be ready once constructed: a probe call
    only answers yes or no.
    """

    @abstractmethod
    def probe_expression(self, code: str) -> bool:
        """Check whether an expression compiles."""
        pass

    @abstractmethod
    def probe_type(self, type_expr: str) -> bool:
        """Check whether a type resolves."""
        pass

    @abstractmethod
    def probe_path(self, path: str) -> bool:
        """Check whether a symbol path resolves."""
        pass

"""The definition of which Rust features are recognized, and lookup by name."""

from bisect import bisect_left
from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class FeatureCategory(str, Enum):
    """What part of Rust a feature pertains to."""

    COMP = "comp"
    LANG = "lang"
    LIB = "lib"


class ProbeKind(str, Enum):
    """How to test whether a rustc version provides a feature."""

    EXPRESSION = "expression"
    TYPE_EXISTS = "type_exists"
    PATH_EXISTS = "path_exists"
    ALWAYS_ENABLED = "always_enabled"
    CHANNEL_SUPPORTS_UNSTABLE = "channel_supports_unstable"


_KINDS_WITH_ARGUMENT = frozenset(
    {ProbeKind.EXPRESSION, ProbeKind.TYPE_EXISTS, ProbeKind.PATH_EXISTS}
)


@dataclass(frozen=True)
class Probe:
    """A probe strategy: its kind, plus the snippet for the compiling kinds."""

    kind: ProbeKind
    argument: str | None = None

    def __post_init__(self) -> None:
        if self.kind in _KINDS_WITH_ARGUMENT:
            if not self.argument:
                raise ValueError(f"{self.kind.value} probe requires an argument")
        elif self.argument is not None:
            raise ValueError(f"{self.kind.value} probe takes no argument")

    @classmethod
    def expression(cls, code: str) -> "Probe":
        return cls(ProbeKind.EXPRESSION, code)

    @classmethod
    def type_exists(cls, type_expr: str) -> "Probe":
        return cls(ProbeKind.TYPE_EXISTS, type_expr)

    @classmethod
    def path_exists(cls, path: str) -> "Probe":
        return cls(ProbeKind.PATH_EXISTS, path)

    @classmethod
    def always_enabled(cls) -> "Probe":
        return cls(ProbeKind.ALWAYS_ENABLED)

    @classmethod
    def channel_supports_unstable(cls) -> "Probe":
        return cls(ProbeKind.CHANNEL_SUPPORTS_UNSTABLE)


@dataclass(frozen=True)
class FeatureDescriptor:
    """Descriptor of a recognized feature."""

    name: str
    categories: frozenset[FeatureCategory]
    probe: Probe

    def __post_init__(self) -> None:
        if not self.categories:
            raise ValueError(f"feature {self.name!r} has no categories")


def _feature(name: str, categories: Iterable[FeatureCategory], probe: Probe) -> FeatureDescriptor:
    return FeatureDescriptor(name=name, categories=frozenset(categories), probe=probe)


COMP, LANG, LIB = FeatureCategory.COMP, FeatureCategory.LANG, FeatureCategory.LIB

# Must always be sorted by name, without duplicates. Checked on import.
DEFINITION: tuple[FeatureDescriptor, ...] = (
    _feature(
        "arbitrary_self_types",
        [LANG],
        Probe.expression("{ struct S; impl S { fn f(self: *const Self) {} } S }"),
    ),
    _feature(
        "cfg_version",
        [LANG],
        Probe.expression('{ #[cfg(version("1.0"))] struct X; X }'),
    ),
    _feature(
        "destructuring_assignment",
        [LANG],
        Probe.expression("{ let (_a, _b); (_a, _b) = (1, 2); }"),
    ),
    _feature("error_in_core", [LIB], Probe.path_exists("core::error::Error")),
    _feature("inner_deref", [LIB], Probe.expression("Ok::<_, ()>(vec![1]).as_deref()")),
    _feature("iter_zip", [LIB], Probe.path_exists("std::iter::zip")),
    _feature("never_type", [LANG], Probe.type_exists("!")),
    _feature("question_mark", [LANG], Probe.expression("|| -> Result<(), ()> { Err(())? }")),
    _feature("rust1", [COMP, LANG, LIB], Probe.always_enabled()),
    _feature("step_trait", [LIB], Probe.path_exists("std::iter::Step")),
    _feature("unstable_features", [COMP], Probe.channel_supports_unstable()),
    _feature(
        "unwrap_infallible",
        [LIB],
        Probe.expression("Ok::<(), core::convert::Infallible>(()).into_ok()"),
    ),
)


def check_definition(definition: Iterable[FeatureDescriptor]) -> None:
    """Raise ValueError unless names are strictly increasing (sorted, no duplicates)."""
    previous = None
    for descriptor in definition:
        if previous is not None and not previous.name < descriptor.name:
            if previous.name == descriptor.name:
                raise ValueError(f"duplicate feature {descriptor.name!r} in definition")
            raise ValueError(
                f"definition not sorted: {previous.name!r} precedes {descriptor.name!r}"
            )
        previous = descriptor


check_definition(DEFINITION)

_NAMES: tuple[str, ...] = tuple(descriptor.name for descriptor in DEFINITION)


def lookup(name: str) -> FeatureDescriptor | None:
    """Look up a feature descriptor by exact name. Return None if not recognized."""
    index = bisect_left(_NAMES, name)
    if index < len(_NAMES) and _NAMES[index] == name:
        return DEFINITION[index]
    return None


def feature_names() -> list[str]:
    """All recognized feature names, sorted."""
    return list(_NAMES)

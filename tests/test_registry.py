"""Tests for the feature registry."""

import pytest

from cfg_rust_features.features import DEFINITION, FeatureCategory, Probe, ProbeKind, lookup
from cfg_rust_features.features.registry import (
    FeatureDescriptor,
    check_definition,
    feature_names,
)


def test_definition_is_sorted_without_duplicates():
    """DEFINITION is strictly ascending by name."""
    names = [descriptor.name for descriptor in DEFINITION]
    assert names == sorted(names)
    assert len(set(names)) == len(names)
    for first, second in zip(names, names[1:]):
        assert first < second


def test_lookup_finds_every_descriptor():
    """Every registered name looks up to its own descriptor."""
    for descriptor in DEFINITION:
        assert lookup(descriptor.name) is descriptor


def test_lookup_unknown_names():
    """Unregistered names, including the edges of the table, return None."""
    assert lookup("not-a-real-feature") is None
    assert lookup("") is None
    assert lookup("zzz") is None
    assert lookup("aaa") is None


def test_lookup_is_case_sensitive():
    """Lookup matches names exactly."""
    assert lookup("rust1") is not None
    assert lookup("RUST1") is None
    assert lookup("Iter_Zip") is None


def test_rust1_is_the_always_enabled_baseline():
    """rust1 needs no compile and covers every category."""
    rust1 = lookup("rust1")
    assert rust1.probe.kind is ProbeKind.ALWAYS_ENABLED
    assert rust1.categories == frozenset(FeatureCategory)


def test_unstable_features_gated_by_channel():
    """unstable_features depends only on the release channel."""
    descriptor = lookup("unstable_features")
    assert descriptor.probe.kind is ProbeKind.CHANNEL_SUPPORTS_UNSTABLE
    assert descriptor.categories == {FeatureCategory.COMP}


def test_every_descriptor_has_categories():
    """No descriptor has an empty category set."""
    for descriptor in DEFINITION:
        assert descriptor.categories
        assert all(isinstance(c, FeatureCategory) for c in descriptor.categories)


def test_feature_names_matches_definition():
    """feature_names lists the table in order."""
    assert feature_names() == [descriptor.name for descriptor in DEFINITION]


def test_check_definition_rejects_unsorted():
    """An out-of-order table is rejected."""
    probe = Probe.always_enabled()
    b = FeatureDescriptor("b", frozenset({FeatureCategory.LIB}), probe)
    a = FeatureDescriptor("a", frozenset({FeatureCategory.LIB}), probe)
    with pytest.raises(ValueError, match="not sorted"):
        check_definition([b, a])


def test_check_definition_rejects_duplicates():
    """A table with a repeated name is rejected."""
    probe = Probe.always_enabled()
    a = FeatureDescriptor("a", frozenset({FeatureCategory.LIB}), probe)
    with pytest.raises(ValueError, match="duplicate"):
        check_definition([a, a])


def test_probe_argument_rules():
    """Code-based strategies need an argument; the others take none."""
    with pytest.raises(ValueError):
        Probe(ProbeKind.EXPRESSION)
    with pytest.raises(ValueError):
        Probe(ProbeKind.ALWAYS_ENABLED, "x")
    assert Probe.path_exists("std::iter::zip").argument == "std::iter::zip"


def test_descriptor_requires_categories():
    """A descriptor needs at least one category."""
    with pytest.raises(ValueError):
        FeatureDescriptor("empty", frozenset(), Probe.always_enabled())

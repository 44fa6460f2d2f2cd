"""Runs the engine like a build script would, against the real rustc."""

import shutil

import pytest

from cfg_rust_features import emit
from cfg_rust_features.features import FeatureCategory

pytestmark = pytest.mark.skipif(shutil.which("rustc") is None, reason="rustc not installed")

REQUESTED = [
    # "cfg_version" omitted to exercise not giving a supported one
    "inner_deref",
    "destructuring_assignment",
    "iter_zip",
    "never_type",
    "question_mark",
    "rust1",
    "step_trait",
    "unstable_features",
    "unwrap_infallible",
]

REQUIRED = {("rust1", FeatureCategory.COMP), ("rust1", FeatureCategory.LANG), ("rust1", FeatureCategory.LIB)}
OPTIONAL = {
    ("unstable_features", FeatureCategory.COMP),
    ("destructuring_assignment", FeatureCategory.LANG),
    ("never_type", FeatureCategory.LANG),
    ("question_mark", FeatureCategory.LANG),
    ("inner_deref", FeatureCategory.LIB),
    ("iter_zip", FeatureCategory.LIB),
    ("step_trait", FeatureCategory.LIB),
    ("unwrap_infallible", FeatureCategory.LIB),
}


@pytest.fixture
def build_env(tmp_path, monkeypatch):
    """A scratch OUT_DIR and a clean cargo environment."""
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OUT_DIR", str(out_dir))
    monkeypatch.delenv("RUSTC", raising=False)
    monkeypatch.delenv("TARGET", raising=False)
    monkeypatch.delenv("RUSTFLAGS", raising=False)
    monkeypatch.delenv("CARGO_ENCODED_RUSTFLAGS", raising=False)
    return out_dir


def test_pretend_build_script(build_env, capsys):
    """Required features are enabled, and emitted lines match the results."""
    results = emit(REQUESTED, build_script=__file__)

    enabled = {(name, c) for name, categories in results.items() if categories for c in categories}
    assert enabled >= REQUIRED
    assert enabled <= REQUIRED | OPTIONAL

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == len(set(lines))
    assert lines[0] == f"cargo:rerun-if-changed={__file__}"
    cfg_lines = {line for line in lines if line.startswith("cargo:rustc-cfg=")}
    assert cfg_lines == {
        f'cargo:rustc-cfg=rust_{category.value}_feature="{name}"' for name, category in enabled
    }

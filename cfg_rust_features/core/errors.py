"""
Error types for cfg-rust-features.

Three kinds reach callers:
- ToolchainUnavailableError: rustc could not be run or identified
- ProbeInfrastructureError: snippet probing cannot work (e.g. bad OUT_DIR)
- UnsupportedFeatureError: a requested feature name is not recognized

The first two can only happen while a toolchain context is being built. None
of them are retried.
"""

from typing import Any, Optional

from ..utils.config import REPO_ISSUES_URL


class CfgRustFeaturesError(Exception):
    """Base exception for cfg-rust-features errors."""

    def __init__(
        self,
        message: str,
        context: Optional[dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.context = context or {}
        self.original_error = original_error
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.original_error:
            parts.append(f"Cause: {str(self.original_error)}")
        return "\n".join(parts)


class ToolchainUnavailableError(CfgRustFeaturesError):
    """The version/channel of the Rust compiler could not be determined."""


class ProbeInfrastructureError(CfgRustFeaturesError):
    """The expression/type/path prober could not be initialized."""


class UnsupportedFeatureError(CfgRustFeaturesError):
    """A requested feature name is not in the registry."""

    def __init__(self, feature_name: str, issues_url: str = REPO_ISSUES_URL):
        self.feature_name = feature_name
        self.issues_url = issues_url
        super().__init__(
            f"To request support for feature {feature_name!r}, open an issue at: {issues_url}",
            context={"feature": feature_name},
        )

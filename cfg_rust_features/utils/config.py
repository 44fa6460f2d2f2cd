"""Configuration management for cfg-rust-features using pydantic-settings."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Ensure .env is loaded so ${VAR} expansion and os.environ lookups work
load_dotenv(dotenv_path=Path(".") / ".env", override=False)

REPO_ISSUES_URL = "https://github.com/DerickEddington/cfg_rust_features/issues"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")


class ProbingConfig(BaseModel):
    """Snippet-compilation probing configuration."""

    timeout: float = 120.0  # seconds per rustc invocation
    keep_artifacts: bool = False


class EmitConfig(BaseModel):
    """Build-instruction output configuration."""

    prefix: str = "cargo"
    scope: str = "rust"
    issues_url: str = REPO_ISSUES_URL


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    format: str = "text"
    file: str | None = None


class Settings(BaseSettings):
    """Main settings class that loads from YAML and environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CFG_RUST_FEATURES_",
        env_nested_delimiter="__",
        extra="ignore",
        populate_by_name=True,
    )

    probing: ProbingConfig = Field(default_factory=ProbingConfig)
    emit: EmitConfig = Field(default_factory=EmitConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Variables cargo sets for build scripts
    rustc: str = Field(default="rustc", alias="RUSTC")
    out_dir: str | None = Field(default=None, alias="OUT_DIR")
    target: str | None = Field(default=None, alias="TARGET")
    rustflags: str = Field(default="", alias="RUSTFLAGS")
    cargo_encoded_rustflags: str | None = Field(default=None, alias="CARGO_ENCODED_RUSTFLAGS")

    @classmethod
    def from_yaml(cls, config_path: str | Path | None = None) -> "Settings":
        """Load settings from YAML file with environment variable overrides."""
        if config_path is None:
            # Try to find config file
            possible_paths = [
                Path("cfg_rust_features.yaml"),
                Path("config/cfg_rust_features.yaml"),
                Path.home() / ".config/cfg_rust_features/settings.yaml",
            ]
            for path in possible_paths:
                if path.exists():
                    config_path = path
                    break

        config_data: dict[str, Any] = {}
        if config_path and Path(config_path).exists():
            with open(config_path) as f:
                config_data = yaml.safe_load(f) or {}

        # Expand environment variables in the config
        config_data = cls._expand_env_vars(config_data)

        # Cargo's variables win over the file when they are set
        env_keys = [
            ("rustc", "RUSTC"),
            ("out_dir", "OUT_DIR"),
            ("target", "TARGET"),
            ("rustflags", "RUSTFLAGS"),
            ("cargo_encoded_rustflags", "CARGO_ENCODED_RUSTFLAGS"),
        ]
        for field_name, env_var in env_keys:
            if env_var in os.environ:
                config_data[field_name] = os.environ[env_var]

        try:
            instance = cls(**config_data)
        except Exception as e:
            raise ValueError(f"Invalid config: {e}") from e
        instance.validate()
        return instance

    def validate(self) -> None:
        """Validate critical config. Raises ValueError on failure."""
        errors: list[str] = []
        if not self.rustc.strip():
            errors.append("rustc must be a non-empty command")
        if not self.emit.prefix.strip():
            errors.append("emit.prefix must be a non-empty string")
        if not self.emit.scope.strip():
            errors.append("emit.scope must be a non-empty string")
        if self.probing.timeout <= 0:
            errors.append("probing.timeout must be positive")
        if self.logging.level.upper() not in LOG_LEVELS:
            errors.append(f"logging.level must be one of {', '.join(LOG_LEVELS)}")
        if self.logging.format not in LOG_FORMATS:
            errors.append("logging.format must be 'text' or 'json'")
        if errors:
            raise ValueError("Config validation failed: " + "; ".join(errors))

    @classmethod
    def _expand_env_vars(cls, data: Any) -> Any:
        """Recursively expand environment variables in config values."""
        if isinstance(data, dict):
            return {k: cls._expand_env_vars(v) for k, v in data.items()}
        elif isinstance(data, list):
            return [cls._expand_env_vars(item) for item in data]
        elif isinstance(data, str):
            # Expand ${VAR} patterns
            if data.startswith("${") and data.endswith("}"):
                env_var = data[2:-1]
                return os.environ.get(env_var, "")
            return data
        return data

    def get_rustflags(self) -> list[str]:
        """Extra compiler flags, the way cargo hands them to build scripts."""
        if self.cargo_encoded_rustflags is not None:
            # Unit-separator delimited; an empty string means no flags
            return [flag for flag in self.cargo_encoded_rustflags.split("\x1f") if flag]
        return self.rustflags.split()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_yaml()


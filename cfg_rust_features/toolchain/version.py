"""Reads the version, channel and commit date of the Rust compiler."""

import re
import subprocess
from datetime import date

from ..core.errors import ToolchainUnavailableError
from ..utils.logging import get_logger
from .base import Channel, RustcVersion, ToolchainSnapshot

logger = get_logger(__name__)

# e.g. "1.75.0", "1.75.0-nightly", "1.75.0-beta.3", "1.76.0-dev"
_RELEASE_PATTERN = re.compile(r"(\d+)\.(\d+)\.(\d+)(?:-([A-Za-z]+)[.\w]*)?")
# First line of `rustc --version`: "rustc 1.75.0-nightly (187b8131d 2023-10-03)"
_SHORT_PATTERN = re.compile(
    r"^rustc\s+(\S+)(?:\s+\(\w+\s+(\d{4}-\d{2}-\d{2})\))?"
)
_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def parse_release(release: str) -> tuple[RustcVersion, Channel]:
    """Split a release string into a version and a channel.

    Raises ValueError when the string is not a rustc release.
    """
    match = _RELEASE_PATTERN.fullmatch(release.strip())
    if not match:
        raise ValueError(f"unrecognized rustc release: {release!r}")
    major, minor, patch, tag = match.groups()
    version = RustcVersion(int(major), int(minor), int(patch))
    if tag is None:
        channel = Channel.STABLE
    elif tag in ("nightly", "beta", "dev"):
        channel = Channel(tag)
    else:
        raise ValueError(f"unrecognized rustc channel: {tag!r}")
    return version, channel


def parse_date(text: str | None) -> date | None:
    """Parse `YYYY-MM-DD`; anything else (like "unknown") gives None."""
    if not text:
        return None
    match = _DATE_PATTERN.match(text.strip())
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_version_output(output: str) -> ToolchainSnapshot:
    """Build a snapshot from the output of `rustc --verbose --version`.

    Uses the `release:` and `commit-date:` fields when present, otherwise the
    short first line.
    """
    fields: dict[str, str] = {}
    for line in output.splitlines():
        key, sep, value = line.partition(":")
        if sep:
            fields[key.strip()] = value.strip()

    release = fields.get("release")
    commit_date = fields.get("commit-date")
    if release is None:
        first_line = output.strip().split("\n")[0] if output.strip() else ""
        match = _SHORT_PATTERN.match(first_line)
        if not match:
            raise ValueError(f"unrecognized rustc version output: {first_line!r}")
        release, commit_date = match.group(1), match.group(2)

    version, channel = parse_release(release)
    return ToolchainSnapshot(version=version, channel=channel, date=parse_date(commit_date))


class VersionInspector:
    """Runs rustc to learn which compiler is in use."""

    def __init__(self, rustc: str = "rustc", timeout: float = 120.0):
        self.rustc = rustc
        self.timeout = timeout

    def read(self) -> ToolchainSnapshot:
        """Return the compiler's snapshot, or raise ToolchainUnavailableError."""
        command = [self.rustc, "--verbose", "--version"]
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (FileNotFoundError, subprocess.TimeoutExpired, OSError) as e:
            raise ToolchainUnavailableError(
                f"Could not run {self.rustc!r}",
                context={"command": command},
                original_error=e,
            ) from e

        if result.returncode != 0:
            raise ToolchainUnavailableError(
                f"{self.rustc!r} exited with status {result.returncode}",
                context={"command": command, "stderr": result.stderr},
            )

        try:
            snapshot = parse_version_output(result.stdout)
        except ValueError as e:
            raise ToolchainUnavailableError(
                f"Could not identify the compiler {self.rustc!r}",
                context={"command": command, "stdout": result.stdout},
                original_error=e,
            ) from e

        logger.info(
            "toolchain_detected",
            rustc=self.rustc,
            version=str(snapshot.version),
            channel=snapshot.channel.value,
            date=snapshot.date.isoformat() if snapshot.date else None,
        )
        return snapshot

"""Release information and comparison of the running version with the latest one."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

import semver


def parse_version(version: str) -> semver.Version:
    """Parse a semantic version, accepting an optional leading 'v'.

    Raises ValueError if the text is not a valid semantic version.
    """
    clean = version.removeprefix("v")
    try:
        return semver.Version.parse(clean)
    except TypeError as exc:
        raise ValueError(f"invalid version: {version!r}") from exc


@dataclass(frozen=True)
class GitHubRelease:
    """The parts of a published release that the client uses."""

    tag_name: str
    name: str
    published_at: str
    html_url: str
    prerelease: bool

    @classmethod
    def from_dict(cls, data: Any) -> "GitHubRelease":
        """Build a release from a decoded API response; raise ValueError if malformed."""
        if not isinstance(data, dict):
            raise ValueError("release must be an object")
        text_fields = ("tag_name", "name", "published_at", "html_url")
        values: dict[str, Any] = {}
        for key in (*text_fields, "prerelease"):
            if key not in data:
                raise ValueError(f"missing field {key!r}")
            values[key] = data[key]
        for key in text_fields:
            if not isinstance(values[key], str):
                raise ValueError(f"field {key!r} must be a string")
        if not isinstance(values["prerelease"], bool):
            raise ValueError("field 'prerelease' must be a boolean")
        return cls(**values)


@dataclass
class VersionInfo:
    """What is known about the running version and the newest release."""

    current_version: str
    latest_version: str | None = None
    update_available: bool = False
    release_url: str | None = None
    last_check: float | None = None

    def update_from_release(self, release: GitHubRelease) -> None:
        """Record the latest release and whether it is newer than the running version."""
        self.latest_version = release.tag_name
        self.release_url = release.html_url
        self.update_available = self.is_newer_version(release.tag_name)
        self.last_check = time.monotonic()

    def is_newer_version(self, latest: str) -> bool:
        """True if ``latest`` is a newer version; False if either version fails to parse."""
        try:
            current = parse_version(self.current_version)
            candidate = parse_version(latest)
        except ValueError:
            return False
        return candidate > current
"""Remote version constraints and evaluation of the running version against them."""

from __future__ import annotations

import enum
import json
import time
from dataclasses import dataclass, field
from typing import Any

import httpx
import semver

PRIMARY_CONFIG_URL = "https://cli.nexus.xyz/version.json"
CACHE_CONFIG_URL = "https://us-central1-nexus-cli.cloudfunctions.net/version"
FALLBACK_CONFIG_URL = (
    "https://raw.githubusercontent.com/nexus-xyz/nexus-cli/refs/heads/main/public/version.json"
)
CONFIG_TIMEOUT = 10.0
USER_AGENT = "nexus-cli/version-checker"
DEFAULT_RELEASE_URL = "https://github.com/nexus-xyz/nexus-cli/releases"


class VersionRequirementsError(Exception):
    """Raised when requirements cannot be fetched, parsed, or evaluated."""

    @classmethod
    def fetch(cls, detail: str) -> "VersionRequirementsError":
        return cls(f"Failed to fetch config: {detail}")

    @classmethod
    def parse(cls, detail: object) -> "VersionRequirementsError":
        return cls(f"Failed to parse config JSON: {detail}")

    @classmethod
    def version_parse(cls, detail: object) -> "VersionRequirementsError":
        return cls(f"Failed to parse version: {detail}")


class ConstraintType(enum.Enum):
    """Severity of a version constraint."""

    BLOCKING = "blocking"
    WARNING = "warning"
    NOTICE = "notice"


def _parse_semver(text: str) -> semver.Version:
    try:
        return semver.Version.parse(text)
    except (ValueError, TypeError) as exc:
        raise VersionRequirementsError.version_parse(exc) from exc


@dataclass
class VersionConstraint:
    """A minimum version together with the severity and message when it is not met."""

    version: str
    constraint_type: ConstraintType
    message: str
    start_date: int | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "VersionConstraint":
        if not isinstance(data, dict):
            raise VersionRequirementsError.parse("constraint must be an object")
        try:
            version = data["version"]
            kind = data["type"]
            message = data["message"]
        except KeyError as exc:
            raise VersionRequirementsError.parse(f"missing field {exc.args[0]!r}") from exc
        if not isinstance(version, str) or not isinstance(message, str):
            raise VersionRequirementsError.parse("'version' and 'message' must be strings")
        try:
            constraint_type = ConstraintType(kind)
        except ValueError as exc:
            raise VersionRequirementsError.parse(f"unknown constraint type {kind!r}") from exc
        start_date = data.get("start_date")
        if start_date is not None and (
            not isinstance(start_date, int) or isinstance(start_date, bool) or start_date < 0
        ):
            raise VersionRequirementsError.parse("'start_date' must be a non-negative integer")
        return cls(version, constraint_type, message, start_date)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "type": self.constraint_type.value,
            "message": self.message,
            "start_date": self.start_date,
        }


@dataclass
class VersionCheckResult:
    """The constraint that applies to a version and its rendered message."""

    constraint_type: ConstraintType
    message: str


def _outranks(new: ConstraintType, existing: ConstraintType) -> bool:
    if new is ConstraintType.BLOCKING:
        return True
    # Warning beats notice; a later notice replaces an earlier notice.
    return existing is ConstraintType.NOTICE


@dataclass
class VersionRequirements:
    """The set of version constraints published for the client."""

    version_constraints: list[VersionConstraint] = field(default_factory=list)

    @classmethod
    def from_json(cls, text: str) -> "VersionRequirements":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise VersionRequirementsError.parse(exc) from exc
        if not isinstance(data, dict) or "version_constraints" not in data:
            raise VersionRequirementsError.parse("missing field 'version_constraints'")
        constraints = data["version_constraints"]
        if not isinstance(constraints, list):
            raise VersionRequirementsError.parse("'version_constraints' must be a list")
        return cls([VersionConstraint.from_dict(item) for item in constraints])

    def to_json(self) -> str:
        return json.dumps(
            {"version_constraints": [c.to_dict() for c in self.version_constraints]}
        )

    @classmethod
    async def fetch(cls) -> "VersionRequirements":
        """Fetch requirements, trying the primary, cache and fallback sources in turn."""
        sources = (PRIMARY_CONFIG_URL, CACHE_CONFIG_URL, FALLBACK_CONFIG_URL)
        labels = ("Primary", "Cache", "Fallback")
        failures: list[str] = []
        async with httpx.AsyncClient(
            timeout=CONFIG_TIMEOUT, headers={"User-Agent": USER_AGENT}
        ) as client:
            for label, url in zip(labels, sources):
                try:
                    return await cls.fetch_from_url(client, url)
                except VersionRequirementsError as exc:
                    failures.append(f"{label} ({url}): {exc}")
        raise VersionRequirementsError.fetch(
            "Failed to fetch from all sources. " + ". ".join(failures)
        )

    @classmethod
    async def fetch_from_url(
        cls, client: httpx.AsyncClient, url: str
    ) -> "VersionRequirements":
        """Fetch and parse requirements from one URL."""
        try:
            response = await client.get(url)
        except httpx.HTTPError as exc:
            raise VersionRequirementsError.fetch(str(exc)) from exc
        if not response.is_success:
            status = response.status_code
            raise VersionRequirementsError.fetch(
                f"HTTP {status} {response.reason_phrase}: {status}"
            )
        try:
            text = response.text
        except (httpx.HTTPError, UnicodeDecodeError) as exc:
            raise VersionRequirementsError.fetch(
                f"Failed to read response body: {exc}"
            ) from exc
        return cls.from_json(text)

    def check_version_constraints(
        self,
        current_version: str,
        latest_version: str | None = None,
        release_url: str | None = None,
    ) -> VersionCheckResult | None:
        """Return the most severe active constraint the current version violates."""
        current = _parse_semver(current_version.removeprefix("v"))
        now = int(time.time())

        most_severe: VersionCheckResult | None = None
        for constraint in self.version_constraints:
            if constraint.start_date is not None and now < constraint.start_date:
                continue
            minimum = _parse_semver(constraint.version)
            if current >= minimum:
                continue
            result = VersionCheckResult(
                constraint.constraint_type,
                _format_message(
                    constraint.message,
                    current_version,
                    constraint.version,
                    latest_version,
                    release_url,
                ),
            )
            if most_severe is None or _outranks(
                constraint.constraint_type, most_severe.constraint_type
            ):
                most_severe = result
        return most_severe


def _format_message(
    template: str,
    current_version: str,
    version: str,
    latest_version: str | None,
    release_url: str | None,
) -> str:
    return (
        template.replace("{current}", current_version)
        .replace("{version}", version)
        .replace("{latest}", latest_version if latest_version is not None else "unknown")
        .replace("{release_url}", release_url if release_url is not None else DEFAULT_RELEASE_URL)
    )
"""Background checking for new releases and published version constraints."""

from __future__ import annotations

import abc
import asyncio
import enum
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, Callable

import httpx

from nexus_prover.version_info import GitHubRelease, VersionInfo
from nexus_prover.version_requirements import (
    ConstraintType,
    VersionCheckResult,
    VersionRequirements,
    VersionRequirementsError,
)

VERSION_CHECK_INTERVAL = 24 * 60 * 60.0
POLL_INTERVAL = 60.0
GITHUB_RELEASES_URL = "https://api.github.com/repos/nexus-xyz/nexus-cli/releases/latest"
REQUEST_TIMEOUT = 10.0

RequirementsFetcher = Callable[[], Awaitable[VersionRequirements]]


class EventKind(enum.Enum):
    """What an event reports."""

    SUCCESS = "success"
    ERROR = "error"
    REFRESH = "refresh"
    SHUTDOWN = "shutdown"
    WAITING = "waiting"


class EventLevel(enum.IntEnum):
    """Log level of an event, from least to most severe."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4


def _now_stamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


@dataclass(frozen=True)
class VersionEvent:
    """A message emitted by the version checker."""

    msg: str
    event_type: EventKind
    log_level: EventLevel
    timestamp: str = field(default_factory=_now_stamp)
    worker: str = "version_checker"


@dataclass
class VersionConstraintState:
    """What the checker remembers between constraint checks."""

    last_constraint_check: float | None = None
    current_constraints: VersionRequirements | None = None
    last_violation: VersionCheckResult | None = None


class VersionCheckable(abc.ABC):
    """Source of information about the latest release."""

    @abc.abstractmethod
    async def check_latest_version(self) -> GitHubRelease:
        """Return the latest published release."""

    @abc.abstractmethod
    def current_version(self) -> str:
        """Return the version of the running client."""


class VersionChecker(VersionCheckable):
    """Queries the release API for the latest published release."""

    def __init__(self, current_version: str) -> None:
        self._current_version = current_version
        self._user_agent = f"nexus-cli/{current_version}"

    async def check_latest_version(self) -> GitHubRelease:
        async with httpx.AsyncClient(
            timeout=REQUEST_TIMEOUT, headers={"User-Agent": self._user_agent}
        ) as client:
            response = await client.get(GITHUB_RELEASES_URL)
            if not response.is_success:
                raise RuntimeError(
                    f"GitHub API returned status: {response.status_code} "
                    f"{response.reason_phrase}"
                )
            return GitHubRelease.from_dict(response.json())

    def current_version(self) -> str:
        return self._current_version


_CONSTRAINT_EVENTS = {
    ConstraintType.BLOCKING: (EventKind.ERROR, EventLevel.ERROR),
    ConstraintType.WARNING: (EventKind.ERROR, EventLevel.WARN),
    ConstraintType.NOTICE: (EventKind.SUCCESS, EventLevel.INFO),
}


async def perform_version_and_constraint_check(
    checker: VersionCheckable,
    info: VersionInfo,
    state: VersionConstraintState,
    events: asyncio.Queue,
    fetch_requirements: RequirementsFetcher | None = None,
) -> None:
    """Check for a new release and for constraint violations, emitting an event on change."""
    fetch = fetch_requirements or VersionRequirements.fetch
    try:
        release = await checker.check_latest_version()
    except Exception as exc:  # any failure of the release source is reported, not raised
        await events.put(
            VersionEvent(
                f"Failed to check for updates: {exc}", EventKind.ERROR, EventLevel.DEBUG
            )
        )
        return

    info.update_from_release(release)

    result: VersionCheckResult | None
    try:
        requirements = await fetch()
    except VersionRequirementsError:
        if info.update_available:
            result = VersionCheckResult(
                ConstraintType.NOTICE,
                f"🚀 New version {release.tag_name} available! "
                f"Current: {info.current_version} → Release: {release.html_url}",
            )
        else:
            result = None
    else:
        state.current_constraints = requirements
        state.last_constraint_check = time.monotonic()
        try:
            result = requirements.check_version_constraints(
                info.current_version, release.tag_name, release.html_url
            )
        except VersionRequirementsError:
            result = None

    if result == state.last_violation:
        return

    if result is not None:
        kind, level = _CONSTRAINT_EVENTS[result.constraint_type]
        await events.put(VersionEvent(result.message, kind, level))
        state.last_violation = result
    else:
        await events.put(
            VersionEvent(
                f"✅ Version {info.current_version} is up to date\n",
                EventKind.REFRESH,
                EventLevel.DEBUG,
            )
        )
        state.last_violation = None


async def version_checker_task_with_interval(
    checker: VersionCheckable,
    events: asyncio.Queue,
    shutdown: asyncio.Event,
    check_interval: float,
    fetch_requirements: RequirementsFetcher | None = None,
) -> None:
    """Check once at once, then again whenever ``check_interval`` seconds have passed."""
    info = VersionInfo(checker.current_version())
    state = VersionConstraintState()

    await perform_version_and_constraint_check(
        checker, info, state, events, fetch_requirements
    )
    last_check = time.monotonic()

    while True:
        try:
            await asyncio.wait_for(shutdown.wait(), timeout=POLL_INTERVAL)
            break
        except asyncio.TimeoutError:
            pass
        if time.monotonic() - last_check >= check_interval:
            last_check = time.monotonic()
            await perform_version_and_constraint_check(
                checker, info, state, events, fetch_requirements
            )


async def version_checker_task(
    checker: VersionCheckable, events: asyncio.Queue, shutdown: asyncio.Event
) -> None:
    """Run the checker with the default daily interval."""
    await version_checker_task_with_interval(
        checker, events, shutdown, VERSION_CHECK_INTERVAL
    )


async def start_version_checker_task(
    current_version: str, events: asyncio.Queue, shutdown: asyncio.Event
) -> None:
    """Run the checker against the real release API."""
    await version_checker_task(VersionChecker(current_version), events, shutdown)
import json
import time

import httpx
import pytest

from nexus_prover.version_requirements import (
    ConstraintType,
    VersionCheckResult,
    VersionConstraint,
    VersionRequirements,
    VersionRequirementsError,
)


def _constraint(version, kind, message, start_date=None):
    return VersionConstraint(version, kind, message, start_date)


@pytest.fixture
def warning_blocking():
    return VersionRequirements(
        [
            _constraint("0.9.0", ConstraintType.WARNING, "Warning: {current} < {version}"),
            _constraint("0.8.0", ConstraintType.BLOCKING, "Blocking: {current} < {version}"),
        ]
    )


def test_no_violation(warning_blocking):
    assert warning_blocking.check_version_constraints("0.9.1", None, None) is None


def test_warning_violation(warning_blocking):
    result = warning_blocking.check_version_constraints("0.8.9", None, None)
    assert result == VersionCheckResult(ConstraintType.WARNING, "Warning: 0.8.9 < 0.9.0")


def test_blocking_violation(warning_blocking):
    result = warning_blocking.check_version_constraints("0.7.9", None, None)
    assert result.constraint_type is ConstraintType.BLOCKING
    assert result.message == "Blocking: 0.7.9 < 0.8.0"


def test_v_prefix_is_accepted():
    config = VersionRequirements(
        [
            _constraint("1.0.0", ConstraintType.WARNING, "Warning: {current} < {version}"),
            _constraint("0.1.0", ConstraintType.BLOCKING, "Blocking: {current} < {version}"),
        ]
    )
    assert config.check_version_constraints("v1.0.0", None, None) is None


def test_blocking_takes_priority():
    config = VersionRequirements(
        [
            _constraint("0.9.0", ConstraintType.NOTICE, "Notice"),
            _constraint("0.8.0", ConstraintType.WARNING, "Warning"),
            _constraint("0.7.0", ConstraintType.BLOCKING, "Blocking"),
        ]
    )
    result = config.check_version_constraints("0.6.0", None, None)
    assert result.constraint_type is ConstraintType.BLOCKING


def test_warning_not_replaced_by_later_notice():
    config = VersionRequirements(
        [
            _constraint("0.8.0", ConstraintType.WARNING, "Warning"),
            _constraint("0.9.0", ConstraintType.NOTICE, "Notice"),
        ]
    )
    result = config.check_version_constraints("0.6.0")
    assert result.message == "Warning"


def test_message_formatting():
    config = VersionRequirements(
        [
            _constraint(
                "1.0.0",
                ConstraintType.NOTICE,
                "Version {current} < {version}. Latest: {latest}. URL: {release_url}",
            )
        ]
    )
    result = config.check_version_constraints("0.9.0", "1.1.0", "https://example.com")
    assert result.message == (
        "Version 0.9.0 < 1.0.0. Latest: 1.1.0. URL: https://example.com"
    )


def test_message_defaults_for_missing_values():
    config = VersionRequirements(
        [_constraint("1.0.0", ConstraintType.NOTICE, "{latest} {release_url}")]
    )
    result = config.check_version_constraints("0.9.0")
    assert result.message == "unknown https://github.com/nexus-xyz/nexus-cli/releases"


def test_future_constraint_is_skipped():
    future = int(time.time()) + 3600
    past = int(time.time()) - 3600
    config = VersionRequirements(
        [
            _constraint("1.0.0", ConstraintType.BLOCKING, "later", future),
            _constraint("1.0.0", ConstraintType.NOTICE, "now", past),
        ]
    )
    result = config.check_version_constraints("0.1.0")
    assert result == VersionCheckResult(ConstraintType.NOTICE, "now")


def test_invalid_current_version_raises():
    config = VersionRequirements([])
    with pytest.raises(VersionRequirementsError, match="Failed to parse version"):
        config.check_version_constraints("not.a.version")


def test_invalid_constraint_version_raises():
    config = VersionRequirements([_constraint("bad", ConstraintType.NOTICE, "x")])
    with pytest.raises(VersionRequirementsError, match="Failed to parse version"):
        config.check_version_constraints("1.0.0")


def test_from_json_parses_constraints():
    text = json.dumps(
        {
            "version_constraints": [
                {"version": "0.9.0", "type": "warning", "message": "m"},
                {"version": "0.8.0", "type": "blocking", "message": "b", "start_date": 5},
            ]
        }
    )
    config = VersionRequirements.from_json(text)
    assert config.version_constraints == [
        VersionConstraint("0.9.0", ConstraintType.WARNING, "m", None),
        VersionConstraint("0.8.0", ConstraintType.BLOCKING, "b", 5),
    ]


def test_json_round_trip():
    config = VersionRequirements(
        [_constraint("1.2.3", ConstraintType.NOTICE, "hello", 42)]
    )
    assert VersionRequirements.from_json(config.to_json()) == config


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "{}",
        '{"version_constraints": [{"version": "1.0.0", "type": "fatal", "message": "m"}]}',
        '{"version_constraints": [{"version": "1.0.0", "message": "m"}]}',
    ],
)
def test_from_json_rejects_bad_input(text):
    with pytest.raises(VersionRequirementsError, match="Failed to parse config JSON"):
        VersionRequirements.from_json(text)


@pytest.mark.asyncio
async def test_fetch_from_url_success():
    body = {"version_constraints": [{"version": "1.0.0", "type": "notice", "message": "m"}]}

    def handler(request):
        return httpx.Response(200, json=body)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        config = await VersionRequirements.fetch_from_url(client, "https://example.com/v.json")
    assert config.version_constraints[0].constraint_type is ConstraintType.NOTICE


@pytest.mark.asyncio
async def test_fetch_from_url_http_error():
    def handler(request):
        return httpx.Response(404)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(VersionRequirementsError, match="HTTP 404 Not Found: 404"):
            await VersionRequirements.fetch_from_url(client, "https://example.com/v.json")


@pytest.mark.asyncio
async def test_fetch_from_url_bad_body():
    def handler(request):
        return httpx.Response(200, text="<html></html>")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(VersionRequirementsError, match="Failed to parse config JSON"):
            await VersionRequirements.fetch_from_url(client, "https://example.com/v.json")
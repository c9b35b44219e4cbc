from __future__ import annotations

import logging

import pytest

from treecast.errors import VersionGateError
from treecast.gate import (
    MIN_VERSION_KEY,
    build_version_int,
    check_minimum_version,
    extract_release_version,
)


def test_build_version_int_layout():
    assert build_version_int("1.2.3") == 1_002_003
    assert build_version_int("0.0.0") == 0


def test_build_version_int_is_monotonic():
    assert build_version_int("1.2.3") < build_version_int("1.3.0") < build_version_int("2.0.0")
    assert build_version_int("0.999.999") < build_version_int("1.0.0")
    assert build_version_int("1.9.0") < build_version_int("1.10.0")


def test_build_version_int_clamps_components():
    assert build_version_int("1.5000.0") == build_version_int("1.999.0")
    assert build_version_int("-4.1.0") == build_version_int("0.1.0")


def test_build_version_int_pads_and_truncates():
    assert build_version_int("2") == build_version_int("2.0.0")
    assert build_version_int("1.2") == build_version_int("1.2.0")
    assert build_version_int("1.2.3.4") == build_version_int("1.2.3")


def test_build_version_int_rejects_non_numeric_component():
    with pytest.raises(VersionGateError, match="Could not parse version part 'beta'"):
        build_version_int("1.beta.0")


@pytest.mark.parametrize(
    ("running", "expected"),
    [
        ("v1.2.3", "1.2.3"),
        ("v0.4.10-3-gdeadbee", "0.4.10"),
        ("release v12.0.1 (2024-01-01)", "12.0.1"),
    ],
)
def test_extract_release_version(running: str, expected: str):
    assert extract_release_version(running) == expected


@pytest.mark.parametrize("running", ["<unofficial build>", "1.2.3", "v1.2"])
def test_extract_release_version_fails_closed(running: str):
    with pytest.raises(VersionGateError, match="unofficial build"):
        extract_release_version(running)


def test_missing_constraint_passes_even_for_unofficial_builds():
    check_minimum_version({"name": "demo"}, "<unofficial build>")


def test_satisfied_constraint_passes():
    check_minimum_version({MIN_VERSION_KEY: "1.2.3"}, "v1.2.3")
    check_minimum_version({MIN_VERSION_KEY: "1.2"}, "v1.10.0")


def test_unsatisfied_constraint_names_both_versions():
    with pytest.raises(VersionGateError) as excinfo:
        check_minimum_version({MIN_VERSION_KEY: "2.0.0"}, "v1.9.9")

    message = str(excinfo.value)
    assert "2.0.0" in message
    assert "v1.9.9" in message


def test_constraint_with_unofficial_build_fails():
    with pytest.raises(VersionGateError):
        check_minimum_version({MIN_VERSION_KEY: "0.0.1"}, "dev")


def test_non_string_constraint_is_ignored_with_warning(caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.WARNING, logger="treecast.gate"):
        check_minimum_version({MIN_VERSION_KEY: 99}, "dev")

    assert any(MIN_VERSION_KEY in message for message in caplog.messages)


@pytest.mark.parametrize("version", [" 1.0.0", "1_000.0.0", "1. 2.3", "1..3", "١.0.0"])
def test_build_version_int_rejects_loose_integers(version: str):
    with pytest.raises(VersionGateError, match="Could not parse version part"):
        build_version_int(version)


def test_build_version_int_accepts_signed_components():
    assert build_version_int("+1.2.3") == build_version_int("1.2.3")
    assert build_version_int("1.-2.3") == build_version_int("1.0.3")

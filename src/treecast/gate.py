"""Minimum-version gate evaluated before any template is processed."""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from .errors import VersionGateError

__all__ = [
    "MIN_VERSION_KEY",
    "build_version_int",
    "check_minimum_version",
    "extract_release_version",
]


LOGGER = logging.getLogger(__name__)

MIN_VERSION_KEY = "_treecast_min_version_"

_RELEASE_PATTERN = re.compile(r"v(\d+\.\d+\.\d+)")
_COMPONENT_PATTERN = re.compile(r"[+-]?[0-9]+")
_COMPONENTS = 3
_COMPONENT_MAX = 999


def build_version_int(version: str) -> int:
    """Fold a dotted version string into a single comparable integer.

    Each of the first three components occupies a three digit slot, so
    ``"1.2.3"`` becomes ``1_002_003``. Components are clamped into
    ``[0, 999]``, missing components count as zero and anything past the
    third is ignored.

    Raises
    ------
    VersionGateError
        If one of the first three components is not an integer.
    """

    parts = version.split(".")
    value = 0
    for index in range(_COMPONENTS):
        component = 0
        if index < len(parts):
            if _COMPONENT_PATTERN.fullmatch(parts[index]) is None:
                raise VersionGateError(
                    f"Could not parse version part '{parts[index]}' in '{version}'"
                )
            component = int(parts[index])
            component = min(max(component, 0), _COMPONENT_MAX)
        value = value * (_COMPONENT_MAX + 1) + component
    return value


def extract_release_version(running_version: str) -> str:
    """Return the ``major.minor.patch`` embedded as ``v<major>.<minor>.<patch>``."""

    match = _RELEASE_PATTERN.search(running_version)
    if match is None:
        raise VersionGateError(
            f"You are running an unofficial build ({running_version!r}): "
            "minimum version requirements cannot be checked"
        )
    return match.group(1)


def check_minimum_version(spec: Mapping[str, Any], running_version: str) -> None:
    """Fail when ``spec`` declares a minimum version newer than ``running_version``."""

    if MIN_VERSION_KEY not in spec:
        return

    minimum = spec[MIN_VERSION_KEY]
    if not isinstance(minimum, str):
        LOGGER.warning(
            "Ignoring %s since it is not a string (got %s)",
            MIN_VERSION_KEY,
            type(minimum).__name__,
        )
        return

    current = extract_release_version(running_version)
    if build_version_int(minimum) > build_version_int(current):
        raise VersionGateError(
            f"Template spec lists minimum version {minimum} but you're using {running_version}!"
        )
    LOGGER.debug("Minimum version %s satisfied by %s", minimum, running_version)

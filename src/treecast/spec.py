"""Loading and validation of the spec data record."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml
from pydantic import ConfigDict, RootModel, StrictStr, ValidationError

from .editor import edit_bytes
from .errors import SpecDecodeError, SpecSourceError

__all__ = [
    "STDIN_SOURCE",
    "SpecDocument",
    "decode_spec",
    "load_spec",
    "read_spec_bytes",
]


LOGGER = logging.getLogger(__name__)

STDIN_SOURCE = "-"


class SpecDocument(RootModel[Dict[StrictStr, Any]]):
    """Top level of a spec: a mapping keyed by strings."""

    model_config = ConfigDict(frozen=True)


def read_spec_bytes(source: str | Path) -> bytes:
    """Read raw spec bytes from ``source``, or standard input when it is ``-``."""

    if str(source) == STDIN_SOURCE:
        return sys.stdin.buffer.read()
    try:
        return Path(source).read_bytes()
    except OSError as exc:
        raise SpecSourceError(f"Could not read spec file: {exc}") from exc


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    if location:
        return f"{first['msg']} at {location}"
    return first["msg"]


def decode_spec(raw: bytes) -> Mapping[str, Any]:
    """Decode YAML (or JSON) bytes into the spec mapping.

    Raises
    ------
    SpecDecodeError
        If the bytes are not valid YAML, are empty, or the top level is not a
        mapping with string keys.
    """

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise SpecDecodeError(f"Could not parse spec file: {exc}") from exc

    if data is None:
        raise SpecDecodeError("Could not parse spec file: document is empty")

    try:
        document = SpecDocument.model_validate(data)
    except ValidationError as exc:
        raise SpecDecodeError(f"Could not parse spec file: {_describe(exc)}") from exc

    LOGGER.debug("Loaded spec with %d top-level key(s)", len(document.root))
    return document.root


def load_spec(source: str | Path, *, edit: bool = False, editor: str | None = None) -> Mapping[str, Any]:
    """Read, optionally edit, and decode the spec found at ``source``."""

    raw = read_spec_bytes(source)
    if edit:
        raw = edit_bytes(raw, editor)
    return decode_spec(raw)

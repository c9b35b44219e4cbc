"""Helper functions exposed to templates."""

from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Any, Callable, Mapping

from markupsafe import Markup

__all__ = [
    "HELPERS",
    "add",
    "jsonify",
    "jsonify_indent",
    "lower",
    "now",
    "regex_replace",
    "string_replace",
    "title",
    "unescape",
    "upper",
]


_WORD_START = re.compile(r"(^|[^\w])(\w)")
_GROUP_REFERENCE = re.compile(r"\$(?:\{(\w+)\}|(\w+)|\$)")


def title(value: Any) -> str:
    """Upper-case the first letter of every word, leaving the rest untouched.

    Unlike :meth:`str.title` this does not lower-case the remaining letters, so
    ``"hello wORLD"`` becomes ``"Hello WORLD"``. Apostrophes separate words:
    ``"don't"`` becomes ``"Don'T"``.
    """

    return _WORD_START.sub(lambda match: match.group(1) + match.group(2).upper(), str(value))


def upper(value: Any) -> str:
    return str(value).upper()


def lower(value: Any) -> str:
    return str(value).lower()


def now() -> datetime:
    """Return the current local time."""

    return datetime.now().astimezone()


def _require_mapping(value: Any, helper: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeError(f"{helper} expects a mapping, got {type(value).__name__}")
    return {str(key): item for key, item in value.items()}


def jsonify(value: Any) -> str:
    """Serialise a mapping as compact JSON with sorted keys."""

    return json.dumps(_require_mapping(value, "json"), separators=(",", ":"), sort_keys=True, default=str)


def jsonify_indent(value: Any) -> str:
    """Serialise a mapping as JSON indented by four spaces."""

    return json.dumps(_require_mapping(value, "jsonindent"), indent=4, sort_keys=True, default=str)


def unescape(value: Any) -> Markup:
    """Mark ``value`` as already escaped so no escaping is applied to it."""

    return Markup(str(value))


def string_replace(subject: Any, old: str, new: str) -> str:
    """Replace every literal occurrence of ``old`` with ``new``."""

    return str(subject).replace(old, new)


def _expand(match: re.Match[str], replacement: str) -> str:
    def reference(ref: re.Match[str]) -> str:
        name = ref.group(1) or ref.group(2)
        if name is None:
            return "$"
        try:
            return match.group(int(name) if name.isdigit() else name) or ""
        except IndexError:
            # Unknown groups expand to nothing.
            return ""

    return _GROUP_REFERENCE.sub(reference, replacement)


def regex_replace(subject: Any, pattern: str, replacement: str) -> str:
    """Replace every match of ``pattern`` with ``replacement``.

    ``replacement`` refers to groups as ``$1``, ``${1}``, ``$name`` or
    ``${name}``; ``$$`` is a literal dollar sign. Backslashes are literal.
    """

    return re.sub(pattern, lambda match: _expand(match, replacement), str(subject))


def add(left: Any, right: Any) -> Any:
    return left + right


HELPERS: Mapping[str, Callable[..., Any]] = {
    "title": title,
    "upper": upper,
    "lower": lower,
    "now": now,
    "json": jsonify,
    "jsonindent": jsonify_indent,
    "unescape": unescape,
    "stringreplace": string_replace,
    "regexreplace": regex_replace,
    "add": add,
}

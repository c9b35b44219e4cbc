from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

from treecast import spec as spec_module
from treecast.errors import SpecDecodeError, SpecSourceError
from treecast.spec import decode_spec, load_spec, read_spec_bytes


def test_decode_yaml():
    raw = b"name: demo\nauthors:\n  - ada\nmeta:\n  year: 2024\n"
    assert decode_spec(raw) == {"name": "demo", "authors": ["ada"], "meta": {"year": 2024}}


def test_decode_json():
    assert decode_spec(b'{"name": "demo", "cli": true}') == {"name": "demo", "cli": True}


@pytest.mark.parametrize(
    "raw",
    [
        b"- just\n- a list\n",
        b"1: one\n",
        b"plain scalar",
        b"",
        b"name: [unterminated\n",
    ],
)
def test_decode_rejects_invalid_documents(raw: bytes):
    with pytest.raises(SpecDecodeError, match="Could not parse spec file"):
        decode_spec(raw)


def test_nested_non_string_keys_are_allowed():
    assert decode_spec(b"ports:\n  80: http\n") == {"ports": {80: "http"}}


def test_read_spec_bytes_from_file(tmp_path: Path):
    path = tmp_path / "spec.yaml"
    path.write_bytes(b"name: demo\n")
    assert read_spec_bytes(path) == b"name: demo\n"


def test_read_spec_bytes_from_stdin(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"name: piped\n")))
    assert read_spec_bytes("-") == b"name: piped\n"


def test_read_spec_bytes_missing_file(tmp_path: Path):
    with pytest.raises(SpecSourceError, match="Could not read spec file"):
        read_spec_bytes(tmp_path / "absent.yaml")


def test_load_spec_passes_bytes_through_editor(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    path = tmp_path / "spec.yaml"
    path.write_bytes(b"name: original\n")
    seen: list[tuple[bytes, str | None]] = []

    def fake_edit(raw: bytes, editor: str | None) -> bytes:
        seen.append((raw, editor))
        return b"name: edited\n"

    monkeypatch.setattr(spec_module, "edit_bytes", fake_edit)

    assert load_spec(path, edit=True, editor="vi") == {"name": "edited"}
    assert seen == [(b"name: original\n", "vi")]


def test_load_spec_without_edit(tmp_path: Path):
    path = tmp_path / "spec.json"
    path.write_bytes(b'{"name": "demo"}')
    assert load_spec(path) == {"name": "demo"}

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture()
def output_dir(tmp_path: Path) -> Path:
    """Empty, existing directory to render into."""

    path = tmp_path / "out"
    path.mkdir()
    return path

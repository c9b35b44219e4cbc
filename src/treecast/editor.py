"""Interactive editing of the raw spec in the user's editor."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import tempfile
from pathlib import Path

from .errors import EnvironmentFault, SpecEditError

__all__ = ["edit_bytes"]


LOGGER = logging.getLogger(__name__)


def _mtime_ns(path: Path) -> int:
    try:
        return path.stat().st_mtime_ns
    except OSError as exc:
        raise EnvironmentFault(f"scratch file {path} vanished: {exc}") from exc


def edit_bytes(raw: bytes, editor: str | None) -> bytes:
    """Open ``raw`` in ``editor`` and return the saved contents.

    Parameters
    ----------
    raw:
        Spec bytes to seed the scratch file with.
    editor:
        Editor command line, usually taken from ``$EDITOR``. It may carry its
        own arguments (``"code --wait"``); the scratch path is appended.

    Raises
    ------
    SpecEditError
        If no editor is configured, the editor fails, or the file was not
        saved.
    """

    if not editor or not editor.strip():
        raise SpecEditError("You specified --edit but no $EDITOR is available")

    try:
        handle = tempfile.NamedTemporaryFile(prefix="treecast-", suffix=".yaml", delete=False)
    except OSError as exc:
        raise SpecEditError(f"Unable to set up temporary file for editing: {exc}") from exc

    scratch = Path(handle.name)
    try:
        try:
            handle.write(raw)
        except OSError as exc:
            raise SpecEditError(f"Failed to write bytes to temporary file: {exc}") from exc
        finally:
            try:
                handle.close()
            except OSError as exc:
                raise EnvironmentFault(f"could not close scratch file {scratch}: {exc}") from exc

        before = _mtime_ns(scratch)
        command = [*shlex.split(editor), str(scratch)]
        LOGGER.debug("Running editor: %s", shlex.join(command))
        try:
            subprocess.run(command, check=True)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise SpecEditError(f"Editor command failed: {exc}") from exc

        if _mtime_ns(scratch) == before:
            raise SpecEditError("No save detected, you must save the file when using --edit")

        try:
            return scratch.read_bytes()
        except OSError as exc:
            raise SpecEditError(f"Could not read edited spec file: {exc}") from exc
    finally:
        try:
            os.remove(scratch)
        except FileNotFoundError:
            pass

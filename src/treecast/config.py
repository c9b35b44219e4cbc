"""Run configuration shared by the scaffolder and CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from . import __version__
from .errors import InputValidationError
from .spec import STDIN_SOURCE
from .walker import RENDER_SUFFIX

__all__ = ["BUILD_VERSION", "RunConfig"]


BUILD_VERSION = f"v{__version__}"


@dataclass(slots=True, frozen=True)
class RunConfig:
    """Validated inputs for a single templating run.

    Attributes
    ----------
    template_path:
        The template file or directory to process.
    spec_source:
        Path of the spec file, or ``"-"`` to read the spec from standard input.
    output_dir:
        Existing directory that receives the rendered tree.
    edit:
        Open the spec in :attr:`editor` before it is decoded.
    editor:
        Editor command line. Defaults to ``$EDITOR``.
    build_version:
        Version string of the running build, checked against the spec's
        minimum version requirement.
    suffix:
        Filename suffix marking files whose contents are rendered.
    """

    template_path: Path
    spec_source: str
    output_dir: Path
    edit: bool = False
    editor: str | None = None
    build_version: str = BUILD_VERSION
    suffix: str = RENDER_SUFFIX

    @classmethod
    def from_paths(
        cls,
        template_path: str | Path,
        spec_source: str | Path,
        output_dir: str | Path,
        *,
        edit: bool = False,
        editor: str | None = None,
        build_version: str = BUILD_VERSION,
        environ: Mapping[str, str] | None = None,
    ) -> "RunConfig":
        """Build a :class:`RunConfig`, checking that every path is usable.

        Raises
        ------
        InputValidationError
            If the template is missing, the spec file is missing or a
            directory, or the output directory is missing or not a directory.
        """

        environ = os.environ if environ is None else environ
        template = Path(template_path)
        spec = str(spec_source)
        output = Path(output_dir)

        _require_exists(template, f"Input template '{template}'")

        if spec != STDIN_SOURCE:
            spec_path = Path(spec)
            _require_exists(spec_path, f"Spec file '{spec}'")
            if spec_path.is_dir():
                raise InputValidationError(f"Spec file '{spec}' cannot be a directory!")

        _require_exists(output, f"Output directory '{output}'")
        if not output.is_dir():
            raise InputValidationError(f"Output directory '{output}' cannot be a file!")

        return cls(
            template_path=template,
            spec_source=spec,
            output_dir=output,
            edit=edit,
            editor=editor if editor is not None else environ.get("EDITOR"),
            build_version=build_version,
        )


def _require_exists(path: Path, label: str) -> None:
    try:
        path.stat()
    except FileNotFoundError as exc:
        raise InputValidationError(f"{label} does not exist!") from exc
    except OSError as exc:
        raise InputValidationError(f"{label} cannot be read! ({exc})") from exc

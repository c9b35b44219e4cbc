"""Recursive mirroring of a template tree into an output tree."""

from __future__ import annotations

import logging
import os
import shutil
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .errors import WalkError
from .template import Renderer, TemplateRenderingError

__all__ = ["RENDER_SUFFIX", "TreeWalker"]


LOGGER = logging.getLogger(__name__)

RENDER_SUFFIX = ".templated"
DIRECTORY_MODE = 0o755


@dataclass(slots=True)
class TreeWalker:
    """Walk a template tree, renaming, rendering and copying entries.

    Parameters
    ----------
    renderer:
        Rendering capability used for entry names and ``.templated`` files.
    spec:
        Data record visible to every template. Never modified.
    suffix:
        Filename suffix that switches a file from byte copy to render mode.
    """

    renderer: Renderer
    spec: Mapping[str, Any]
    suffix: str = RENDER_SUFFIX

    def walk(self, template_path: str | Path, output_dir: str | Path) -> None:
        """Mirror ``template_path`` into ``output_dir``.

        The first failure aborts the walk. Entries written before it stay on
        disk.
        """

        template_path = Path(template_path)
        output_dir = Path(output_dir)
        try:
            info = template_path.stat()
        except OSError as exc:
            raise WalkError(
                f"Error processing template '{template_path}': {exc}", template_path
            ) from exc

        if stat.S_ISDIR(info.st_mode):
            self._walk_directory(template_path, output_dir)
        else:
            self._walk_file(template_path, output_dir)

    def resolve_name(self, template_path: Path) -> str | None:
        """Return the output name for ``template_path``, or ``None`` to skip it."""

        # "." and "/" have no final component; they map onto output_dir itself.
        name = os.path.basename(os.path.normpath(template_path)) or "."
        if self.renderer.contains_templating(name):
            try:
                name = self.renderer.render(name, self.spec)
            except TemplateRenderingError as exc:
                raise WalkError(
                    f"Error while processing '{template_path}': {exc}", template_path
                ) from exc

        name = name.strip()
        if not name:
            LOGGER.info("Skipping '%s' since the name evaluated to ''", template_path)
            return None
        return name

    def transfer(self, source: Path, name: str, output_dir: Path) -> Path | None:
        """Write ``source`` to ``output_dir / name`` and copy its permission bits.

        A name ending in :attr:`suffix` has the suffix removed and the file
        contents rendered; any other file is copied byte for byte. Returns the
        destination, or ``None`` when stripping the suffix leaves no name.
        """

        render = name.endswith(self.suffix)
        if render:
            name = name[: -len(self.suffix)]
            if not name:
                LOGGER.info("Skipping '%s' since the name evaluated to ''", source)
                return None

        destination = output_dir / name
        LOGGER.info("Processing '%s' -> '%s'", source, destination)
        if render:
            self._render_file(source, destination)
        else:
            try:
                shutil.copyfile(source, destination)
            except OSError as exc:
                raise WalkError(
                    f"Error while copying file bytes for '{source}': {exc}", source
                ) from exc

        self._copy_permissions(source, destination)
        return destination

    def _walk_directory(self, template_path: Path, output_dir: Path) -> None:
        name = self.resolve_name(template_path)
        if name is None:
            return

        target = output_dir / name
        LOGGER.info("Processing '%s/' -> '%s/'", template_path, target)
        try:
            target.mkdir(mode=DIRECTORY_MODE)
        except FileExistsError as exc:
            if not target.is_dir():
                raise WalkError(
                    f"Error while processing '{template_path}': {target} exists and is not a directory",
                    template_path,
                ) from exc
        except OSError as exc:
            raise WalkError(
                f"Error while processing '{template_path}': {exc}", template_path
            ) from exc

        try:
            children = sorted(template_path.iterdir(), key=lambda child: child.name)
        except OSError as exc:
            raise WalkError(
                f"Error while reading '{template_path}': {exc}", template_path
            ) from exc

        for child in children:
            self.walk(child, target)

    def _walk_file(self, template_path: Path, output_dir: Path) -> None:
        name = self.resolve_name(template_path)
        if name is None:
            return
        self.transfer(template_path, name, output_dir)

    def _render_file(self, source: Path, destination: Path) -> None:
        try:
            text = source.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise WalkError(f"Error while reading '{source}': {exc}", source) from exc

        try:
            rendered = self.renderer.render(text, self.spec)
        except TemplateRenderingError as exc:
            raise WalkError(
                f"Error while rendering template for '{source}': {exc}", source
            ) from exc

        try:
            destination.write_bytes(rendered.encode("utf-8"))
        except OSError as exc:
            raise WalkError(
                f"Error while writing file bytes for '{source}': {exc}", source
            ) from exc

    def _copy_permissions(self, source: Path, destination: Path) -> None:
        try:
            mode = stat.S_IMODE(os.stat(source).st_mode)
        except OSError as exc:
            raise WalkError(
                f"Error while checking file permissions for '{source}': {exc}", source
            ) from exc
        try:
            os.chmod(destination, mode)
        except OSError as exc:
            raise WalkError(
                f"Error while writing file permissions for '{source}': {exc}", source
            ) from exc

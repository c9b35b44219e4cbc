"""Top-level orchestration of a templating run."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from .config import RunConfig
from .gate import check_minimum_version
from .spec import load_spec
from .template import Renderer, TemplateRenderer
from .walker import TreeWalker

__all__ = ["TreeScaffolder"]


LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class TreeScaffolder:
    """Load the spec, check it, and render a template tree from it."""

    renderer: Renderer

    def __init__(self, renderer: Renderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def run(self, config: RunConfig) -> Mapping[str, Any]:
        """Execute the run described by ``config`` and return the spec used."""

        spec = load_spec(config.spec_source, edit=config.edit, editor=config.editor)
        self.create(config, spec)
        return spec

    def create(self, config: RunConfig, spec: Mapping[str, Any]) -> None:
        """Render ``config.template_path`` into ``config.output_dir`` using ``spec``."""

        check_minimum_version(spec, config.build_version)
        walker = TreeWalker(self.renderer, spec, suffix=config.suffix)
        LOGGER.debug("Walking %s into %s", config.template_path, config.output_dir)
        walker.walk(config.template_path, config.output_dir)

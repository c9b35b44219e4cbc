"""Template rendering backed by Jinja2."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from jinja2 import Environment, StrictUndefined

from .errors import TreecastError
from .functions import HELPERS

__all__ = [
    "Renderer",
    "TemplateRenderer",
    "TemplateRenderingError",
]


class TemplateRenderingError(TreecastError):
    """Raised when the renderer cannot evaluate a template."""


class Renderer(ABC):
    """Evaluate template text against a spec."""

    @abstractmethod
    def contains_templating(self, text: str) -> bool:
        """Return ``True`` when ``text`` holds at least one template directive."""

    @abstractmethod
    def render(self, text: str, spec: Mapping[str, Any]) -> str:
        """Render ``text`` with ``spec`` as its context.

        Raises
        ------
        TemplateRenderingError
            If the template cannot be parsed or evaluated.
        """


def _build_environment(helpers: Mapping[str, Callable[..., Any]]) -> Environment:
    env = Environment(
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    # Helpers are callable both as ``upper(name)`` and ``name|upper``.
    env.globals.update(helpers)
    env.filters.update(helpers)
    return env


@dataclass(slots=True)
class TemplateRenderer(Renderer):
    """Render Jinja2 templates with the helper registry installed."""

    helpers: Mapping[str, Callable[..., Any]] = field(default_factory=lambda: dict(HELPERS))
    environment: Environment = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.environment = _build_environment(self.helpers)

    def contains_templating(self, text: str) -> bool:
        env = self.environment
        markers = (env.variable_start_string, env.block_start_string, env.comment_start_string)
        return any(marker in text for marker in markers)

    def render(self, text: str, spec: Mapping[str, Any]) -> str:
        context = dict(spec)
        context.setdefault("spec", spec)
        try:
            template = self.environment.from_string(text)
            return template.render(context)
        except Exception as exc:
            raise TemplateRenderingError(f"{type(exc).__name__}: {exc}") from exc

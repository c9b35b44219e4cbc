"""Generate file and directory trees from templated trees.

Entry names and ``.templated`` file contents are rendered with Jinja2 against a
spec mapping; everything else is copied byte for byte with its permission bits.
The package can be used programmatically through :class:`TreeScaffolder` and
:class:`TreeWalker`, or via the ``treecast`` command line interface.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import BUILD_VERSION, RunConfig
from .errors import TreecastError, WalkError
from .gate import build_version_int, check_minimum_version
from .scaffold import TreeScaffolder
from .spec import decode_spec, load_spec
from .template import Renderer, TemplateRenderer, TemplateRenderingError
from .walker import TreeWalker

__all__ = [
    "BUILD_VERSION",
    "Renderer",
    "RunConfig",
    "TemplateRenderer",
    "TemplateRenderingError",
    "TreeScaffolder",
    "TreeWalker",
    "TreecastError",
    "WalkError",
    "build_version_int",
    "check_minimum_version",
    "decode_spec",
    "load_spec",
]

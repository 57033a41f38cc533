"""Renderers -- turn a registry and its document tree into text.

* :mod:`~apidox.render.markdown` -- API-Blueprint flavoured markdown.
* :mod:`~apidox.render.openapi` -- OpenAPI 3 envelope, dumped as JSON or YAML.

:func:`render` picks the renderer for a :class:`DocumentFormat`.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from apidox.document.tree import DocumentNode
from apidox.models import DoxConfig
from apidox.registry import ResourceRegistry
from apidox.render.markdown import render_markdown
from apidox.render.openapi import build_openapi_document, dump_json, dump_yaml


class DocumentFormat(str, Enum):
    """Output formats accepted by ``apidox build --format``."""

    MARKDOWN = "markdown"
    JSON = "json"
    YAML = "yaml"


def render(
    registry: ResourceRegistry,
    config: DoxConfig,
    fmt: DocumentFormat = DocumentFormat.MARKDOWN,
    paths: Optional[DocumentNode] = None,
) -> str:
    """Render *registry* in the requested format.

    Args:
        paths: Pre-built ``paths`` tree for the OpenAPI formats; rebuilt
            from *registry* when omitted.
    """
    if fmt == DocumentFormat.MARKDOWN:
        return render_markdown(registry, config)

    document = build_openapi_document(registry, config, paths)
    if fmt == DocumentFormat.YAML:
        return dump_yaml(document)
    return dump_json(document)


__all__ = [
    "DocumentFormat",
    "build_openapi_document",
    "render",
    "render_markdown",
]

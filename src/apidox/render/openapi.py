"""Wrap the document tree in an OpenAPI 3 envelope and serialise it.

The ``paths`` object is the tree produced by
:class:`~apidox.document.builder.DocumentBuilder`. Resources become tags, and
resource groups become ``x-tagGroups`` (as understood by Redoc), with
ungrouped resources collected under ``Default``.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import yaml

from apidox.descriptions import resolve_description
from apidox.document.builder import build_document
from apidox.document.tree import DocumentNode
from apidox.models import DoxConfig
from apidox.registry import ResourceRegistry

OPENAPI_VERSION = "3.0.3"

DEFAULT_TAG_GROUP = "Default"


def build_openapi_document(
    registry: ResourceRegistry,
    config: DoxConfig,
    paths: Optional[DocumentNode] = None,
) -> dict[str, Any]:
    """Assemble the complete OpenAPI document.

    Args:
        registry: Supplies resources for ``tags`` and ``x-tagGroups``.
        config: Supplies ``title``, ``api_version`` and the optional header
            file used as ``info.description``.
        paths: An already-accumulated tree (e.g. ``Recorder.document``).
            When omitted the tree is rebuilt from *registry*.
    """
    if paths is None:
        paths = build_document(registry.resources(), config)

    info: dict[str, Any] = {"title": config.title, "version": config.api_version}
    header = resolve_description(config.header_file_path, config, fullpath=True)
    if header:
        info["description"] = header

    tags: list[dict[str, Any]] = []
    tag_groups: dict[str, list[str]] = {}
    for resource in registry.resources():
        if any(tag["name"] == resource.name for tag in tags):
            continue
        tag: dict[str, Any] = {"name": resource.name}
        desc = resolve_description(resource.description, config)
        if desc:
            tag["description"] = desc
        tags.append(tag)
        tag_groups.setdefault(resource.group or DEFAULT_TAG_GROUP, []).append(resource.name)

    document: dict[str, Any] = {
        "openapi": OPENAPI_VERSION,
        "info": info,
        "paths": paths,
        "tags": tags,
    }
    if tag_groups:
        document["x-tagGroups"] = [
            {"name": name, "tags": names} for name, names in tag_groups.items()
        ]
    return document


def dump_json(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def dump_yaml(document: dict[str, Any]) -> str:
    return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)

"""Render the registry as API-Blueprint flavoured markdown.

Layout::

    <header file contents>

    # Group <group>

    ## <Resource> [<endpoint>]

    ### <Action> [<VERB> <template>]

    + Parameters
        + id: `1` (number, required)

    + Request <example description>
    **GET**&nbsp;&nbsp;`/pokemons/1`

        + Headers

                X-Auth-Token: 877da7da7fbc16216e

    + Response 200

        + Body

                {...}

Only whitelisted headers are printed, sorted by name.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from apidox.descriptions import resolve_description
from apidox.document.builder import format_body, request_content_key, response_content_key
from apidox.formatting.attribute import indent_lines, render_attributes
from apidox.models import Action, AttributeSpec, DoxConfig, Example, Requirement, Resource
from apidox.registry import ResourceRegistry


def render_markdown(registry: ResourceRegistry, config: DoxConfig) -> str:
    """Render every resource in *registry*, grouped by resource group."""
    blocks: list[str] = []

    header = resolve_description(config.header_file_path, config, fullpath=True)
    if header:
        blocks.append(header.rstrip("\n"))

    groups: dict[Optional[str], list[Resource]] = {}
    for resource in registry.resources():
        groups.setdefault(resource.group, []).append(resource)

    for group, resources in groups.items():
        if group:
            blocks.append(f"# Group {group}")
        for resource in resources:
            blocks.append(render_resource(resource, config))

    return "\n\n".join(blocks) + "\n"


def render_resource(resource: Resource, config: DoxConfig) -> str:
    title = f"## {resource.name}"
    if resource.endpoint:
        title += f" [{resource.endpoint}]"
    parts = [title]

    desc = resolve_description(resource.description, config)
    if desc:
        parts.append(desc)

    for action in resource.actions.values():
        parts.append(render_action(action, config))
    return "\n\n".join(parts)


def render_action(action: Action, config: DoxConfig) -> str:
    parts = [f"### {action.name} [{action.verb} {action.path_template}]"]

    desc = resolve_description(action.description, config)
    if desc:
        parts.append(desc)

    if action.parameters:
        params = [
            AttributeSpec(
                name=name,
                type=spec.type.value,
                example=spec.example_value,
                required=spec.requirement == Requirement.REQUIRED,
            )
            for name, spec in action.parameters.items()
        ]
        parts.append("+ Parameters\n" + render_attributes(params, indent=4))

    if action.attributes:
        parts.append("+ Attributes\n" + render_attributes(action.attributes, indent=4))

    for example in action.examples:
        parts.append(render_example(example, config))
    return "\n\n".join(parts)


def render_example(example: Example, config: DoxConfig) -> str:
    """Render the request and response blocks of one example."""
    request = [
        f"+ Request {example.description}\n"
        f"**{example.request_method}**&nbsp;&nbsp;`{example.request_path}`"
    ]
    request.extend(_headers_and_body(
        config.filter_headers(example.request_headers),
        example.request_body,
        example.request_content_type or request_content_key(example.request_headers),
    ))

    response = [f"+ Response {example.response_status}"]
    response.extend(_headers_and_body(
        config.filter_headers(example.response_headers),
        example.response_body,
        response_content_key(example),
    ))
    return "\n\n".join(request + response)


def _headers_and_body(headers: dict[str, str], body: str, content_type: str) -> list[str]:
    sections = []
    if headers:
        lines = "\n".join(f"{name}: {headers[name]}" for name in sorted(headers))
        sections.append("    + Headers\n\n" + indent_lines(12, lines))
    if body:
        sections.append("    + Body\n\n" + indent_lines(12, _pretty(format_body(body, content_type))))
    return sections


def _pretty(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2, ensure_ascii=False)
    return str(value)

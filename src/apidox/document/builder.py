"""Fold Actions and Examples into the path-keyed document tree.

The tree mirrors the ``paths`` object of an OpenAPI document::

    {"/pokemons/{id}": {"get": {
        "summary": ..., "description": ..., "tags": [...],
        "parameters": [...],
        "requestBody": {"content": {"<type>": {"schema": {"$ref": ...}, "examples": {...}}}},
        "responses": {"200": {"description": ..., "content": {...}}},
    }}}

Every write goes through :func:`~apidox.document.tree.get_or_insert` or
:func:`~apidox.document.tree.find_or_add`, so the builder only ever adds
missing nodes. The one deliberate overwrite is an example's ``value``: a later
example with the same description replaces the earlier value in place rather
than adding a second entry.
"""

from __future__ import annotations

import json
import logging
import posixpath
from http import HTTPStatus
from typing import Any, Iterable, Optional

from apidox.descriptions import resolve_description
from apidox.document.tree import DocumentNode, find_or_add, get_or_insert, merge_parameters
from apidox.models import Action, DoxConfig, Example, Requirement, Resource

logger = logging.getLogger(__name__)

ANY_CONTENT_TYPE = "any"
"""Content key used when neither Accept nor a response content type is known."""


class DocumentBuilder:
    """Merge engine that accumulates operations and examples into a tree.

    Args:
        config: Supplies the headers whitelist, the schema folders used for
            ``$ref`` strings, and the descriptions folder.

    Example::

        builder = DocumentBuilder(DoxConfig())
        tree: dict = {}
        operation = builder.add_action(tree, action, resource)
        builder.add_example(operation, example)
    """

    def __init__(self, config: DoxConfig) -> None:
        self.config = config

    # ------------------------------------------------------------------ #
    # Operations
    # ------------------------------------------------------------------ #

    def add_action(
        self,
        tree: DocumentNode,
        action: Action,
        resource: Optional[Resource] = None,
    ) -> DocumentNode:
        """Find or create the operation node for *action* and seed its metadata.

        Returns:
            The operation node (``tree[template][verb]``).
        """
        operation = get_or_insert(tree, [action.path_template, action.verb.lower()])
        find_or_add(operation, "summary", action.name)

        description = resolve_description(action.description, self.config)
        if description is not None:
            find_or_add(operation, "description", description)

        if resource is not None:
            tags = find_or_add(operation, "tags", [])
            if resource.name not in tags:
                tags.append(resource.name)

        merge_parameters(find_or_add(operation, "parameters", []), path_parameters(action))
        return operation

    def add_example(self, operation: DocumentNode, example: Example) -> None:
        """Fold one example's request and response into *operation*."""
        self.add_request(operation, example)
        self.add_response(operation, example)

    # ------------------------------------------------------------------ #
    # Request / response halves
    # ------------------------------------------------------------------ #

    def add_request(self, operation: DocumentNode, example: Example) -> None:
        """Add header parameters and, for a non-empty body, the request example."""
        merge_parameters(
            find_or_add(operation, "parameters", []),
            self.header_parameters(example.request_headers),
        )
        if not example.has_request_body:
            return

        content_key = request_content_key(example.request_headers)
        content = get_or_insert(operation, ["requestBody", "content", content_key])
        self._add_example_value(
            content,
            example.description,
            format_body(example.request_body, example.request_content_type or content_key),
        )
        self._add_schema(content, example.request_schema, self.config.schema_request_folder_path)

    def add_response(self, operation: DocumentNode, example: Example) -> None:
        """Add the ``responses[status]`` node and, for a non-empty body, its example."""
        response = get_or_insert(operation, ["responses", str(example.response_status)])
        find_or_add(response, "description", status_phrase(example.response_status))
        if not example.has_response_body:
            return

        content_key = response_content_key(example)
        content = get_or_insert(response, ["content", content_key])
        self._add_example_value(
            content,
            example.description,
            format_body(example.response_body, content_key),
        )
        self._add_schema(content, example.response_schema, self.config.schema_response_folder_path)

    def header_parameters(self, headers: dict[str, str]) -> list[dict[str, Any]]:
        """Header parameters for the whitelisted entries of *headers*."""
        return [
            {"name": name, "in": "header", "example": value}
            for name, value in self.config.filter_headers(headers).items()
        ]

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _add_example_value(self, content: DocumentNode, description: str, value: Any) -> None:
        examples = find_or_add(content, "examples")
        entry = find_or_add(examples, description, {"summary": description})
        entry["value"] = value

    def _add_schema(self, content: DocumentNode, schema: Optional[str], folder: str) -> None:
        if schema is None:
            return
        find_or_add(content, "schema", {"$ref": schema_ref(folder, schema)})


def build_document(resources: Iterable[Resource], config: DoxConfig) -> DocumentNode:
    """Rebuild the complete tree from *resources* and their recorded examples."""
    builder = DocumentBuilder(config)
    tree: DocumentNode = {}
    for resource in resources:
        for action in resource.actions.values():
            operation = builder.add_action(tree, action, resource)
            for example in action.examples:
                builder.add_example(operation, example)
    return tree


def path_parameters(action: Action) -> list[dict[str, Any]]:
    """OpenAPI path parameter objects for the Action's parameters."""
    params = []
    for name, spec in action.parameters.items():
        param: dict[str, Any] = {
            "name": name,
            "in": "path",
            "required": spec.requirement == Requirement.REQUIRED,
            "schema": {"type": spec.type.value},
        }
        if spec.example_value is not None:
            param["example"] = spec.example_value
        params.append(param)
    return params


def request_content_key(headers: dict[str, str]) -> str:
    """Content key for a request: its ``Accept`` header verbatim, else ``any``.

    The header is not normalised; ``application/json, text/plain;q=0.9`` is
    its own key.
    """
    accept = (headers.get("Accept") or "").strip()
    return accept or ANY_CONTENT_TYPE


def response_content_key(example: Example) -> str:
    """Content key for a response: its content type or ``Content-Type`` header, else ``any``."""
    content_type = example.response_content_type or example.response_headers.get("Content-Type")
    return _media_type(content_type) or ANY_CONTENT_TYPE


def schema_ref(folder: str, name: str) -> str:
    """Build the ``$ref`` string for schema *name* under *folder*."""
    return posixpath.join(folder, f"{name}.json")


def format_body(body: str, content_type: Optional[str]) -> Any:
    """Parse *body* as JSON when the content type allows it.

    JSON is attempted for ``*json*`` content types and for unknown ones
    (``None`` or ``any``); anything that does not parse is returned as text.
    """
    if not body:
        return body
    if content_type is None or content_type == ANY_CONTENT_TYPE or "json" in content_type:
        try:
            return json.loads(body)
        except json.JSONDecodeError:
            logger.debug("Body is not valid JSON, keeping it as text")
    return body


def status_phrase(status: int) -> str:
    """Standard reason phrase for *status*, or the code itself if unknown."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return str(status)


def _media_type(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return value.split(";", 1)[0].strip() or None

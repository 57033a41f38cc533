"""Record interactions into a registry and a document tree.

:class:`Recorder` is the object a test suite talks to. For every interaction it
builds the :class:`~apidox.models.Example`, finds or creates the owning
Resource and Action, appends the example, and folds it into the accumulated
document tree. The same recorder can dump everything it saw to a recordings
file, which ``apidox build`` turns back into a document later.

Typical usage from a test suite using ``httpx`` or a Starlette/FastAPI
``TestClient``::

    recorder = Recorder(load_config())

    def test_get_pokemon(client):
        response = client.get("/pokemons/1")
        recorder.record_httpx(
            response,
            path_params={"id": "1"},
            resource_name="Pokemons",
            description="Returns a Pokemon",
        )
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Optional, Union

import httpx

from apidox.document.builder import DocumentBuilder
from apidox.document.tree import DocumentNode
from apidox.exceptions import InvalidVerbError
from apidox.inference.path_template import build_action, infer_path_template
from apidox.models import (
    Action,
    ActionKey,
    DoxConfig,
    Example,
    Interaction,
    InteractionDetails,
    RecordedRequest,
    RecordedResponse,
    Resource,
    ResourceKey,
)
from apidox.registry import ResourceRegistry
from apidox.writer import atomic_write

logger = logging.getLogger(__name__)


class Recorder:
    """Accumulates recorded interactions for one documentation run.

    Each :meth:`record` call runs under a single lock, so the registry upsert
    and the tree fold for one interaction are never interleaved with
    another's.

    Args:
        config: Run configuration. Defaults to :class:`~apidox.models.DoxConfig`
            with its default values.
    """

    def __init__(self, config: Optional[DoxConfig] = None) -> None:
        self.config = config or DoxConfig()
        self.registry = ResourceRegistry()
        self.document: DocumentNode = {}
        self.interactions: list[Interaction] = []
        self._builder = DocumentBuilder(self.config)
        self._lock = threading.Lock()

    def record(self, interaction: Interaction) -> Action:
        """Fold one interaction into the registry and the document tree.

        Returns:
            The Action the interaction was attached to.

        Raises:
            InvalidVerbError: If the interaction's verb is not recognized.
                Nothing is recorded for it.
        """
        request = interaction.request
        details = interaction.details

        template, _ = infer_path_template(request.path, request.path_params, request.full_path)
        template = details.action_path or template
        verb = str(details.action_verb or request.method).upper()

        resource_key = ResourceKey(details.resource_name or default_resource_name(template), details.resource_group)
        action_key = ActionKey(verb, template)
        example = build_example(interaction)

        with self._lock:
            try:
                action = self.registry.upsert_action(
                    resource_key,
                    action_key,
                    lambda: build_action(details.action_name or f"{verb} {template}", details, request),
                    lambda: Resource(
                        name=resource_key.name,
                        group=resource_key.group,
                        description=details.resource_desc,
                        endpoint=details.resource_endpoint,
                    ),
                )
            except InvalidVerbError:
                logger.warning("Rejected interaction %r: unrecognized HTTP verb %s", example.description, verb)
                raise

            action.examples.append(example)
            operation = self._builder.add_action(self.document, action, self.registry.get_resource(resource_key))
            self._builder.add_example(operation, example)
            self.interactions.append(interaction)

        logger.debug("Recorded %r for %s %s", example.description, verb, template)
        return action

    def record_httpx(
        self,
        response: httpx.Response,
        path_params: Optional[dict[str, Any]] = None,
        **details: Any,
    ) -> Action:
        """Record an ``httpx`` response together with the request that produced it.

        Args:
            response: A response whose ``.request`` is set (always true for
                responses returned by an ``httpx`` client or ``TestClient``).
            path_params: The route's resolved path parameters.
            **details: Fields of :class:`~apidox.models.InteractionDetails`.
        """
        return self.record(interaction_from_httpx(response, path_params, **details))

    def dump_interactions(self, path: Union[str, Path]) -> None:
        """Write every recorded interaction to a JSON recordings file."""
        with self._lock:
            payload = {
                "interactions": [
                    interaction.model_dump(mode="json", exclude_none=True)
                    for interaction in self.interactions
                ]
            }
        atomic_write(path, json.dumps(payload, indent=2, ensure_ascii=False) + "\n")


def build_example(interaction: Interaction) -> Example:
    """Normalise an interaction into the Example that gets documented."""
    request = interaction.request
    response = interaction.response
    details = interaction.details
    concrete_path = request.path or (request.full_path or "/").split("?", 1)[0]

    return Example(
        description=details.description or f"{request.method.upper()} {concrete_path}",
        request_method=request.method.upper(),
        request_path=concrete_path,
        request_headers=dict(request.headers),
        request_body=request.body,
        request_content_type=request.content_type or request.headers.get("Content-Type"),
        request_schema=details.request_schema,
        response_status=response.status,
        response_headers=dict(response.headers),
        response_body=response.body,
        response_content_type=response.content_type or response.headers.get("Content-Type"),
        response_schema=details.response_schema,
    )


def default_resource_name(template: str) -> str:
    """Resource name for an interaction that does not declare one.

    Uses the first static path segment, title-cased (``/pokemons/{id}`` ->
    ``Pokemons``), or ``Root`` for a path with no static segment.
    """
    for segment in template.split("/"):
        if segment and not segment.startswith("{"):
            return segment.replace("_", " ").replace("-", " ").title()
    return "Root"


def interaction_from_httpx(
    response: httpx.Response,
    path_params: Optional[dict[str, Any]] = None,
    **details: Any,
) -> Interaction:
    """Adapt an ``httpx`` request/response pair into an :class:`Interaction`.

    Header names keep their original casing (``Headers.raw``) because the
    headers whitelist is case-sensitive.
    """
    request = response.request
    return Interaction(
        request=RecordedRequest(
            method=request.method,
            path=request.url.path,
            full_path=request.url.raw_path.decode("ascii"),
            path_params=path_params or {},
            headers=_raw_headers(request.headers),
            body=request.read(),
            content_type=request.headers.get("content-type"),
        ),
        response=RecordedResponse(
            status=response.status_code,
            headers=_raw_headers(response.headers),
            body=response.read(),
            content_type=response.headers.get("content-type"),
        ),
        details=InteractionDetails(**details),
    )


def _raw_headers(headers: httpx.Headers) -> dict[str, str]:
    return {
        key.decode(headers.encoding): value.decode(headers.encoding)
        for key, value in headers.raw
    }

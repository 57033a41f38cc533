"""Infer a parameterized path template from a concrete request path.

A recorded request only knows the concrete path it hit (``/pokemons/1``) and
the bindings the web framework resolved for it (``{"id": "1"}``). This module
turns that pair back into the route template (``/pokemons/{id}``) and a typed
parameter list, and builds the :class:`~apidox.models.Action` an interaction
belongs to.

Substitution is single-pass and first-match per binding: when the same value
appears in several segments, only the first segment is replaced. Bindings
whose value never appears in the path are skipped without error.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from apidox.models import (
    Action,
    InteractionDetails,
    ParamSpec,
    ParamType,
    RecordedRequest,
    Requirement,
)

logger = logging.getLogger(__name__)

_NUMERIC_RE = re.compile(r"[0-9]+")


def infer_path_template(
    path: Optional[str],
    path_params: dict[str, str],
    full_path: Optional[str] = None,
) -> tuple[str, dict[str, ParamSpec]]:
    """Replace the bound values in *path* with ``{name}`` placeholders.

    Args:
        path: The framework's normalized request path. When empty or ``None``
            the path portion of *full_path* (everything before ``?``) is used.
        path_params: Resolved dynamic-segment bindings, in the order the
            framework enumerated them.
        full_path: The full request target, including any query string.

    Returns:
        A ``(template, params)`` tuple. ``params`` holds one required
        :class:`~apidox.models.ParamSpec` per binding that was substituted,
        so its keys always equal the template's placeholders.

    Example::

        >>> infer_path_template("/pokemons/1", {"id": "1"})[0]
        '/pokemons/{id}'
    """
    template = path or (full_path or "").split("?", 1)[0]
    params: dict[str, ParamSpec] = {}

    for name, value in path_params.items():
        value = str(value)
        pattern = re.compile(r"/" + re.escape(value) + r"(/|$)")
        template, count = pattern.subn(lambda m: "/{" + name + "}" + m.group(1), template, count=1)
        if not count:
            logger.debug("Path parameter %s=%r not found in %s", name, value, template)
            continue
        params[name] = ParamSpec(
            type=guess_param_type(value),
            requirement=Requirement.REQUIRED,
            example_value=value,
        )

    return template, params


def guess_param_type(value: str) -> ParamType:
    """Classify a bound value: all digits is a number, anything else a string."""
    if _NUMERIC_RE.fullmatch(value):
        return ParamType.NUMBER
    return ParamType.STRING


def build_action(name: str, details: InteractionDetails, request: RecordedRequest) -> Action:
    """Construct the Action an interaction documents.

    Explicit overrides in *details* (verb, path, params, attributes) win over
    what is inferred from *request*. An override path without override params
    still gets its parameters inferred from the request bindings.

    Raises:
        InvalidVerbError: If the resolved verb is not a recognized HTTP method.
    """
    template, inferred = infer_path_template(request.path, request.path_params, request.full_path)
    return Action(
        name=name,
        description=details.action_desc,
        verb=details.action_verb or request.method,
        path_template=details.action_path or template,
        parameters=details.action_params if details.action_params is not None else inferred,
        attributes=details.action_attributes,
    )

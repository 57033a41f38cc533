"""Canonical Pydantic models shared across all apidox modules.

This is the single source of truth for data shapes in the project. The models
fall into three groups:

**Configuration** -- :class:`DoxConfig`, the frozen settings object passed
explicitly to every component that needs the headers whitelist, schema
folders, or description folder.

**Recorded input** -- what the host test framework hands over for every
interaction: :class:`RecordedRequest`, :class:`RecordedResponse`,
:class:`InteractionDetails`, and :class:`Interaction`. These are also the
records serialised into a recordings file.

**Documentation entities** -- accumulated during a run and consumed by the
renderers: :class:`ParamSpec`, :class:`AttributeSpec`, :class:`Example`,
:class:`Action`, and :class:`Resource`.
"""

from __future__ import annotations

import enum
from typing import Annotated, Any, Callable, Literal, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_serializer

from apidox.exceptions import InvalidVerbError

DEFAULT_HEADERS_WHITELIST: frozenset[str] = frozenset({"Accept", "Content-Type"})
"""Headers that are always rendered, whatever the configured whitelist says."""


# --- Enums ---


class HTTPMethod(str, enum.Enum):
    """HTTP verbs an Action may be documented with."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def is_verb(cls, verb: Any) -> bool:
        """Return True if *verb* names a recognized HTTP method (any case)."""
        if isinstance(verb, cls):
            return True
        if not isinstance(verb, str):
            return False
        return verb.upper() in cls.__members__


class ParamType(str, enum.Enum):
    """Inferred type of a path parameter."""

    NUMBER = "number"
    STRING = "string"


class Requirement(str, enum.Enum):
    """Whether a parameter must be supplied."""

    REQUIRED = "required"
    OPTIONAL = "optional"


# --- Keys ---


class ResourceKey(NamedTuple):
    """Identity of a :class:`Resource` inside the registry."""

    name: str
    group: Optional[str] = None


class ActionKey(NamedTuple):
    """Identity of an :class:`Action` inside its resource: verb + path template."""

    verb: str
    path_template: str


# --- Configuration ---


class DoxConfig(BaseModel):
    """Immutable configuration for a documentation run.

    The headers whitelist is case-sensitive and always includes
    :data:`DEFAULT_HEADERS_WHITELIST`; configured names are added to it.
    Schema folder paths are used as prefixes when building ``$ref`` strings,
    and ``desc_folder_path`` is the base for ``*.md`` descriptions.

    Example::

        DoxConfig(headers_whitelist=["X-Auth-Token"], schema_request_folder_path="/schemas/requests")
    """

    model_config = ConfigDict(frozen=True)

    headers_whitelist: frozenset[str] = DEFAULT_HEADERS_WHITELIST
    schema_request_folder_path: str = ""
    schema_response_folder_path: str = ""
    desc_folder_path: Optional[str] = None
    header_file_path: Optional[str] = Field(
        default=None, description="Markdown file printed at the top of the markdown output"
    )
    title: str = "API Documentation"
    api_version: str = "1.0.0"

    @field_validator("headers_whitelist", mode="before")
    @classmethod
    def _merge_default_headers(cls, value: Any) -> Any:
        if value is None:
            return DEFAULT_HEADERS_WHITELIST
        if isinstance(value, str):
            value = [h.strip() for h in value.split(",") if h.strip()]
        return DEFAULT_HEADERS_WHITELIST | frozenset(value)

    def filter_headers(self, headers: dict[str, str]) -> dict[str, str]:
        """Return only the whitelisted entries of *headers*, in their original order."""
        return {k: v for k, v in headers.items() if k in self.headers_whitelist}


# --- Recorded input ---


def _read_body(value: Any) -> str:
    """Normalise a raw body (bytes, str, stream, or None) into text."""
    if value is None:
        return ""
    if hasattr(value, "read"):
        value = value.read()
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


class RecordedRequest(BaseModel):
    """The request half of one recorded interaction.

    ``path`` is the framework's normalized path; when it is missing the path
    portion of ``full_path`` is used instead. ``path_params`` are the resolved
    dynamic-segment bindings in the order the framework enumerated them.
    """

    method: str
    path: Optional[str] = None
    full_path: Optional[str] = None
    path_params: dict[str, str] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)
    body: str = ""
    content_type: Optional[str] = None

    @field_validator("body", mode="before")
    @classmethod
    def _decode_body(cls, value: Any) -> str:
        return _read_body(value)

    @field_validator("path_params", mode="before")
    @classmethod
    def _stringify_params(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {str(k): str(v) for k, v in value.items()}
        return value


class RecordedResponse(BaseModel):
    """The response half of one recorded interaction."""

    status: int
    headers: dict[str, str] = Field(default_factory=dict)
    body: str = ""
    content_type: Optional[str] = None

    @field_validator("body", mode="before")
    @classmethod
    def _decode_body(cls, value: Any) -> str:
        return _read_body(value)


class InteractionDetails(BaseModel):
    """Human metadata and explicit overrides attached to an interaction.

    ``action_verb``, ``action_path``, ``action_params`` and
    ``action_attributes`` override what would otherwise be inferred from the
    request. ``request_schema`` / ``response_schema`` name a JSON schema file
    (without the ``.json`` suffix) under the configured schema folders.
    """

    description: str = ""
    resource_name: Optional[str] = None
    resource_group: Optional[str] = None
    resource_desc: Optional[str] = None
    resource_endpoint: Optional[str] = None
    action_name: Optional[str] = None
    action_desc: Optional[str] = None
    action_verb: Optional[str] = None
    action_path: Optional[str] = None
    action_params: Optional[dict[str, ParamSpec]] = None
    action_attributes: Optional[list[AttributeSpec]] = None
    request_schema: Optional[str] = None
    response_schema: Optional[str] = None


class Interaction(BaseModel):
    """One complete recorded request/response pair plus its metadata."""

    request: RecordedRequest
    response: RecordedResponse
    details: InteractionDetails = Field(default_factory=InteractionDetails)


# --- Documentation entities ---


class ParamSpec(BaseModel):
    """A documented path parameter."""

    model_config = ConfigDict(frozen=True)

    type: ParamType = ParamType.STRING
    requirement: Requirement = Requirement.REQUIRED
    example_value: Optional[str] = None


class LiteralDefault(BaseModel):
    """A default value known up front."""

    kind: Literal["literal"] = "literal"
    value: Any = None

    def resolve(self) -> Any:
        return self.value


class ThunkDefault(BaseModel):
    """A default value computed on demand by a zero-argument callable.

    Serialises as the resolved :class:`LiteralDefault`, so a dumped recordings
    file captures the value the thunk produced at dump time.
    """

    kind: Literal["thunk"] = "thunk"
    factory: Callable[[], Any]

    def resolve(self) -> Any:
        return self.factory()

    @model_serializer
    def _serialize_resolved(self) -> dict[str, Any]:
        return {"kind": "literal", "value": self.resolve()}


DefaultValue = Annotated[Union[LiteralDefault, ThunkDefault], Field(discriminator="kind")]


class MemberSpec(BaseModel):
    """One member of an enum attribute."""

    description: Optional[str] = None


class AttributeSpec(BaseModel):
    """One documented request/response field.

    A non-empty ``children`` list makes the attribute a composite (object or
    array) that renders as a header line plus its children; otherwise it is a
    scalar. ``default`` accepts a literal or a zero-argument callable and is
    stored as a :data:`DefaultValue`.
    """

    name: str
    type: Optional[str] = None
    description: Optional[str] = None
    additional_description: Optional[str] = None
    default: Optional[DefaultValue] = None
    example: Any = None
    required: bool = False
    members: Optional[dict[str, MemberSpec]] = None
    children: Optional[list[AttributeSpec]] = None

    @field_validator("default", mode="before")
    @classmethod
    def _wrap_default(cls, value: Any) -> Any:
        if value is None or isinstance(value, (LiteralDefault, ThunkDefault)):
            return value
        if isinstance(value, dict) and value.get("kind") in ("literal", "thunk"):
            return value
        if callable(value):
            return ThunkDefault(factory=value)
        return LiteralDefault(value=value)

    @property
    def has_children(self) -> bool:
        return bool(self.children)


class Example(BaseModel):
    """One recorded interaction as it will be documented.

    Bodies are kept as raw text; the document builder and renderers parse
    them according to the content type. Headers are kept in full here, the
    whitelist is applied at render time.
    """

    model_config = ConfigDict(frozen=True)

    description: str = ""
    request_method: str = "GET"
    request_path: str = "/"
    request_headers: dict[str, str] = Field(default_factory=dict)
    request_body: str = ""
    request_content_type: Optional[str] = None
    request_schema: Optional[str] = None
    response_status: int = 200
    response_headers: dict[str, str] = Field(default_factory=dict)
    response_body: str = ""
    response_content_type: Optional[str] = None
    response_schema: Optional[str] = None

    @property
    def has_request_body(self) -> bool:
        return bool(self.request_body)

    @property
    def has_response_body(self) -> bool:
        return bool(self.response_body)


class Action(BaseModel):
    """One documented endpoint, identified by verb + path template.

    Raises:
        InvalidVerbError: If ``verb`` is not a recognized HTTP method.
    """

    name: str
    description: Optional[str] = None
    verb: str
    path_template: str
    parameters: dict[str, ParamSpec] = Field(default_factory=dict)
    attributes: Optional[list[AttributeSpec]] = None
    examples: list[Example] = Field(default_factory=list)

    @field_validator("verb", mode="before")
    @classmethod
    def _validate_verb(cls, value: Any) -> str:
        if not HTTPMethod.is_verb(value):
            raise InvalidVerbError(value)
        if isinstance(value, HTTPMethod):
            return value.value
        return value.upper()

    @property
    def key(self) -> ActionKey:
        return ActionKey(self.verb, self.path_template)


class Resource(BaseModel):
    """A named group of Actions, identified by name + group."""

    name: str
    group: Optional[str] = None
    description: Optional[str] = None
    endpoint: Optional[str] = None
    actions: dict[ActionKey, Action] = Field(default_factory=dict)

    @property
    def key(self) -> ResourceKey:
        return ResourceKey(self.name, self.group)


AttributeSpec.model_rebuild()
InteractionDetails.model_rebuild()
Interaction.model_rebuild()

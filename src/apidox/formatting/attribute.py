"""Render documented attributes as API-Blueprint style bullet fragments.

Two shapes, selected by whether the attribute has children:

* composite -- ``+ pokemon (required)``; the children follow, indented by the
  caller (:func:`render_attributes` does that).
* leaf -- ``+ id: `1` (number, required) - Pokemon id`` plus optional lines for
  the additional description, the default, and enum members.

Everything here is pure: no configuration, no I/O.
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterable, Optional

from apidox.models import AttributeSpec

_TYPE_ALIASES = {
    "integer": "number",
    "double": "number",
    "float": "number",
    "hash": "object",
}

_ENUM_TYPE_RE = re.compile(r"^enum\[(?P<base>[^\]]*)\]$")


def normalize_type(type_name: Optional[str]) -> Optional[str]:
    """Map source type names onto the documented ones (``integer`` -> ``number``)."""
    if type_name is None:
        return None
    return _TYPE_ALIASES.get(str(type_name), str(type_name))


def printed_type(attribute: AttributeSpec) -> Optional[str]:
    """The type as printed: ``enum[<type>]`` when the attribute has members."""
    base = normalize_type(attribute.type)
    if attribute.members:
        return f"enum[{base}]"
    return base


def parse_printed_type(text: str) -> tuple[str, bool]:
    """Invert :func:`printed_type`.

    Returns:
        ``(base_type, is_enum)``, e.g. ``("number", True)`` for ``enum[number]``.
    """
    match = _ENUM_TYPE_RE.match(text.strip())
    if match:
        return match.group("base"), True
    return text.strip(), False


def render_attribute(attribute: AttributeSpec) -> str:
    """Render one attribute. Children of a composite are not included."""
    if attribute.has_children:
        return f"+ {attribute.name} ({_requirement(attribute)})"
    return _render_leaf(attribute)


def render_attributes(attributes: Iterable[AttributeSpec], indent: int = 0) -> str:
    """Render a list of attributes, nesting children four spaces deeper."""
    blocks = []
    for attribute in attributes:
        blocks.append(indent_lines(indent, render_attribute(attribute)))
        if attribute.has_children:
            blocks.append(render_attributes(attribute.children or [], indent + 4))
    return "\n".join(blocks)


def indent_lines(number_of_spaces: int, text: str) -> str:
    """Prefix every line of *text* with *number_of_spaces* spaces."""
    pad = " " * number_of_spaces
    return "\n".join(pad + line for line in text.split("\n"))


def _render_leaf(attribute: AttributeSpec) -> str:
    head = [f"+ {attribute.name}:"]
    if attribute.example is not None:
        head.append(f"`{_format_value(attribute.example)}`")
    qualifiers = [q for q in (printed_type(attribute), _requirement(attribute)) if q]
    head.append(f"({', '.join(qualifiers)})")
    if attribute.description:
        head.append(f"- {attribute.description}")

    lines = [" ".join(head)]
    if attribute.additional_description:
        lines.append(f"    {attribute.additional_description}")
    if attribute.default is not None:
        lines.append(f"    Default: {_format_value(attribute.default.resolve())}")
    if attribute.members:
        lines.append("    + Members")
        for name, member in attribute.members.items():
            parts = ["        +", f"`{name}`"]
            if member.description:
                parts.append(f"- {member.description}")
            lines.append(" ".join(parts))
    return "\n".join(lines)


def _requirement(attribute: AttributeSpec) -> str:
    return "required" if attribute.required else "optional"


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, default=str)

"""Text fragments for documented attributes.

* :mod:`~apidox.formatting.attribute` -- :func:`render_attribute`,
  :func:`render_attributes` and the type normalisation helpers.
"""

from apidox.formatting.attribute import (
    indent_lines,
    normalize_type,
    parse_printed_type,
    printed_type,
    render_attribute,
    render_attributes,
)

__all__ = [
    "indent_lines",
    "normalize_type",
    "parse_printed_type",
    "printed_type",
    "render_attribute",
    "render_attributes",
]

"""Document tree assembly -- the find-or-add merge engine.

* :mod:`~apidox.document.tree` -- :func:`find_or_add`, :func:`get_or_insert`
  and :func:`merge_parameters`, the only primitives that write to the tree.
* :mod:`~apidox.document.builder` -- :class:`DocumentBuilder`, which composes
  those primitives to fold Actions and Examples into the ``paths`` tree.
"""

from apidox.document.builder import ANY_CONTENT_TYPE, DocumentBuilder, build_document
from apidox.document.tree import DocumentNode, find_or_add, get_or_insert, merge_parameters

__all__ = [
    "ANY_CONTENT_TYPE",
    "DocumentBuilder",
    "DocumentNode",
    "build_document",
    "find_or_add",
    "get_or_insert",
    "merge_parameters",
]

"""Find-or-add primitives for the accumulating document tree.

The document tree is a plain nested ``dict`` whose keys keep first-insertion
order. Every higher-level merge in :mod:`apidox.document.builder` is a
composition of :func:`get_or_insert`, which never replaces an existing node.
That is what makes folding the same example in twice a no-op on the tree's
shape.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

DocumentNode = dict[str, Any]


def find_or_add(node: DocumentNode, key: str, default: Any = None) -> Any:
    """Return ``node[key]``, first storing *default* there if the key is missing.

    Args:
        node: The mapping to look in.
        key: The child key.
        default: Value to insert when *key* is absent. ``None`` means a fresh
            empty dict (a new value per call, never a shared one).

    Returns:
        The existing or newly inserted child.
    """
    if key not in node:
        node[key] = {} if default is None else default
    return node[key]


def get_or_insert(
    node: DocumentNode,
    path: Iterable[str],
    default_factory: Callable[[], Any] = dict,
) -> Any:
    """Walk *path* from *node*, creating whatever is missing along the way.

    Intermediate nodes are created as empty dicts; the final key is created
    with *default_factory* only if it does not exist yet.

    Example::

        tree: dict = {}
        examples = get_or_insert(tree, ["requestBody", "content", "any", "examples"])
        examples["Creates a pokemon"] = {...}
    """
    keys = list(path)
    if not keys:
        return node
    for key in keys[:-1]:
        node = find_or_add(node, key)
    return find_or_add(node, keys[-1], default_factory())


def _param_identity(param: dict[str, Any]) -> tuple[Optional[str], Optional[str]]:
    return param.get("name"), param.get("in")


def merge_parameters(
    existing: list[dict[str, Any]],
    new: Iterable[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Append *new* parameters to *existing*, deduplicated by ``(name, in)``.

    The first parameter seen for a given name and location wins and keeps its
    position. *existing* is updated in place and also returned.
    """
    seen = {_param_identity(p) for p in existing}
    for param in new:
        identity = _param_identity(param)
        if identity in seen:
            continue
        seen.add(identity)
        existing.append(param)
    return existing

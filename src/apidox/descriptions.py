"""Resolve file-backed descriptions.

Resource, action, and example descriptions may be written inline or point to a
markdown file. Any description ending in ``.md`` is treated as a file name
relative to :attr:`~apidox.models.DoxConfig.desc_folder_path` (or as a full
path when ``fullpath=True``) and replaced by the file's contents.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from apidox.exceptions import DescriptionError
from apidox.models import DoxConfig


def resolve_description(
    desc: Optional[str],
    config: DoxConfig,
    fullpath: bool = False,
) -> Optional[str]:
    """Return the text a description stands for.

    Args:
        desc: Inline text, a ``*.md`` file name, or ``None``.
        config: Supplies ``desc_folder_path`` for relative file names.
        fullpath: Treat *desc* as a complete path instead of a name under
            the descriptions folder.

    Returns:
        ``None`` for a blank description, the file contents for ``*.md``
        names, and *desc* unchanged otherwise.

    Raises:
        DescriptionError: If a ``*.md`` file cannot be read, or a relative
            name is given while no descriptions folder is configured.
    """
    if desc is None or not str(desc).strip():
        return None

    if not str(desc).endswith(".md"):
        return desc

    if fullpath:
        path = Path(desc)
    elif config.desc_folder_path is None:
        raise DescriptionError(
            f"Description '{desc}' is a markdown file but no descriptions folder is configured"
        )
    else:
        path = Path(config.desc_folder_path) / desc

    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DescriptionError(f"Cannot read description file {path}: {exc}") from exc

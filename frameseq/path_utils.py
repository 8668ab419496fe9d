# -*- coding: utf-8 -*-
"""Path helpers and the two filesystem collaborators used by discovery.

Pattern and filename parsing never touch the disk.  The only I/O in the
package goes through :func:`list_directory` and :func:`file_size`, and both
can be swapped for any callable with the same signature.
"""

from __future__ import annotations

import os
import logging
from pathlib import Path
from typing import Callable

from frameseq.errors import DirectoryUnavailable

logger = logging.getLogger(__name__)

DirectoryLister = Callable[[str], list[str]]
"""``lister(path) -> names`` of the regular files directly inside *path*."""

FileSizeProbe = Callable[[str], int]
"""``probe(path) -> byte length``; raises ``OSError`` when the size is unknown."""


def split_path(filename: str) -> tuple[str, str]:
    """Split *filename* into ``(path, name)``.

    The path keeps its trailing separator so that ``path + name`` rebuilds the
    input.  ``/`` is searched first; ``\\`` is only used when there is no
    ``/`` at all.

    Examples:
        >>> split_path("/Users/Lala/Pictures/mySequence001.jpg")
        ('/Users/Lala/Pictures/', 'mySequence001.jpg')
        >>> split_path("plate.exr")
        ('', 'plate.exr')
    """
    pos = filename.rfind("/")
    if pos == -1:
        pos = filename.rfind("\\")
    if pos == -1:
        return "", filename
    return filename[:pos + 1], filename[pos + 1:]


def split_extension(name: str) -> tuple[str, str]:
    """Split *name* into ``(stem, extension)`` at the last dot.

    The extension has no dot.  A name without a dot has an empty extension
    and is returned unchanged.

    Examples:
        >>> split_extension("shot001.png")
        ('shot001', 'png')
        >>> split_extension("README")
        ('README', '')
    """
    pos = name.rfind(".")
    if pos == -1:
        return name, ""
    return name[:pos], name[pos + 1:]


def list_directory(path: str | Path) -> list[str]:
    """Return the sorted names of the regular files directly inside *path*.

    Sub-directories are skipped.  An empty path lists the current directory.

    Raises:
        DirectoryUnavailable: if the directory cannot be read.
    """
    path = str(path) or "."
    try:
        with os.scandir(path) as it:
            names = [entry.name for entry in it if not entry.is_dir()]
    except OSError as e:
        logger.debug(f"Error accessing {path}: {e}")
        raise DirectoryUnavailable(path, str(e)) from e
    return sorted(names)


def file_size(path: str | Path) -> int:
    """Byte length of *path*; raises ``OSError`` if it cannot be read."""
    return os.path.getsize(str(path))

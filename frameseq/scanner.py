# -*- coding: utf-8 -*-
"""File discovery and image-sequence detection.

Responsibilities:
    - Find the files of a folder that match an explicit pattern
      (``plate_%v.####.exr``), keyed by frame and view.
    - Flatten such a result back into a list of filenames.
    - Group every file of a folder into sequences when no pattern is known.
"""

from __future__ import annotations

import logging
from pathlib import Path

from frameseq.matcher import match_filename
from frameseq.path_utils import (
    DirectoryLister,
    FileSizeProbe,
    file_size,
    list_directory,
    split_path,
)
from frameseq.pattern import Pattern
from frameseq.sequence import FileSequence

logger = logging.getLogger(__name__)

SequenceFromPattern = dict[int, dict[int, str]]
"""frame number → (view number → absolute filename)."""


def discover_by_pattern(
    pattern: str,
    lister: DirectoryLister = list_directory,
    case_sensitive: bool = False,
) -> SequenceFromPattern:
    """Return the existing files matching *pattern*, by frame then view.

    The directory part of *pattern* is listed once; each entry is matched
    against the rest of the pattern.  Both levels of the result are in
    ascending order.  A frame/view pair claimed by two files keeps the first
    one listed.

    Raises:
        ValueError: if *pattern* is empty.
        PatternCompileError: if *pattern* is malformed.
        DirectoryUnavailable: if the pattern directory cannot be listed.
    """
    if not pattern:
        raise ValueError("Empty sequence pattern")

    compiled = Pattern.from_string(pattern, case_sensitive=case_sensitive)
    directory, _name = split_path(pattern)
    names = lister(directory)

    found: dict[int, dict[int, str]] = {}
    for name in names:
        result = match_filename(compiled, name)
        if result is None:
            continue
        views = found.setdefault(result.frame, {})
        if result.view in views:
            logger.warning(
                f"Several files share frame {result.frame} and view {result.view}: "
                f"keeping '{views[result.view]}', ignoring '{directory + name}'"
            )
            continue
        views[result.view] = directory + name

    return {frame: dict(sorted(found[frame].items())) for frame in sorted(found)}


def flatten_to_filenames(sequence: SequenceFromPattern, only_view: int | None = None) -> list[str]:
    """List the filenames of *sequence* by ascending frame then view.

    With *only_view* set, other views are left out.
    """
    files: list[str] = []
    for frame in sorted(sequence):
        views = sequence[frame]
        for view in sorted(views):
            if only_view is not None and view != only_view:
                continue
            files.append(views[view])
    return files


def scan_directory(
    root: str | Path,
    lister: DirectoryLister = list_directory,
    size_estimation: bool = False,
    size_probe: FileSizeProbe = file_size,
) -> list[FileSequence]:
    """Group the files directly inside *root* into sequences.

    Each file joins the first open sequence that accepts it, otherwise it
    starts a new one.  Files that match nothing come back as single-file
    sequences.  Sequences are returned in the order they were opened.

    Raises:
        DirectoryUnavailable: if *root* cannot be listed.
    """
    directory = str(root)
    if directory and not directory.endswith(("/", "\\")):
        directory += "/"

    sequences: list[FileSequence] = []
    for name in lister(directory):
        absolute = directory + name
        if any(seq.try_insert(absolute) for seq in sequences):
            continue
        sequences.append(FileSequence.from_file(absolute, size_estimation=size_estimation, size_probe=size_probe))

    logger.debug(f"{directory}: {len(sequences)} sequence(s) found")
    return sequences

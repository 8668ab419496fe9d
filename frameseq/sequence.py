# -*- coding: utf-8 -*-
"""Incremental sequence building from individual files.

Responsibilities:
    - Fold filenames one by one into a :class:`FileSequence`, keeping only
      those that differ from the first file by a single frame number.
    - Regenerate a canonical ``#`` pattern and a human-readable range
      description (``plate.####.exr 1-24``) from the collected frames.
    - Seed a sequence from one file and complete it from its directory.
"""

from __future__ import annotations

import bisect
import logging
from enum import Enum
from typing import Iterable, Optional, Union

from frameseq.errors import DirectoryUnavailable
from frameseq.filename import Decomposition, compare, decompose
from frameseq.path_utils import (
    DirectoryLister,
    FileSizeProbe,
    file_size,
    list_directory,
    split_path,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_SEQUENCE_HOLE = 1000
"""Consecutive missing frames after which range descriptions stop."""

NO_FRAME = -1
"""Frame key of a lone file that has no number in its name."""


class InsertStatus(Enum):
    """Outcome of :meth:`FileSequence.insert`."""
    ACCEPTED = "accepted"
    PATH_MISMATCH = "path_mismatch"
    STRUCTURAL_MISMATCH = "structural_mismatch"
    VARYING_INDEX_MISMATCH = "varying_index_mismatch"
    DUPLICATE_FRAME = "duplicate_frame"


def frame_chunks(frames: Iterable[int], max_hole: Optional[int] = None) -> list[tuple[int, int]]:
    """Fold frame numbers into ``(first, last)`` runs of consecutive integers.

    Args:
        frames: Frame numbers, in any order; duplicates are ignored.
        max_hole: Stop at the first gap of at least this many missing frames
            (``None`` never stops).

    Examples:
        >>> frame_chunks([1, 2, 3, 7, 8])
        [(1, 3), (7, 8)]
        >>> frame_chunks([1, 2, 50], max_hole=10)
        [(1, 2)]
    """
    chunks: list[tuple[int, int]] = []
    for frame in sorted(set(frames)):
        if chunks and frame == chunks[-1][1] + 1:
            chunks[-1] = (chunks[-1][0], frame)
            continue
        if chunks and max_hole is not None and frame - chunks[-1][1] - 1 >= max_hole:
            logger.debug(f"Gap of {frame - chunks[-1][1] - 1} frames before {frame}, range description truncated")
            break
        chunks.append((frame, frame))
    return chunks


def format_chunks(pattern: str, chunks: list[tuple[int, int]]) -> str:
    """Append a range description to *pattern*.

    Examples:
        >>> format_chunks("clip_###.tif", [(10, 12)])
        'clip_###.tif 10-12'
        >>> format_chunks("pattern", [(1, 3), (7, 8)])
        'pattern ( 1-3 / 7-8 )'
    """
    def _span(first: int, last: int) -> str:
        return str(first) if first == last else f"{first}-{last}"

    if not chunks:
        return pattern
    if len(chunks) == 1:
        return f"{pattern} {_span(*chunks[0])}"
    return f"{pattern} ( {' / '.join(_span(*c) for c in chunks)} )"


class FileSequence:
    """Files believed to differ only by an embedded frame number.

    The first file inserted is the anchor: it fixes which number carries the
    frame (the last one in its name) and every later file is compared to it.
    Files are keyed by frame number and a frame is never overwritten.
    """

    def __init__(self, size_estimation: bool = False, size_probe: FileSizeProbe = file_size) -> None:
        self._frames: dict[int, Decomposition] = {}
        self._keys: list[int] = []
        self._absolute_names: set[str] = set()
        self._anchor: Decomposition | None = None
        self._varying_index: int = -1
        self._min_digit_width: int = 0
        self._total_size: int = 0
        self._size_estimation: bool = size_estimation
        self._size_probe = size_probe

    @classmethod
    def from_file(
        cls,
        first: Union[Decomposition, str],
        size_estimation: bool = False,
        size_probe: FileSizeProbe = file_size,
    ) -> FileSequence:
        """Create a sequence holding *first* as its anchor."""
        sequence = cls(size_estimation=size_estimation, size_probe=size_probe)
        sequence.insert(first)
        return sequence

    @classmethod
    def discover_from_seed_file(
        cls,
        absolute_filename: str,
        lister: DirectoryLister = list_directory,
        size_estimation: bool = False,
        size_probe: FileSizeProbe = file_size,
    ) -> FileSequence:
        """Build the sequence *absolute_filename* belongs to.

        The file seeds the sequence, then every entry of its directory is
        offered in turn.  If the directory cannot be listed the sequence only
        holds the seed file.
        """
        seed = decompose(absolute_filename)
        sequence = cls.from_file(seed, size_estimation=size_estimation, size_probe=size_probe)

        try:
            names = lister(seed.path)
        except DirectoryUnavailable as e:
            logger.warning(f"Could not complete sequence of '{absolute_filename}': {e}")
            return sequence

        for name in names:
            sequence.insert(seed.path + name)
        return sequence

    # -- Properties ----------------------------------------------------------

    @property
    def varying_index(self) -> int:
        """Index, among the numbers of a name, of the frame number."""
        return self._varying_index

    @property
    def min_digit_width(self) -> int:
        return self._min_digit_width

    @property
    def size_estimation(self) -> bool:
        return self._size_estimation

    @property
    def estimated_total_size(self) -> int:
        """Cumulated byte size of the files (0 without size estimation)."""
        return self._total_size

    @property
    def path(self) -> str:
        return self._anchor.path if self._anchor else ""

    @property
    def extension(self) -> str:
        return self._anchor.extension if self._anchor else ""

    @property
    def empty(self) -> bool:
        return not self._frames

    @property
    def is_single_file(self) -> bool:
        return len(self._frames) == 1

    @property
    def first_frame(self) -> Optional[int]:
        return self._keys[0] if self._keys else None

    @property
    def last_frame(self) -> Optional[int]:
        return self._keys[-1] if self._keys else None

    @property
    def frames(self) -> list[int]:
        """Frame numbers in ascending order."""
        return list(self._keys)

    @property
    def frame_indexes(self) -> dict[int, str]:
        """Frame number → absolute filename, in ascending frame order."""
        return {k: self._frames[k].absolute for k in self._keys}

    @property
    def files(self) -> list[str]:
        return [self._frames[k].absolute for k in self._keys]

    @property
    def missing_frames(self) -> list[int]:
        """Frame numbers that are missing from a contiguous range."""
        if len(self._keys) < 2:
            return []
        present = set(self._keys)
        return [f for f in range(self._keys[0], self._keys[-1] + 1) if f not in present]

    def contains(self, absolute_filename: str) -> bool:
        return absolute_filename in self._absolute_names

    def __contains__(self, absolute_filename: object) -> bool:
        return isinstance(absolute_filename, str) and self.contains(absolute_filename)

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self):
        return iter(self.files)

    def __repr__(self) -> str:
        return f"FileSequence({self.generate_user_friendly_sequence_pattern()!r})"

    # -- Insertion -----------------------------------------------------------

    def insert(self, file: Union[Decomposition, str], check_path: bool = True) -> InsertStatus:
        """Try to add *file* and report why it was or was not accepted.

        Rejected files leave the sequence untouched.
        """
        if isinstance(file, str):
            file = decompose(file)

        if self._anchor is None:
            self._varying_index = file.number_count - 1
            frame_digits = file.number_at(self._varying_index)
            self._min_digit_width = len(frame_digits) if frame_digits else 0
            self._store(int(frame_digits) if frame_digits else NO_FRAME, file)
            self._anchor = file
            return InsertStatus.ACCEPTED

        if check_path and file.path != self._anchor.path:
            return InsertStatus.PATH_MISMATCH

        if file.absolute in self._absolute_names:
            return InsertStatus.DUPLICATE_FRAME

        index = compare(self._anchor, file)
        if index is None:
            logger.debug(f"'{file.name}' does not fit sequence of '{self._anchor.name}'")
            return InsertStatus.STRUCTURAL_MISMATCH
        if index != self._varying_index:
            return InsertStatus.VARYING_INDEX_MISMATCH

        frame = int(file.number_at(index))
        if frame in self._frames:
            logger.debug(f"Frame {frame} already held by '{self._frames[frame].name}', skipping '{file.name}'")
            return InsertStatus.DUPLICATE_FRAME

        self._store(frame, file)
        return InsertStatus.ACCEPTED

    def try_insert(self, file: Union[Decomposition, str], check_path: bool = True) -> bool:
        """Insert *file*; return True if it now belongs to the sequence."""
        return self.insert(file, check_path=check_path) is InsertStatus.ACCEPTED

    def _store(self, frame: int, file: Decomposition) -> None:
        self._frames[frame] = file
        bisect.insort(self._keys, frame)
        self._absolute_names.add(file.absolute)
        if self._size_estimation:
            try:
                self._total_size += self._size_probe(file.absolute)
            except OSError as e:
                logger.debug(f"Size of '{file.absolute}' unknown: {e}")

    # -- Patterns ------------------------------------------------------------

    def generate_valid_sequence_pattern(self) -> str:
        """Absolute ``#`` pattern that matches every file of the sequence.

        A single file yields its own absolute filename; an empty sequence an
        empty string.
        """
        if self._anchor is None:
            return ""
        if self.is_single_file:
            return self._anchor.absolute
        return self._anchor.pattern_with_frame_at(self._varying_index, self._min_digit_width)

    def generate_user_friendly_sequence_pattern(self, max_hole: Optional[int] = DEFAULT_MAX_SEQUENCE_HOLE) -> str:
        """Unpathed pattern followed by the frame ranges it covers.

        e.g. ``clip_###.tif 10-12`` or ``clip_###.tif ( 1-3 / 7-8 )``.  A
        single file yields its name.
        """
        if self._anchor is None:
            return ""
        if self.is_single_file:
            return self._anchor.name
        _path, pattern = split_path(self.generate_valid_sequence_pattern())
        return format_chunks(pattern, frame_chunks(self._keys, max_hole=max_hole))

# -*- coding: utf-8 -*-
"""Filename-to-pattern matching.

Responsibilities:
    - Walk a candidate filename and a compiled :class:`Pattern` in lock-step.
    - Resolve the frame number and view number the variables stand for.
    - Reject padding that the pattern could not have produced, and repeated
      variables that disagree with each other.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from frameseq.path_utils import split_extension
from frameseq.pattern import (
    Pattern,
    Literal,
    FrameHash,
    FramePrintf,
    ViewShort,
    ViewLong,
)

logger = logging.getLogger(__name__)

NO_FRAME = -1
"""Frame number reported when the pattern has no frame variable."""

_SHORT_VIEWS = (("r", 1), ("l", 0))
_LONG_VIEWS = (("right", 1), ("left", 0))


@dataclass(frozen=True)
class MatchResult:
    """The values a filename assigns to the variables of a pattern."""

    filename: str
    frame: int = NO_FRAME
    view: int = 0


def _digit_run(text: str, pos: int) -> int:
    end = pos
    while end < len(text) and "0" <= text[end] <= "9":
        end += 1
    return end


def _match_frame(width: int, text: str, pos: int) -> tuple[int, int] | None:
    """Read a frame number of at least *width* digits at *pos*.

    Returns ``(frame, end)`` or ``None``.  More digits than *width* are only
    allowed without zero padding: ``###`` accepts ``001`` and ``1000`` but
    neither ``01`` nor ``01000``.
    """
    end = _digit_run(text, pos)
    digits = text[pos:end]
    if not digits or len(digits) < width:
        return None
    if len(digits) > max(width, 1) and digits[0] == "0":
        return None
    return int(digits), end


def _match_view(long: bool, text: str, pos: int) -> tuple[int, int] | None:
    """Read a view spelled ``l``/``r`` (``left``/``right``) or ``view<N>``."""
    rest = text[pos:].lower()
    for spelling, view in (_LONG_VIEWS if long else _SHORT_VIEWS):
        if rest.startswith(spelling):
            return view, pos + len(spelling)
    if rest.startswith("view"):
        end = _digit_run(text, pos + 4)
        if end > pos + 4:
            return int(text[pos + 4:end]), end
    return None


def match_filename(pattern: Pattern, filename: str) -> Optional[MatchResult]:
    """Match an unpathed *filename* against *pattern*.

    Returns a :class:`MatchResult` with the resolved frame (``-1`` when the
    pattern has no frame variable) and view (``0`` by default), or ``None``
    when the filename does not belong to the pattern.
    """
    if pattern.extension:
        stem, extension = split_extension(filename)
        if pattern.case_sensitive:
            if extension != pattern.extension:
                return None
        elif extension.lower() != pattern.extension.lower():
            return None
    else:
        # Patterns without extension walk the whole name.
        stem = filename

    frame: int | None = None
    view: int | None = None
    pos = 0

    for token in pattern.tokens:
        if isinstance(token, Literal):
            end = pos + len(token.text)
            chunk = stem[pos:end]
            if pattern.case_sensitive:
                if chunk != token.text:
                    return None
            elif chunk.lower() != token.text.lower():
                return None
            pos = end

        elif isinstance(token, (FrameHash, FramePrintf)):
            found = _match_frame(token.width, stem, pos)
            if found is None:
                return None
            value, pos = found
            if frame is not None and value != frame:
                logger.debug(f"'{filename}': frame {value} contradicts frame {frame} in '{pattern.source}'")
                return None
            frame = value

        elif isinstance(token, (ViewShort, ViewLong)):
            found = _match_view(isinstance(token, ViewLong), stem, pos)
            if found is None:
                return None
            value, pos = found
            if view is not None and value != view:
                logger.debug(f"'{filename}': view {value} contradicts view {view} in '{pattern.source}'")
                return None
            view = value

    # Trailing characters the pattern does not account for.
    if pos != len(stem):
        return None

    return MatchResult(
        filename=filename,
        frame=NO_FRAME if frame is None else frame,
        view=0 if view is None else view,
    )

# -*- coding: utf-8 -*-
"""Sequence pattern compilation and instantiation.

A pattern describes a whole file sequence with variables in place of the
frame number and of the stereo view:

    ``####``      frame number, zero-padded to the number of hashes
    ``%04d``      frame number, zero-padded to 4 digits (``%d``: no padding)
    ``%v``        view as ``l`` / ``r`` / ``view<N>``
    ``%V``        view as ``left`` / ``right`` / ``view<N>``
    ``%%``        a literal percent sign

Responsibilities:
    - Parse a pattern into an ordered list of literal and variable tokens.
    - Render a compiled pattern for a given frame and view.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from frameseq.errors import PatternCompileError, UnrecognizedPatternVariable
from frameseq.path_utils import split_path, split_extension


@dataclass(frozen=True)
class Literal:
    """Text matched character for character."""
    text: str


@dataclass(frozen=True)
class FrameHash:
    """A run of ``width`` hash characters."""
    width: int


@dataclass(frozen=True)
class FramePrintf:
    """``%0<width>d``; width is 0 for a bare ``%d``."""
    width: int


@dataclass(frozen=True)
class ViewShort:
    """``%v``"""


@dataclass(frozen=True)
class ViewLong:
    """``%V``"""


PatternToken = Union[Literal, FrameHash, FramePrintf, ViewShort, ViewLong]

FRAME_TOKENS = (FrameHash, FramePrintf)
VIEW_TOKENS = (ViewShort, ViewLong)


def view_name(view: int, long: bool = False) -> str:
    """Spell a view number the way ``%v`` (or ``%V`` when *long*) expects it."""
    if view == 0:
        return "left" if long else "l"
    if view == 1:
        return "right" if long else "r"
    return f"view{view}"


def format_frame(frame: int, width: int) -> str:
    """Zero-pad *frame* to *width* digits (the sign does not count as a digit)."""
    digits = str(abs(frame)).zfill(width)
    return f"-{digits}" if frame < 0 else digits


def split_pattern_extension(name: str) -> tuple[str, str]:
    """Split an unpathed pattern into ``(stem, extension)``.

    A pattern ending in a variable (``plate.####``) or in a dot has no
    extension: the whole name is the stem.

    Examples:
        >>> split_pattern_extension("plate.####.exr")
        ('plate.####', 'exr')
        >>> split_pattern_extension("plate.####")
        ('plate.####', '')
    """
    stem, extension = split_extension(name)
    if not extension or "#" in extension or "%" in extension:
        return name, ""
    return stem, extension


@dataclass(frozen=True)
class Pattern:
    """A compiled pattern: tokens for the unpathed stem plus the extension.

    ``case_sensitive`` is the single policy for comparing literal text and
    the extension when matching filenames.
    """

    tokens: tuple[PatternToken, ...]
    extension: str = ""
    source: str = ""
    case_sensitive: bool = False

    @classmethod
    def from_string(cls, pattern: str, case_sensitive: bool = False) -> Pattern:
        """Compile a full pattern, ignoring its directory part."""
        _path, name = split_path(pattern)
        stem, extension = split_pattern_extension(name)
        return compile_pattern(stem, extension, case_sensitive=case_sensitive, source=pattern)

    @property
    def frame_variable_count(self) -> int:
        return sum(1 for t in self.tokens if isinstance(t, FRAME_TOKENS))

    @property
    def view_variable_count(self) -> int:
        return sum(1 for t in self.tokens if isinstance(t, VIEW_TOKENS))

    @property
    def has_variables(self) -> bool:
        return any(not isinstance(t, Literal) for t in self.tokens)

    def render(self, frame: int, view: int = 0) -> str:
        """Substitute every variable and return the filename (without path)."""
        parts = []
        for token in self.tokens:
            if isinstance(token, Literal):
                parts.append(token.text)
            elif isinstance(token, FRAME_TOKENS):
                parts.append(format_frame(frame, token.width))
            elif isinstance(token, ViewShort):
                parts.append(view_name(view))
            elif isinstance(token, ViewLong):
                parts.append(view_name(view, long=True))
        if self.extension:
            parts.append("." + self.extension)
        return "".join(parts)

    def __str__(self) -> str:
        parts = []
        for token in self.tokens:
            if isinstance(token, Literal):
                parts.append(token.text.replace("%", "%%"))
            elif isinstance(token, FrameHash):
                parts.append("#" * token.width)
            elif isinstance(token, FramePrintf):
                parts.append(f"%0{token.width}d" if token.width else "%d")
            elif isinstance(token, ViewShort):
                parts.append("%v")
            else:
                parts.append("%V")
        if self.extension:
            parts.append("." + self.extension)
        return "".join(parts)


def compile_pattern(
    name: str,
    extension: str = "",
    case_sensitive: bool = False,
    source: str = "",
    strict: bool = False,
) -> Pattern:
    """Parse an unpathed pattern stem into a :class:`Pattern`.

    Args:
        name: Pattern without directory and without extension
            (e.g. ``plate_%V.####``).
        extension: Extension without dot, matched as a whole.
        case_sensitive: Matching policy stored on the result.
        source: Original pattern text, used in error messages.
        strict: Reject ``%<digits>`` forms ending with anything other than
            ``d`` instead of keeping them as literal text.

    Raises:
        PatternCompileError: if a ``%`` variable opens inside another one or
            is never terminated.
        UnrecognizedPatternVariable: with *strict*, if a ``%<digits>``
            variable ends with anything other than ``d``.
    """
    source = source or (f"{name}.{extension}" if extension else name)
    tokens: list[PatternToken] = []
    text: list[str] = []

    def flush_text() -> None:
        if text:
            tokens.append(Literal("".join(text)))
            text.clear()

    i = 0
    size = len(name)
    while i < size:
        c = name[i]
        if c == "#":
            j = i
            while j < size and name[j] == "#":
                j += 1
            flush_text()
            tokens.append(FrameHash(j - i))
            i = j
            continue

        if c != "%" or i + 1 >= size:
            text.append(c)
            i += 1
            continue

        nxt = name[i + 1]
        if nxt == "%":
            text.append("%")
            i += 2
            continue
        if nxt == "v" or nxt == "V":
            flush_text()
            tokens.append(ViewShort() if nxt == "v" else ViewLong())
            i += 2
            continue
        if nxt == "d":
            flush_text()
            tokens.append(FramePrintf(0))
            i += 2
            continue
        if not "0" <= nxt <= "9":
            # Not a variable: keep the percent sign as text.
            text.append(c)
            i += 1
            continue

        j = i + 1
        while j < size and "0" <= name[j] <= "9":
            j += 1
        if j >= size:
            raise PatternCompileError(source, f"Unterminated variable '{name[i:]}' in pattern: {source}")
        if name[j] == "%":
            raise PatternCompileError(source, f"Nested variable at '{name[i:j + 1]}' in pattern: {source}")
        if name[j] != "d":
            if strict:
                raise UnrecognizedPatternVariable(source, name[i:j + 1])
            text.append(name[i:j + 1])
            i = j + 1
            continue
        flush_text()
        tokens.append(FramePrintf(int(name[i + 1:j])))
        i = j + 1

    flush_text()
    return Pattern(tuple(tokens), extension, source, case_sensitive)


def instantiate(pattern: str, frame: int, view: int = 0) -> str:
    """Generate the filename *pattern* describes for *frame* and *view*.

    The directory part of *pattern* is kept as is.

    Examples:
        >>> instantiate("/shots/plate_%V.####.exr", 12, 1)
        '/shots/plate_right.0012.exr'
        >>> instantiate("/shots/plate.####", 5)
        '/shots/plate.0005'

    Raises:
        UnrecognizedPatternVariable: if *pattern* holds a ``%`` form that
            cannot be substituted.
    """
    path, name = split_path(pattern)
    stem, extension = split_pattern_extension(name)
    try:
        compiled = compile_pattern(stem, extension, source=pattern, strict=True)
    except UnrecognizedPatternVariable:
        raise
    except PatternCompileError as e:
        raise UnrecognizedPatternVariable(pattern) from e
    return path + compiled.render(frame, view)

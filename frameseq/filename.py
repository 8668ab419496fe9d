# -*- coding: utf-8 -*-
"""Filename decomposition and structural comparison.

A filename such as ``my80sequence001.jpg`` is split into alternating text
and digit runs (``my``, ``80``, ``sequence``, ``001``).  Two filenames
belong to the same sequence when their runs line up and exactly one digit
run differs in a way a single frame variable could have produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from frameseq.path_utils import split_path, split_extension

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Number:
    text: str
    """Digits exactly as written, padding included."""

    @property
    def value(self) -> int:
        return int(self.text)


FilenameToken = Union[Text, Number]


def _leading_zeros(digits: str) -> int:
    """Count padding zeros; the last digit of ``000`` is the number itself."""
    stripped = len(digits) - len(digits.lstrip("0"))
    return min(stripped, len(digits) - 1)


def _tokenize(stem: str) -> tuple[tuple[FilenameToken, ...], int]:
    tokens: list[FilenameToken] = []
    buffer = ""
    in_number = False
    leading_zeros = 0

    for c in stem:
        is_digit = "0" <= c <= "9"
        if buffer and is_digit != in_number:
            if in_number:
                tokens.append(Number(buffer))
                leading_zeros = _leading_zeros(buffer)
            else:
                tokens.append(Text(buffer))
            buffer = ""
        in_number = is_digit
        buffer += c

    if buffer:
        if in_number:
            tokens.append(Number(buffer))
            leading_zeros = _leading_zeros(buffer)
        else:
            tokens.append(Text(buffer))

    return tuple(tokens), leading_zeros


@dataclass(frozen=True)
class Decomposition:
    """A filename split into text and number runs.

    ``tokens`` cover the name without its ``.extension`` suffix; joining
    their text and appending :attr:`suffix` gives back :attr:`name`.
    """

    absolute: str
    """The filename exactly as given, path included."""

    path: str = ""
    """Directory part with its trailing separator (``""`` if none)."""

    name: str = ""
    """Filename without its path."""

    extension: str = ""
    """Text after the last dot of :attr:`name`, without the dot."""

    tokens: tuple[FilenameToken, ...] = field(default=())

    leading_zeros: int = 0
    """Zero padding of the last number in the name."""

    @property
    def stem(self) -> str:
        return "".join(t.text for t in self.tokens)

    @property
    def suffix(self) -> str:
        """``.extension`` as written, or ``""`` when the name has no dot."""
        return self.name[len(self.stem):]

    @property
    def numbers(self) -> list[str]:
        return [t.text for t in self.tokens if isinstance(t, Number)]

    @property
    def texts(self) -> list[str]:
        """Text runs between the numbers, without the ``.extension`` suffix."""
        return [t.text for t in self.tokens if isinstance(t, Text)]

    @property
    def has_single_number(self) -> bool:
        return self.number_count == 1

    @property
    def is_only_digits(self) -> bool:
        """True for names such as ``0001.exr`` whose stem is a single number."""
        return len(self.tokens) == 1 and isinstance(self.tokens[0], Number)

    @property
    def number_count(self) -> int:
        """How many digit runs could be the frame number (``file08_001.png`` → 2)."""
        return len(self.numbers)

    def number_at(self, index: int) -> Optional[str]:
        """Digits of the *index*-th number in the name, or ``None``."""
        numbers = self.numbers
        if 0 <= index < len(numbers):
            return numbers[index]
        return None

    def file_pattern(self) -> str:
        """Every number replaced by a hash run followed by its index.

        ``my80sequence001.jpg`` gives ``my##0sequence###1.jpg``.  The path is
        not included.
        """
        parts = []
        index = 0
        for token in self.tokens:
            if isinstance(token, Number):
                parts.append("#" * len(token.text) + str(index))
                index += 1
            else:
                parts.append(token.text)
        return "".join(parts) + self.suffix

    def pattern_with_frame_at(self, index: int, width: int) -> str:
        """Absolute pattern with number *index* as ``width`` hashes.

        Every other number keeps its original digits.
        """
        parts = []
        current = 0
        for token in self.tokens:
            if isinstance(token, Number):
                parts.append("#" * width if current == index else token.text)
                current += 1
            else:
                parts.append(token.text)
        return self.path + "".join(parts) + self.suffix


def decompose(filename: str) -> Decomposition:
    """Split *filename* into its path, extension and text/number runs.

    Examples:
        >>> d = decompose("/shots/shot001.png")
        >>> d.path, d.extension, d.tokens
        ('/shots/', 'png', (Text(text='shot'), Number(text='001')))
        >>> d.leading_zeros
        2
    """
    if not filename:
        raise ValueError("Cannot decompose an empty filename")
    path, name = split_path(filename)
    stem, extension = split_extension(name)
    tokens, leading_zeros = _tokenize(stem)
    return Decomposition(
        absolute=filename,
        path=path,
        name=name,
        extension=extension,
        tokens=tokens,
        leading_zeros=leading_zeros,
    )


def _may_vary(a: str, b: str) -> bool:
    """Could one frame variable have written both *a* and *b*?

    Numbers of equal length always qualify.  Otherwise neither one may carry
    zero padding: ``5`` and ``100`` fit ``#``, but ``0100`` is never written
    by a pattern narrower than four digits and ``05`` pins the width to two.
    """
    if len(a) == len(b):
        return True
    shorter, longer = (a, b) if len(a) < len(b) else (b, a)
    if shorter[0] == "0" and len(shorter) > 1:
        return False
    return longer[0] != "0"


def compare(this: Decomposition, other: Decomposition) -> Optional[int]:
    """Decide whether two filenames belong to the same sequence.

    Returns the index (counted among numbers only) of the single number that
    varies between them, or ``None`` when the names differ in text, in
    shape, in extension, or do not have exactly one number able to vary.
    Identical names return ``None``.
    """
    if len(this.tokens) != len(other.tokens) or this.extension != other.extension:
        return None

    varying: list[int] = []
    number_index = 0
    for mine, theirs in zip(this.tokens, other.tokens):
        if type(mine) is not type(theirs):
            return None
        if isinstance(mine, Text):
            if mine.text != theirs.text:
                return None
            continue
        if mine.text != theirs.text:
            if not _may_vary(mine.text, theirs.text):
                return None
            varying.append(number_index)
        number_index += 1

    if len(varying) != 1:
        if len(varying) > 1:
            logger.debug(f"'{other.name}' and '{this.name}' differ in several numbers {varying}")
        return None
    return varying[0]

# -*- coding: utf-8 -*-
"""Exceptions raised by frameseq.

Routine outcomes (a filename not matching a pattern, a file not belonging to
a sequence, a frame already taken) are returned as values.  Only malformed
input and unreadable directories are raised.
"""

from __future__ import annotations


class SequenceParsingError(Exception):
    """Base class for every error raised by frameseq."""


class PatternCompileError(SequenceParsingError, ValueError):
    """A pattern string could not be compiled (nested or unterminated ``%``)."""

    def __init__(self, pattern: str, message: str = "") -> None:
        self.pattern = pattern
        super().__init__(message or f"Invalid pattern: {pattern}")


class UnrecognizedPatternVariable(PatternCompileError):
    """A ``%`` variable the instantiator does not know how to substitute."""

    def __init__(self, pattern: str, variable: str = "") -> None:
        self.variable = variable
        detail = f" ('{variable}')" if variable else ""
        super().__init__(pattern, f"Unrecognized pattern{detail}: {pattern}")


class DirectoryUnavailable(SequenceParsingError, OSError):
    """The directory lister could not enumerate a directory."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        message = f"Cannot list directory: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)

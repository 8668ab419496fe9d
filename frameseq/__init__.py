# -*- coding: utf-8 -*-
"""frameseq: numbered file sequence discovery and pattern handling."""

__version__ = "0.1.0"

from frameseq.errors import (
    SequenceParsingError,
    PatternCompileError,
    UnrecognizedPatternVariable,
    DirectoryUnavailable,
)
from frameseq.filename import Decomposition, decompose, compare
from frameseq.matcher import MatchResult, match_filename
from frameseq.pattern import Pattern, compile_pattern, instantiate
from frameseq.scanner import (
    SequenceFromPattern,
    discover_by_pattern,
    flatten_to_filenames,
    scan_directory,
)
from frameseq.sequence import FileSequence, InsertStatus, frame_chunks

__all__ = [
    "SequenceParsingError",
    "PatternCompileError",
    "UnrecognizedPatternVariable",
    "DirectoryUnavailable",
    "Decomposition",
    "decompose",
    "compare",
    "MatchResult",
    "match_filename",
    "Pattern",
    "compile_pattern",
    "instantiate",
    "SequenceFromPattern",
    "discover_by_pattern",
    "flatten_to_filenames",
    "scan_directory",
    "FileSequence",
    "InsertStatus",
    "frame_chunks",
]

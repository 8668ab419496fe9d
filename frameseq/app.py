# -*- coding: utf-8 -*-
"""Command-line entry point.

    frameseq /shots/plate_%v.####.exr     files matching a pattern
    frameseq /shots/plate.0001.exr        the sequence a file belongs to
    frameseq /shots/                      every sequence of a folder
"""

from __future__ import annotations

import os
import sys
import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from frameseq.config import load_settings, SequenceSettings
from frameseq.errors import SequenceParsingError
from frameseq.scanner import discover_by_pattern, flatten_to_filenames, scan_directory
from frameseq.sequence import FileSequence

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="frameseq",
        description="Find and describe numbered file sequences.",
    )
    p.add_argument("target", help="Sequence pattern, file of a sequence, or directory")
    p.add_argument("--view", type=int, help="Only list files of this view (patterns only)")
    p.add_argument("--sizes", action="store_true", help="Report the total size of each sequence")
    p.add_argument("--config", type=Path, help="YAML settings file (default: config/default_settings.yaml)")
    p.add_argument("-v", "--verbose", action="store_true", help="Log rejected files")
    return p.parse_args(argv)


def _is_pattern(target: str) -> bool:
    """A target holding a variable that is not an existing path."""
    return ("#" in target or "%" in target) and not os.path.exists(target)


def _describe(seq: FileSequence, settings: SequenceSettings, sizes: bool) -> str:
    line = seq.generate_user_friendly_sequence_pattern(max_hole=settings.max_hole)
    if sizes:
        line += f"  [{seq.estimated_total_size} bytes]"
    return line


def run(args: argparse.Namespace, settings: SequenceSettings) -> int:
    target: str = args.target
    size_estimation = settings.size_estimation or args.sizes

    if _is_pattern(target):
        found = discover_by_pattern(target, case_sensitive=settings.case_sensitive)
        for filename in flatten_to_filenames(found, only_view=args.view):
            print(filename)
        return 0

    if os.path.isdir(target):
        for seq in scan_directory(target, size_estimation=size_estimation):
            print(_describe(seq, settings, args.sizes))
        return 0

    seq = FileSequence.discover_from_seed_file(target, size_estimation=size_estimation)
    print(seq.generate_valid_sequence_pattern())
    print(_describe(seq, settings, args.sizes))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = load_settings(args.config)

    try:
        return run(args, settings)
    except SequenceParsingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

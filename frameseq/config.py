# -*- coding: utf-8 -*-
"""YAML loading and persistence of discovery settings."""

from __future__ import annotations

import os
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from frameseq.sequence import DEFAULT_MAX_SEQUENCE_HOLE

logger = logging.getLogger(__name__)

# Default settings file shipped with the tool
DEFAULT_SETTINGS_PATH = os.path.join(
    os.path.dirname(os.path.dirname(__file__)), "config", "default_settings.yaml"
)


@dataclass
class SequenceSettings:
    """Policies applied when discovering and describing sequences."""

    case_sensitive: bool = False
    """Compare pattern text and extensions exactly instead of ignoring case."""

    size_estimation: bool = False
    """Sum the byte size of every file added to a sequence."""

    max_hole: int = DEFAULT_MAX_SEQUENCE_HOLE
    """Consecutive missing frames after which range descriptions stop."""


def load_settings(path: str | Path | None = None) -> SequenceSettings:
    """Parse a YAML settings file into :class:`SequenceSettings`.

    Missing files give the defaults.  Unknown keys and values of the wrong
    type are reported and ignored.
    """
    if path is None:
        path = DEFAULT_SETTINGS_PATH

    path = str(path)
    settings = SequenceSettings()
    if not os.path.isfile(path):
        return settings

    import yaml

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return settings
    if not isinstance(data, dict):
        logger.warning(f"Config file '{path}' is not a valid YAML dictionary")
        return settings

    known = {f.name: type(getattr(settings, f.name)) for f in fields(SequenceSettings)}
    for key, value in data.items():
        if key not in known:
            logger.warning(f"Unknown setting '{key}' in '{path}' - skipping")
            continue
        expected = known[key]
        # bool is a subclass of int: a YAML "true" is not a valid max_hole.
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            logger.warning(
                f"Setting '{key}' in '{path}' must be {expected.__name__}, got {value!r} - using default"
            )
            continue
        setattr(settings, key, value)

    if settings.max_hole < 0:
        logger.warning(f"Setting 'max_hole' in '{path}' is negative - using default")
        settings.max_hole = DEFAULT_MAX_SEQUENCE_HOLE

    return settings


def save_settings(settings: SequenceSettings, path: str | Path) -> None:
    """Persist *settings* to a YAML file, creating its directory if needed."""
    import yaml

    os.makedirs(os.path.dirname(str(path)) or ".", exist_ok=True)
    with open(str(path), "w", encoding="utf-8") as f:
        yaml.dump(asdict(settings), f, default_flow_style=False, sort_keys=False)

"""
File Loader

Reads input files (GeoJSON / CSV) into text, tolerating a UTF-8 BOM.
"""

import json
import os
from pathlib import Path
from typing import Any, Union

from farmland_linkage.core.exceptions import LoadError
from farmland_linkage.logging import get_logger

log = get_logger(__name__)

BOM = "\ufeff"


def strip_bom(text: str) -> str:
    return text[1:] if text.startswith(BOM) else text


def read_text(path: Union[str, Path]) -> str:
    """Return the file's text with any leading BOM removed."""
    abs_path = os.path.abspath(path)
    if not os.path.isfile(abs_path):
        log.error("Input file does not exist: %s", abs_path)
        raise LoadError(f"Input file not found: {abs_path}")

    try:
        with open(abs_path, "r", encoding="utf-8-sig") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        log.error("Failed to read %s: %s", abs_path, exc)
        raise LoadError(f"Cannot read {abs_path}: {exc}") from exc

    log.debug("Loaded file: %s (%d chars)", abs_path, len(text))
    return strip_bom(text)


def read_json(path: Union[str, Path]) -> Any:
    text = read_text(path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        log.error("Invalid JSON in %s: %s", path, exc)
        raise LoadError(f"Invalid JSON in {path}: {exc}") from exc

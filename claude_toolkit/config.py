"""JSON configuration file operations.

Loading and writing of the JSON documents the installer handles: the
template manifests shipped with the toolkit and the settings documents in a
user's or project's .claude directory.
"""

from __future__ import annotations

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any


def load_json_object(path: str | Path) -> dict[str, Any]:
    """Load a JSON file that must contain an object.

    Args:
        path: Path to JSON file to load.

    Returns:
        Dictionary containing JSON data.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content is not valid JSON or not a JSON object
            (``json.JSONDecodeError`` is a ``ValueError``).
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def dump_json(data: Any) -> str:
    """Serialize data the way every file written by the toolkit is formatted."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_json(path: str | Path, data: dict[str, Any]) -> None:
    """Write JSON data to a file atomically, creating parent directories as needed.

    Uses write-to-temp + rename to avoid truncated files on interruption.
    A symlinked *path* is written through: the link target is replaced and
    the link kept. An existing file keeps its permission bits.

    Args:
        path: Path to write JSON file.
        data: Dictionary to serialize as JSON.
    """
    target = Path(path).resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=target.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(dump_json(data))
        if target.exists():
            shutil.copymode(target, tmp_path)
        os.replace(tmp_path, target)
    except BaseException:
        os.unlink(tmp_path)
        raise

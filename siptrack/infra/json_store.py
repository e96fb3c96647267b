"""Whole-file JSON persistence used by the repositories."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, List

logger = logging.getLogger(__name__)


def read_json_list(path) -> List[Any]:
    """Load a JSON array; a missing, corrupt or non-list file reads as empty."""
    path = Path(path)
    if not path.exists():
        return []
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {path.name}: {e}")
        return []
    except OSError as e:
        logger.error(f"Error reading {path}: {e}")
        return []
    if not isinstance(data, list):
        logger.warning(f"Expected a list in {path.name}, got {type(data).__name__}; ignoring")
        return []
    return data


def atomic_write(path, data: Any) -> None:
    """Write JSON to a temp file in the same directory, then move it into place."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.stem}_", suffix=".json")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            json.dump(data, tmp, indent=2, ensure_ascii=False)
        shutil.move(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)

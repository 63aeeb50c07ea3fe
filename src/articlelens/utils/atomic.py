"""
Atomic file writing for small state files.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

import structlog

logger = structlog.get_logger(__name__)


def atomic_write_json(target_path: Path, data: Dict[str, Any], mode: Optional[int] = None) -> None:
    """
    Atomically write JSON data to a file.

    The content goes to a temporary file in the target's directory, which is
    then moved over the target with ``os.replace`` so readers never see a
    partial file.

    Args:
        target_path: Target file path to write to
        data: Dictionary data to serialize as JSON
        mode: Optional permission bits applied before the file becomes visible

    Raises:
        OSError: If writing or renaming fails
        ValueError: If data cannot be serialized to JSON
    """
    target_path = Path(target_path)
    target_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        json_content = json.dumps(data, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.error("Failed to serialize data to JSON", error=str(e))
        raise ValueError(f"Cannot serialize data to JSON: {e}") from e

    temp_file_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=target_path.parent,
            prefix=f".{target_path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as temp_file:
            temp_file_path = Path(temp_file.name)
            temp_file.write(json_content)
            temp_file.flush()
            os.fsync(temp_file.fileno())

        if mode is not None:
            os.chmod(temp_file_path, mode)

        # os.replace is atomic on both POSIX and Windows when on same filesystem
        os.replace(str(temp_file_path), str(target_path))
        logger.debug("Atomic write completed", target=str(target_path))

    finally:
        if temp_file_path and temp_file_path.exists():
            try:
                temp_file_path.unlink()
            except OSError as cleanup_error:
                logger.warning(
                    "Failed to clean up temporary file", temp_file=str(temp_file_path), error=str(cleanup_error)
                )

"""Idempotent, atomic persistence of generated modules."""

import logging
import os
import tempfile
from pathlib import Path

from typescripter.errors import ModuleWriteError

logger = logging.getLogger(__name__)

_ENCODING = "utf-8"


def write_if_changed(content: str, path: Path) -> bool:
    """Write content to path only if it differs from what is already there.

    The new content is written to a temporary file next to the target and
    moved into place, so the target is either left untouched or fully
    replaced.

    Args:
        content: Module text to persist
        path: Target file path

    Returns:
        True if the file was written, False if it already had this content

    Raises:
        ModuleWriteError: If the file cannot be read or written

    """
    try:
        # Compared as bytes: line endings count
        if path.is_file() and path.read_bytes() == content.encode(_ENCODING):
            logger.debug("%s is up to date, skipping write", path)
            return False

        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding=_ENCODING, newline="") as f:
                f.write(content)
            os.replace(temp_name, path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise
    except (OSError, UnicodeError) as e:
        raise ModuleWriteError(f"Failed to write {path}: {e}") from e

    logger.info("Wrote %s", path)
    return True

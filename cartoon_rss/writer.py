"""Atomic output file writing."""

import os
import tempfile
from pathlib import Path

from .logging_config import create_execution_logger


def write_atomic(path: str | Path, content: str, execution_id: str | None = None) -> int:
    """Write text to ``path`` so readers never see a partial file.

    The content goes to a temporary file in the target directory, which then
    replaces the target in one rename.

    Args:
        path: Destination file
        content: Text to write (UTF-8)
        execution_id: Execution ID for logging context

    Returns:
        Number of bytes written
    """
    logger = create_execution_logger("writer", execution_id)
    target = Path(path)
    directory = target.parent

    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created directory: {directory}", directory=str(directory))

    data = content.encode("utf-8")
    fd, tmp_name = tempfile.mkstemp(
        dir=directory, prefix=f".{target.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, target)
    except Exception:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info(f"RSS feed written to {target}", path=str(target), size=len(data))
    return len(data)

"""Atomic file writes for exported artifacts."""

import os
import tempfile
from pathlib import Path


def write_bytes_atomic(path: Path, data: bytes) -> Path:
    """
    Write bytes to path so that readers never observe a partial file.

    Data goes to a temporary file in the same directory which is then renamed
    over the target. The temporary file is removed if anything fails.

    Args:
        path: Destination file (parent directories are created)
        data: File content

    Returns:
        The destination path
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".part", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return path


def write_text_atomic(path: Path, text: str, encoding: str = "utf-8") -> Path:
    """Text counterpart of write_bytes_atomic()."""
    return write_bytes_atomic(path, text.encode(encoding))

"""
Output file persistence — atomic write of generated source.

Writes are atomic (write to temp file, then rename) so a failed or
interrupted run never leaves a truncated file where the old one was.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

TMP_PREFIX = ".ucg_"
TMP_SUFFIX = ".tmp"


def read_existing(path: Path) -> str | None:
    """Current content of ``path``, or None if it doesn't exist."""
    if not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Cannot read existing %s: %s", path, e)
        return None


def write_atomic(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` (atomic write).

    Uses write-to-temp-then-rename in the target directory. On any
    failure the temp file is removed and the error propagates; the
    previous file, if any, is left as it was.

    Args:
        path: Target file.
        content: Full file content.

    Raises:
        OSError: On any filesystem failure.
    """
    # Ensure parent directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    # mkstemp creates 0600; keep the old file's mode, or a normal source file mode
    mode = path.stat().st_mode & 0o777 if path.is_file() else 0o644

    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=TMP_PREFIX,
        suffix=TMP_SUFFIX,
    )
    tmp = Path(tmp_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(content)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp, mode)
        os.replace(tmp, path)
        logger.debug("Wrote %d bytes to %s", len(content.encode("utf-8")), path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise

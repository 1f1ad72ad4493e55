"""Line counting used for size estimates.

Counts are best-effort hints for progress reporting. Every counter returns
None instead of raising when the file cannot be counted.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Optional, Union

from .exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

LineCounter = Callable[[Path], Optional[int]]


def count_lines_wc(path: Union[str, Path]) -> int | None:
    """Count newline characters with an out-of-process ``wc -l``.

    The file is passed on stdin so the path never reaches a shell.

    Args:
        path: File to count

    Returns:
        Number of newline characters, or None if the count failed
    """
    try:
        with open(path, "rb") as handle:
            result = subprocess.run(
                ["wc", "-l"],
                stdin=handle,
                capture_output=True,
                text=True,
                check=True,
            )
    except (OSError, subprocess.CalledProcessError) as e:
        logger.debug("wc -l failed for %s: %s", path, e)
        return None

    try:
        return int(result.stdout.split()[0])
    except (IndexError, ValueError):
        logger.debug("Unexpected wc output for %s: %r", path, result.stdout)
        return None


def count_lines(path: Union[str, Path], chunk_size: int = 1_048_576) -> int | None:
    """Count lines in-process, reading fixed-size chunks.

    Unlike ``wc -l``, a final line without a trailing newline is counted.

    Args:
        path: File to count
        chunk_size: Bytes read per chunk (minimum 1024)

    Returns:
        Number of lines, or None if the file could not be read
    """
    chunk_size = max(1024, chunk_size)
    line_count = 0
    last_char = b""
    try:
        with open(path, "rb") as handle:
            while True:
                chunk = handle.read(chunk_size)
                if not chunk:
                    break
                line_count += chunk.count(b"\n")
                last_char = chunk[-1:]
    except OSError as e:
        logger.debug("Could not count lines in %s: %s", path, e)
        return None

    if last_char not in (b"\n", b""):
        line_count += 1
    return line_count


LINE_COUNTERS: dict[str, LineCounter | None] = {
    "wc": count_lines_wc,
    "python": count_lines,
    "none": None,
}


def get_line_counter(name: str) -> LineCounter | None:
    """Resolve a line counter by name ("wc", "python" or "none").

    Raises:
        InvalidArgumentError: If the name is unknown
    """
    try:
        return LINE_COUNTERS[name]
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown line counter {name!r}. "
            f"Expected one of: {', '.join(LINE_COUNTERS)}"
        ) from None

"""
Logging for the generator CLI.

Console records go to stderr, so ``--dry-run`` output on stdout is just
the generated file. Records emitted while a category block is being built
are stamped with that category's key (``record.category``), so a warning
raised deep inside a project reader still says which block it concerns:

    WARNING: audio_mixer_parameters: Broken.mixer has no AudioMixerController object, skipped

Level precedence: ``--debug`` / ``--verbose`` / ``--quiet``  >  UCG_LOG_LEVEL
>  WARNING. ``UCG_LOG_FILE`` adds a full-detail DEBUG log file.
"""

from __future__ import annotations

import contextlib
import contextvars
import logging
import os
import sys
from collections.abc import Iterator, Mapping

ENV_LOG_LEVEL = "UCG_LOG_LEVEL"
ENV_LOG_FILE = "UCG_LOG_FILE"

_FMT_CONSOLE = "%(levelname)s: %(category_prefix)s%(message)s"
_FMT_VERBOSE = "%(asctime)s %(category_prefix)s%(message)s"
_FMT_DETAIL = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d [%(category)s] %(message)s"

_current_category: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "ucg_category", default=None,
)


@contextlib.contextmanager
def category_context(category: str) -> Iterator[None]:
    """Stamp every record logged inside the block with ``category``."""
    token = _current_category.set(category)
    try:
        yield
    finally:
        _current_category.reset(token)


class CategoryFilter(logging.Filter):
    """Fill ``category`` / ``category_prefix`` on each record.

    An explicit ``extra={"category": ...}`` wins over the surrounding
    ``category_context``. Outside any category the prefix is empty.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        category = getattr(record, "category", None) or _current_category.get()
        record.category = category or "-"
        record.category_prefix = f"{category}: " if category else ""
        return True


def parse_level(level: str | None) -> int:
    """Level name to its numeric constant (unknown or empty → WARNING)."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING


def console_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Console level from the CLI flags, falling back to UCG_LOG_LEVEL."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    environ = os.environ if environ is None else environ
    return parse_level(environ.get(ENV_LOG_LEVEL))


def setup_logging(level: int = logging.WARNING, log_file: str | None = None) -> None:
    """Install the generator's handlers on the root logger (replacing any).

    Args:
        level: Console level. DEBUG adds file:line detail, INFO timestamps.
        log_file: Optional path; gets every record at DEBUG.
    """
    if level <= logging.DEBUG:
        console_fmt, datefmt = _FMT_DETAIL, "%H:%M:%S"
    elif level <= logging.INFO:
        console_fmt, datefmt = _FMT_VERBOSE, "%H:%M:%S"
    else:
        console_fmt, datefmt = _FMT_CONSOLE, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(console_fmt, datefmt=datefmt))
    console.addFilter(CategoryFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root.setLevel(level)

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FMT_DETAIL, datefmt="%Y-%m-%d %H:%M:%S"))
        fh.addFilter(CategoryFilter())
        root.addHandler(fh)
        root.setLevel(logging.DEBUG)

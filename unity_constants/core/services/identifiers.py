"""
Identifier sanitizing — display names to code-safe identifiers.

Every character outside ``[A-Za-z0-9_]`` becomes ``_`` and a leading
digit gets a ``_`` prefix. ``UniqueNames`` enforces per-category
uniqueness with first-seen-wins semantics.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_]")


def sanitize(name: str) -> str:
    """Turn a display name into a code-safe identifier.

    Returns an empty string only for an empty name; callers decide
    what to do with that (the category builders skip the entry).

    Examples:
        >>> sanitize("Enemy!")
        'Enemy_'
        >>> sanitize("3Lives")
        '_3Lives'
    """
    ident = _UNSAFE_RE.sub("_", name)
    if ident[:1].isdigit():
        ident = "_" + ident
    return ident


class UniqueNames:
    """Identifier set for one category. First occurrence wins.

    Usage:
        names = UniqueNames("tags")
        ident = names.claim("Enemy!")   # "Enemy_"
        names.claim("Enemy?")           # None (same identifier, dropped)
    """

    def __init__(self, category: str):
        self.category = category
        self._seen: dict[str, str] = {}
        self.dropped: list[str] = []
        self.skipped: int = 0

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def claim(self, display_name: str, suffix: str = "") -> str | None:
        """Sanitize ``display_name`` (plus ``suffix``) and reserve it.

        Returns the identifier, or None when the name is empty or the
        identifier was already claimed in this category.
        """
        base = sanitize(display_name)
        if not base:
            self.skipped += 1
            logger.warning(
                "skipping entry with empty name (no identifier can be derived)",
                extra={"category": self.category},
            )
            return None

        ident = base + suffix
        if ident in self._seen:
            self.dropped.append(display_name)
            logger.debug(
                "dropping '%s', identifier %s already taken by '%s'",
                display_name, ident, self._seen[ident],
                extra={"category": self.category},
            )
            return None

        self._seen[ident] = display_name
        return ident

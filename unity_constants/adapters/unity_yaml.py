"""
Unity YAML loader — read text-serialized Unity assets with PyYAML.

Unity writes assets as a stream of YAML documents whose headers carry a
class id and a file id (``--- !u!78 &1``), sometimes followed by
``stripped``. The ``!u!`` handle is only declared once at the top of the
file, which PyYAML rejects for every document after the first, so the
stream is split on those headers and each body is loaded on its own.

Bodies are loaded with ``yaml.BaseLoader``: every scalar stays a string.
Unity never quotes names, so a tag called ``On`` or ``1e3`` must not be
resolved to a bool or a float.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from unity_constants.adapters.base import SourceError

logger = logging.getLogger(__name__)

_YAML_MAGIC = "%YAML"
_DOC_HEADER_RE = re.compile(r"^--- !u!(\d+) &(-?\d+)(?: (stripped))?[ \t]*$", re.MULTILINE)


@dataclass
class UnityDocument:
    """One object in a Unity YAML stream."""

    class_id: int
    file_id: int
    root_key: str
    data: dict[str, Any] = field(default_factory=dict)
    stripped: bool = False


def parse_documents(text: str, origin: str = "<string>") -> list[UnityDocument]:
    """Split a Unity YAML stream into documents and load each body.

    Args:
        text: Full file content.
        origin: Label used in error messages (usually the file path).

    Raises:
        SourceError: If the text is not Unity YAML or a body fails to parse.
    """
    if not text.lstrip().startswith(_YAML_MAGIC):
        raise SourceError(
            f"{origin} is not text-serialized YAML "
            "(set Asset Serialization to 'Force Text' in Editor settings)",
            path=origin,
        )

    headers = list(_DOC_HEADER_RE.finditer(text))
    docs: list[UnityDocument] = []

    for i, match in enumerate(headers):
        start = match.end()
        end = headers[i + 1].start() if i + 1 < len(headers) else len(text)
        body = text[start:end]

        try:
            loaded = yaml.load(body, Loader=yaml.BaseLoader)
        except yaml.YAMLError as e:
            raise SourceError(f"Invalid YAML in {origin}: {e}", path=origin) from e

        if not isinstance(loaded, dict) or not loaded:
            logger.debug("Skipping non-mapping document &%s in %s", match.group(2), origin)
            continue

        root_key = next(iter(loaded))
        payload = loaded[root_key]
        docs.append(UnityDocument(
            class_id=int(match.group(1)),
            file_id=int(match.group(2)),
            root_key=root_key,
            data=payload if isinstance(payload, dict) else {},
            stripped=match.group(3) is not None,
        ))

    return docs


def load_documents(path: Path) -> list[UnityDocument]:
    """Read and parse a Unity YAML file."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise SourceError(f"Asset not found: {path}", path=path) from e
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(f"Cannot read {path}: {e}", path=path) from e

    return parse_documents(text, origin=str(path))


def find_object(docs: list[UnityDocument], root_key: str) -> UnityDocument | None:
    """First document whose root key is ``root_key`` (e.g. ``TagManager``)."""
    for doc in docs:
        if doc.root_key == root_key:
            return doc
    return None


def load_object(path: Path, root_key: str) -> dict[str, Any]:
    """Load ``path`` and return the body of its ``root_key`` object.

    Raises:
        SourceError: If the file is unreadable or holds no such object.
    """
    doc = find_object(load_documents(path), root_key)
    if doc is None:
        raise SourceError(f"No {root_key} object in {path}", path=path)
    return doc.data


def as_list(value: Any) -> list[Any]:
    """Coerce a serialized array field to a list (missing/empty → [])."""
    if isinstance(value, list):
        return value
    return []


def as_str(value: Any) -> str:
    """Coerce a scalar field to a string (missing → "")."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def as_int(value: Any, default: int = 0) -> int:
    """Coerce a scalar field to an int, falling back to ``default``."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return default

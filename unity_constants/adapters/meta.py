"""
Unity .meta files — make a freshly written asset visible to the editor.

Unity tracks every file and folder under ``Assets/`` through a sibling
``.meta`` carrying a GUID. Existing .meta files are never rewritten.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path

logger = logging.getLogger(__name__)

META_SUFFIX = ".meta"

_SCRIPT_META = """\
fileFormatVersion: 2
guid: {guid}
MonoImporter:
  externalObjects: {{}}
  serializedVersion: 2
  defaultReferences: []
  executionOrder: 0
  icon: {{instanceID: 0}}
  userData: 
  assetBundleName: 
  assetBundleVariant: 
"""

_DEFAULT_META = """\
fileFormatVersion: 2
guid: {guid}
DefaultImporter:
  externalObjects: {{}}
  userData: 
  assetBundleName: 
  assetBundleVariant: 
"""

_FOLDER_META = """\
fileFormatVersion: 2
guid: {guid}
folderAsset: yes
DefaultImporter:
  externalObjects: {{}}
  userData: 
  assetBundleName: 
  assetBundleVariant: 
"""


def generate_guid() -> str:
    """A new 32-hex-digit asset GUID."""
    return uuid.uuid4().hex


def meta_path(path: Path) -> Path:
    return path.with_name(path.name + META_SUFFIX)


def meta_content(path: Path, guid: str | None = None) -> str:
    """Importer-appropriate .meta content for ``path``."""
    guid = guid or generate_guid()
    if path.is_dir():
        return _FOLDER_META.format(guid=guid)
    if path.suffix == ".cs":
        return _SCRIPT_META.format(guid=guid)
    return _DEFAULT_META.format(guid=guid)


def ensure_meta(path: Path, assets_root: Path) -> list[Path]:
    """Create missing .meta files for ``path`` and its folders below ``assets_root``.

    Existing .meta files are never touched, so GUIDs stay stable.

    Returns:
        The .meta files that were created (innermost last).
    """
    path = path.resolve()
    assets_root = assets_root.resolve()

    try:
        rel = path.relative_to(assets_root)
    except ValueError:
        logger.debug("%s is outside %s, no .meta needed", path, assets_root)
        return []

    targets: list[Path] = []
    current = assets_root
    for part in rel.parts:
        current = current / part
        targets.append(current)

    created: list[Path] = []
    for target in targets:
        meta = meta_path(target)
        if meta.exists():
            continue
        meta.write_text(meta_content(target), encoding="utf-8")
        logger.info("Created %s", meta)
        created.append(meta)

    return created

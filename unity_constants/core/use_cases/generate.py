"""
Generate use case — resolve the output path, build, render, write, refresh.

Ties together the project source, category builders, the C# generator
and atomic persistence. One linear pass: any host query or write
failure aborts the run before the output file is touched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from unity_constants.adapters.base import ProjectSource, SourceError
from unity_constants.core.models.config import DEFAULT_NAMESPACE, GeneratorConfig
from unity_constants.core.models.document import ConstantsDocument
from unity_constants.core.observability.logging_config import category_context
from unity_constants.core.persistence.output_file import read_existing, write_atomic
from unity_constants.core.services.categories import CATEGORIES
from unity_constants.core.services.generators.csharp import render_csharp

logger = logging.getLogger(__name__)

# Given the suggested directory, return the chosen one or None to cancel.
DirectoryPrompt = Callable[[Path], Path | None]


class GenerationError(Exception):
    """Base class for failures that abort a generation run."""

    def __init__(self, message: str, category: str | None = None):
        super().__init__(message)
        self.category = category


class IoFailure(GenerationError):
    """Writing the output file (or scanning for it) failed."""


class HostQueryFailure(GenerationError):
    """A category's source data is missing or unreadable."""


@dataclass
class GenerateResult:
    """Result of the generate use case."""

    path: Path | None = None
    content: str = ""
    counts: dict[str, int] = field(default_factory=dict)
    written: bool = False
    changed: bool = False
    cancelled: bool = False
    dry_run: bool = False

    def to_dict(self) -> dict:
        result: dict = {
            "path": str(self.path) if self.path else None,
            "cancelled": self.cancelled,
        }
        if self.cancelled:
            return result

        result["written"] = self.written
        result["changed"] = self.changed
        result["dry_run"] = self.dry_run
        result["counts"] = dict(self.counts)
        return result


def build_document(source: ProjectSource, namespace: str = DEFAULT_NAMESPACE) -> ConstantsDocument:
    """Query every category in order and assemble the document.

    Raises:
        HostQueryFailure: On the first category whose data can't be read.
    """
    document = ConstantsDocument(namespace=namespace)

    for category in CATEGORIES:
        try:
            with category_context(category.key):
                block = category.build(source)
        except (SourceError, ValueError) as e:
            raise HostQueryFailure(
                f"Cannot read {category.label} from {source.name} source: {e}",
                category=category.key,
            ) from e

        logger.info("%s: %d constant(s)", category.label, len(block))
        document.blocks.append(block)

    return document


def find_existing_output(scan_root: Path, file_name: str) -> Path | None:
    """First file named ``file_name`` under ``scan_root``, in sorted path order.

    Raises:
        IoFailure: If the directory tree can't be walked.
    """
    if not scan_root.is_dir():
        return None

    try:
        matches = sorted(
            (p for p in scan_root.rglob(file_name) if p.is_file()),
            key=lambda p: p.relative_to(scan_root).as_posix(),
        )
    except OSError as e:
        raise IoFailure(f"Cannot scan {scan_root} for {file_name}: {e}") from e

    if not matches:
        return None

    if len(matches) > 1:
        others = ", ".join(str(p.relative_to(scan_root)) for p in matches[1:])
        logger.warning(
            "Found %d copies of %s, using %s (also: %s)",
            len(matches), file_name, matches[0].relative_to(scan_root), others,
        )
    return matches[0]


def resolve_output_path(
    project_root: Path,
    config: GeneratorConfig,
    output_path: Path | None = None,
    prompt_directory: DirectoryPrompt | None = None,
) -> Path | None:
    """Decide where the file goes.

    Order: explicit path, configured ``output``, an existing file under
    ``scan_dir``, then the operator's directory choice.

    Returns:
        The target path, or None if there is nothing to go on or the
        operator cancelled.
    """
    if output_path is not None:
        return output_path

    if config.output:
        return project_root / config.output

    scan_root = project_root / config.scan_dir
    existing = find_existing_output(scan_root, config.file_name)
    if existing is not None:
        logger.info("Updating existing %s", existing)
        return existing

    if prompt_directory is None:
        return None

    directory = prompt_directory(scan_root if scan_root.is_dir() else project_root)
    if directory is None:
        return None
    return directory / config.file_name


def generate(
    source: ProjectSource,
    project_root: Path,
    config: GeneratorConfig | None = None,
    output_path: Path | None = None,
    prompt_directory: DirectoryPrompt | None = None,
    dry_run: bool = False,
    check: bool = False,
) -> GenerateResult:
    """Generate the constants file.

    Args:
        source: Where category metadata comes from.
        project_root: Project root (base for configured paths).
        config: Generator settings (default: GeneratorConfig()).
        output_path: Explicit target file; skips resolution.
        prompt_directory: Asked for a directory when no target is known.
            Not consulted in dry-run or check mode.
        dry_run: Render only; don't write or refresh.
        check: Compare against the existing file; don't write.

    Returns:
        GenerateResult. ``cancelled`` is set when no path was chosen.

    Raises:
        HostQueryFailure: A category couldn't be read.
        IoFailure: The output couldn't be written.
    """
    config = config or GeneratorConfig()
    result = GenerateResult(dry_run=dry_run)

    interactive = None if (dry_run or check) else prompt_directory
    path = resolve_output_path(project_root, config, output_path, interactive)
    result.path = path

    if path is None and not (dry_run or check):
        logger.info("No output location chosen, nothing written")
        result.cancelled = True
        return result

    document = build_document(source, namespace=config.namespace)
    result.counts = document.counts()
    result.content = render_csharp(document)

    existing = read_existing(path) if path is not None else None
    result.changed = existing != result.content

    if dry_run or check:
        return result

    assert path is not None

    if result.changed:
        try:
            write_atomic(path, result.content)
        except OSError as e:
            raise IoFailure(f"Cannot write {path}: {e}") from e
        result.written = True
        logger.info("Wrote %s", path)
    else:
        logger.info("%s is up to date", path)

    try:
        source.refresh(path)
    except OSError as e:
        logger.warning("Wrote %s but could not refresh %s source: %s", path, source.name, e)

    return result

"""
Unity Constants Generator — CLI entrypoint.

Usage:
    generate-constants
    generate-constants --output Assets/Scripts/UnityConstants.cs
    python -m unity_constants.main --project path/to/UnityProject --dry-run
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from unity_constants import __version__
from unity_constants.core.observability.logging_config import (
    ENV_LOG_FILE,
    console_level,
    setup_logging,
)


def _prompt_directory(suggested: Path) -> Path | None:
    """Ask the operator where the file should go. Ctrl-C / EOF cancels."""
    try:
        answer = click.prompt(
            "Directory for the generated file",
            default=str(suggested),
            show_default=True,
        )
    except click.Abort:
        return None
    answer = answer.strip()
    if not answer:
        return None
    return Path(answer).expanduser().resolve()


@click.command("generate-constants")
@click.version_option(version=__version__, prog_name="generate-constants")
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write to this file (default: configured path, existing file, or ask).",
)
@click.option(
    "--project",
    "-p",
    "project_dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Unity project root (default: auto-detect from cwd).",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to unity_constants.yml (default: <project>/unity_constants.yml).",
)
@click.option(
    "--manifest",
    "manifest_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Read metadata from a YAML manifest instead of the Unity project.",
)
@click.option("--no-input", is_flag=True, help="Never prompt; cancel if no output path is known.")
@click.option("--dry-run", is_flag=True, help="Print the generated file instead of writing it.")
@click.option("--check", is_flag=True, help="Exit 1 if the file is missing or out of date.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output result as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(
    output_path: str | None,
    project_dir: str | None,
    config_path: str | None,
    manifest_path: str | None,
    no_input: bool,
    dry_run: bool,
    check: bool,
    as_json: bool,
    verbose: bool,
    quiet: bool,
    debug: bool,
) -> None:
    """Generate UnityConstants.cs from the project's tags, layers, scenes and more."""
    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        console_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_LOG_FILE),
    )

    from unity_constants.adapters.base import ProjectSource, SourceError
    from unity_constants.adapters.mock import StaticProjectSource
    from unity_constants.adapters.unity import UnityProjectSource
    from unity_constants.core.config.loader import ConfigError, load_config, resolve_project_root
    from unity_constants.core.use_cases.generate import GenerationError, generate

    source: ProjectSource
    try:
        if manifest_path:
            manifest = Path(manifest_path).resolve()
            project_root = Path(project_dir).resolve() if project_dir else manifest.parent
        else:
            project_root = resolve_project_root(Path(project_dir) if project_dir else None)

        config = load_config(
            Path(config_path) if config_path else None,
            project_root=project_root,
        )

        if manifest_path:
            source = StaticProjectSource.from_yaml(manifest)
        else:
            source = UnityProjectSource(project_root, assets_dir=config.scan_dir)
    except (ConfigError, SourceError) as e:
        _fail(str(e), as_json)
        return

    try:
        result = generate(
            source,
            project_root=project_root,
            config=config,
            output_path=Path(output_path).resolve() if output_path else None,
            prompt_directory=None if no_input else _prompt_directory,
            dry_run=dry_run,
            check=check,
        )
    except GenerationError as e:
        _fail(str(e), as_json, category=e.category)
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if check and result.changed else 0)

    if result.cancelled:
        return

    if dry_run:
        click.echo(result.content, nl=False)
        return

    if check:
        if result.changed:
            click.secho(f"✗ {result.path or 'UnityConstants.cs'} is out of date", fg="red")
            sys.exit(1)
        if not quiet:
            click.secho(f"✓ {result.path} is up to date", fg="green")
        return

    if quiet:
        return

    total = sum(result.counts.values())
    if result.written:
        click.secho(f"✅ Wrote {result.path}", fg="green", bold=True)
    else:
        click.secho(f"✓ {result.path} already up to date", fg="green")
    click.echo(f"   {total} constant(s) across {len(result.counts)} categories")
    if verbose:
        for category, count in result.counts.items():
            click.echo(f"     • {category}: {count}")


def _fail(message: str, as_json: bool, category: str | None = None) -> None:
    if as_json:
        payload: dict = {"error": message}
        if category:
            payload["category"] = category
        click.echo(json.dumps(payload, indent=2))
    else:
        click.secho(f"❌ {message}", fg="red", err=True)
    sys.exit(1)


if __name__ == "__main__":
    cli()

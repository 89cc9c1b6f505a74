"""
releasegen — CLI entrypoint.

Usage:
    releasegen --help
    releasegen generate
    releasegen generate --dry-run --json
    releasegen validate
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from releasegen import __version__
from releasegen.core.observability.logging_config import configure_from_env, resolve_level

_PATH = click.Path(path_type=Path)


@click.group()
@click.version_option(version=__version__, prog_name="releasegen")
@click.option("--verbose", "-v", is_flag=True, help="Show per-app progress.")
@click.option("--quiet", "-q", is_flag=True, help="Only show errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=_PATH,
    default=None,
    help="Path to release.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: Path | None,
) -> None:
    """releasegen — build release files from app metadata."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path

    configure_from_env(resolve_level(debug=debug, verbose=verbose, quiet=quiet))


def _settings(
    ctx: click.Context,
    root: Path | None = None,
    output: Path | None = None,
    categories: Path | None = None,
):
    """Resolve settings, exiting 1 on a configuration error."""
    from releasegen.core.config.loader import ConfigError, resolve_settings

    try:
        settings = resolve_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    return settings.with_overrides(
        repositories_dir=root,
        releases_dir=output,
        categories_file=categories,
    )


@cli.command()
@click.option("--root", "root", type=_PATH, default=None, help="Directory to search for metadata files.")
@click.option("--output", "-o", "output", type=_PATH, default=None, help="Releases output directory.")
@click.option("--categories", "categories", type=_PATH, default=None, help="Category allow-list (JSON array).")
@click.option("--dry-run", is_flag=True, help="Show what would change without writing.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    root: Path | None,
    output: Path | None,
    categories: Path | None,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Rebuild the release files from every metadata.json.

    Examples:

        releasegen generate

        releasegen generate --root repositories --output releases

        releasegen generate --dry-run
    """
    from releasegen.core.use_cases.generate import run_generate

    settings = _settings(ctx, root, output, categories)

    try:
        result = run_generate(settings, dry_run=dry_run)
    except Exception as e:
        click.secho(f"❌ Release generation failed: {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if ctx.obj.get("quiet"):
        return

    mode_label = "[dry-run] " if dry_run else ""
    click.secho(f"\n🔄 {mode_label}Generating release files...", fg="cyan", bold=True)
    click.echo(f"   📁 Found {result.files_found} metadata files")

    if result.nothing_to_do:
        click.echo("   ℹ️  No metadata files found. No release files will be generated.")
        click.echo()
        return

    click.echo(f"   📊 Processed: {result.processed}, Skipped: {result.skipped}")

    if result.unlisted_categories:
        click.secho(
            f"   ⚠️  Not in {settings.categories_file.name}: "
            f"{', '.join(result.unlisted_categories)}",
            fg="yellow",
        )

    synthesis = result.synthesis
    assert synthesis is not None

    if synthesis.created_output_dir:
        verb = "Would create" if dry_run else "Created"
        click.echo(f"   📂 {verb} releases directory {synthesis.output_dir}")

    click.echo()
    click.secho("📋 Summary:", fg="white", bold=True)
    click.echo(f"   Categories: {result.total_categories}")
    click.echo(f"   Total apps: {result.processed}")
    click.echo(f"   Release files: {len(synthesis.category_files)}")

    if synthesis.category_files:
        click.echo()
        click.secho("📄 Generated files:", fg="white", bold=True)
        for name in synthesis.category_files:
            click.echo(f"   - {name}")

    if synthesis.removed_files:
        click.echo()
        click.secho("🗑️  Removed obsolete files:", fg="white", bold=True)
        for name in synthesis.removed_files:
            click.echo(f"   - {name}")

    click.echo()
    if synthesis.ok:
        click.secho("✅ Release file generation complete!", fg="green", bold=True)
    else:
        click.secho("⚠️  Release file generation finished with problems:", fg="yellow", bold=True)
        for failure in synthesis.failures:
            click.echo(f"   • {failure}")
    click.echo()


@cli.command()
@click.option("--root", "root", type=_PATH, default=None, help="Directory to search for metadata files.")
@click.option("--categories", "categories", type=_PATH, default=None, help="Category allow-list (JSON array).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def validate(
    ctx: click.Context,
    root: Path | None,
    categories: Path | None,
    as_json: bool,
) -> None:
    """Check every metadata.json without writing release files."""
    from releasegen.core.use_cases.validate import run_validate

    settings = _settings(ctx, root, None, categories)
    result = run_validate(settings)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    total = len(result.outcomes)
    if result.valid:
        click.secho(f"✅ {result.valid_count}/{total} metadata files are valid", fg="green", bold=True)
    else:
        click.secho(f"❌ {len(result.invalid)}/{total} metadata files are invalid:", fg="red", bold=True)
        for outcome in result.invalid:
            click.echo(f"   • {outcome.path}: {outcome.error}")

    if result.unlisted_categories:
        click.echo()
        click.secho(f"⚠️  Not in {settings.categories_file.name}:", fg="yellow")
        for name in result.unlisted_categories:
            click.echo(f"   • {name}")

    if not result.valid:
        click.echo()
        sys.exit(1)


if __name__ == "__main__":
    cli()

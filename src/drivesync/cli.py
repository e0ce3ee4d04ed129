"""Command-line entry point for drivesync."""

from __future__ import annotations

import logging
from typing import Any, Optional

import click

from drivesync.config import DEFAULT_CONFIG_FILE, load_config
from drivesync.errors import AuthError, ConfigError
from drivesync.manager import DriveSyncManager, format_summary

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("drivesync").setLevel(logging.DEBUG)
    elif quiet:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    # Discovery cache chatter is not useful to users.
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)


@click.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    default=DEFAULT_CONFIG_FILE,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="JSON config with localFolderPath, targetFolderId and skipPatterns",
)
@click.option("--local", "-l", "local_folder_path", type=click.Path(file_okay=False), help="Local folder to upload")
@click.option("--target", "-t", "target_folder_id", help="Destination Drive folder ID")
@click.option("--skip", "-s", "skip_patterns", multiple=True, help="Skip pattern (repeatable)")
@click.option("--credentials", "credentials_file", type=click.Path(dir_okay=False), help="OAuth client secrets JSON")
@click.option("--token", "token_file", type=click.Path(dir_okay=False), help="Cached OAuth token JSON")
@click.option("--workers", "-w", "max_workers", type=click.IntRange(min=1), help="Number of upload threads")
@click.option("--recursive/--first-level", default=None, help="Sync nested folders beyond the first level")
@click.option("--dry-run", "-n", is_flag=True, help="Show what would be uploaded")
@click.option("--no-progress", is_flag=True, help="Do not draw the progress bar")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Only log warnings and errors")
@click.version_option(package_name="drivesync")
@click.pass_context
def main(
    ctx: Any,
    config_path: str,
    local_folder_path: Optional[str],
    target_folder_id: Optional[str],
    skip_patterns: tuple[str, ...],
    credentials_file: Optional[str],
    token_file: Optional[str],
    max_workers: Optional[int],
    recursive: Optional[bool],
    dry_run: bool,
    no_progress: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Upload a local folder tree to Google Drive, skipping files that already exist."""
    configure_logging(verbose, quiet)

    try:
        config = load_config(
            config_path,
            local_folder_path=local_folder_path,
            target_folder_id=target_folder_id,
            skip_patterns=list(skip_patterns) or None,
            credentials_file=credentials_file,
            token_file=token_file,
            max_workers=max_workers,
            recursive=recursive,
            dry_run=dry_run or None,
            show_progress=False if no_progress else None,
        )
    except ConfigError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        ctx.exit(1)

    try:
        manager = DriveSyncManager(config)
        stats = manager.run()
    except KeyboardInterrupt:
        click.echo("\nSync cancelled by user", err=True)
        ctx.exit(130)
    except AuthError as exc:
        click.echo(f"Authentication failed: {exc}", err=True)
        ctx.exit(1)

    click.echo(format_summary(stats, dry_run=config.dry_run))


if __name__ == "__main__":
    main()

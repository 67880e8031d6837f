"""
Asset commands for Storyblok Manager.

Commands:
- assets list: List assets in the space
- assets upload: Upload an image
- assets delete: Delete one or more assets
"""

import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from ..api import StoryblokClient
from ..exceptions import RemoteError, StoryblokError, ValidationError
from ..utils import (
    OutputFormat,
    confirm_action,
    format_asset_list,
    format_file_size,
    print_json,
    setup_logging,
)
from . import (
    StoryblokContext,
    common_options,
    pass_context,
    print_error,
    print_info,
    print_success,
    require_config,
)


def register_asset_commands(cli: click.Group) -> None:
    """Register asset commands with the CLI."""

    @cli.group('assets')
    def assets():
        """Upload, list and delete assets."""

    @assets.command('list')
    @common_options
    @pass_context
    @require_config
    def list_assets(ctx: StoryblokContext, verbose: bool, quiet: bool, output_format: str):
        """List assets in the space."""
        setup_logging(verbose, quiet)
        fmt = OutputFormat(output_format)

        try:
            with StoryblokClient(ctx.config_manager.get()) as client:
                items = client.get_assets()

                if not items and fmt == OutputFormat.TABLE:
                    print_info("No assets in this space.")
                    return

                if not quiet and fmt == OutputFormat.TABLE:
                    click.echo(f"\nAssets ({len(items)} total):\n")

                format_asset_list(items, fmt)

        except StoryblokError as e:
            print_error(str(e), e.details)
            sys.exit(1)

    @assets.command('upload')
    @common_options
    @click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
    @click.option('--folder-id', type=int, help='Target asset folder ID')
    @pass_context
    @require_config
    def upload_asset(
        ctx: StoryblokContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        file: Path,
        folder_id: Optional[int]
    ):
        """
        Upload an image (JPG, PNG, GIF, WebP or SVG, max 10 MB).

        \b
        Examples:
          sbm assets upload hero.png
          sbm assets upload logo.svg --folder-id 42
        """
        setup_logging(verbose, quiet)
        fmt = OutputFormat(output_format)

        try:
            with StoryblokClient(ctx.config_manager.get()) as client:
                if not quiet:
                    print_info(f"Uploading {file.name} ({format_file_size(file.stat().st_size)})")

                asset = client.upload_asset(file, folder_id=folder_id)

                if fmt == OutputFormat.JSON:
                    print_json(asset)
                else:
                    print_success("Asset uploaded successfully!")
                    click.echo(f"  ID: {asset.id}")
                    click.echo(f"  Name: {asset.name}")
                    click.echo(f"  URL: {asset.filename}")

        except ValidationError as e:
            print_error(f"Validation error: {e}")
            sys.exit(1)
        except OSError as e:
            print_error(f"Cannot read file {file}", str(e))
            sys.exit(1)
        except StoryblokError as e:
            print_error(str(e), e.details)
            sys.exit(1)

    @assets.command('delete')
    @common_options
    @click.argument('asset_ids', nargs=-1, required=True, type=int)
    @click.option('--yes', '-y', is_flag=True, help='Skip confirmation')
    @pass_context
    @require_config
    def delete_assets(
        ctx: StoryblokContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        asset_ids: Tuple[int, ...],
        yes: bool
    ):
        """
        Delete one or more assets.

        Each deletion is independent; a failure does not stop the rest.

        \b
        Examples:
          sbm assets delete 123
          sbm assets delete 123 456 --yes
        """
        setup_logging(verbose, quiet)

        if not yes:
            ids = ", ".join(str(a) for a in asset_ids)
            if not confirm_action(f"Delete asset(s) {ids}?"):
                print_info("Cancelled.")
                return

        failed = 0
        with StoryblokClient(ctx.config_manager.get()) as client:
            for asset_id in asset_ids:
                try:
                    client.delete_asset(asset_id)
                    print_success(f"Asset deleted: {asset_id}")
                except RemoteError as e:
                    failed += 1
                    if e.is_not_found:
                        print_error(f"Asset not found: {asset_id}")
                    else:
                        print_error(str(e), e.details)
                except StoryblokError as e:
                    failed += 1
                    print_error(str(e), e.details)

        if failed:
            sys.exit(1)

"""
Component commands for Storyblok Manager.

Commands:
- components list: List component schemas in the space
- components create: Create a component schema
"""

import sys
from pathlib import Path
from typing import Optional

import click

from ..api import StoryblokClient
from ..exceptions import StoryblokError
from ..utils import (
    OutputFormat,
    format_component_list,
    load_json_file,
    print_json,
    setup_logging,
)
from . import (
    StoryblokContext,
    common_options,
    pass_context,
    print_error,
    print_success,
    require_config,
)


def register_component_commands(cli: click.Group) -> None:
    """Register component commands with the CLI."""

    @cli.group('components')
    def components():
        """Manage component schemas."""

    @components.command('list')
    @common_options
    @pass_context
    @require_config
    def list_components(ctx: StoryblokContext, verbose: bool, quiet: bool, output_format: str):
        """List components in the space."""
        setup_logging(verbose, quiet)
        fmt = OutputFormat(output_format)

        try:
            with StoryblokClient(ctx.config_manager.get()) as client:
                items = client.get_components()

                if not quiet and fmt == OutputFormat.TABLE:
                    click.echo(f"\nComponents ({len(items)} total):\n")

                format_component_list(items, fmt)

        except StoryblokError as e:
            print_error(str(e), e.details)
            sys.exit(1)

    @components.command('create')
    @common_options
    @click.argument('name')
    @click.option('--display-name', '-d', help='Display name (defaults to NAME)')
    @click.option(
        '--schema-file',
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help='JSON file mapping field names to field definitions'
    )
    @click.option('--preview-tmpl', help='Preview template')
    @click.option('--root', 'is_root', is_flag=True, help='Allow use as a content type')
    @pass_context
    @require_config
    def create_component(
        ctx: StoryblokContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        name: str,
        display_name: Optional[str],
        schema_file: Optional[Path],
        preview_tmpl: Optional[str],
        is_root: bool
    ):
        """
        Create a component.

        \b
        Examples:
          sbm components create hero
          sbm components create page --root --schema-file page.json
        """
        setup_logging(verbose, quiet)
        fmt = OutputFormat(output_format)

        try:
            schema = load_json_file(schema_file) if schema_file else None
        except ValueError as e:
            print_error(str(e))
            sys.exit(1)

        try:
            with StoryblokClient(ctx.config_manager.get()) as client:
                component = client.create_component(
                    name,
                    display_name=display_name,
                    schema=schema,
                    preview_tmpl=preview_tmpl,
                    is_root=is_root,
                )

                if fmt == OutputFormat.JSON:
                    print_json(component)
                else:
                    print_success("Component created successfully!")
                    click.echo(f"  ID: {component.id}")
                    click.echo(f"  Name: {component.name}")
                    click.echo(f"  Display Name: {component.display_name}")

        except StoryblokError as e:
            print_error(str(e), e.details)
            sys.exit(1)

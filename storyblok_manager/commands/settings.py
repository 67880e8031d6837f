"""
Configuration/settings commands for Storyblok Manager.

Commands:
- configure: Configure space ID, management token and connection settings
- config-clear: Clear all configuration
"""

from typing import Optional

import click

from .. import __prog_name__
from . import (
    StoryblokContext,
    pass_context,
    print_success,
    print_info,
)


def _mask(value: str, visible: int = 10) -> str:
    return f"{value[:visible]}..." if value else "(not configured)"


def register_settings_commands(cli: click.Group) -> None:
    """Register configuration commands with the CLI."""

    @cli.command('configure')
    @click.option('--space-id', '-s', help='Storyblok space ID')
    @click.option('--token', help='Management API token')
    @click.option('--timeout', '-t', type=int, help='Request timeout in seconds')
    @click.option('--no-verify-ssl', is_flag=True, help='Disable SSL certificate verification')
    @click.option('--show', is_flag=True, help='Show current configuration')
    @pass_context
    def configure(
        ctx: StoryblokContext,
        space_id: Optional[str],
        token: Optional[str],
        timeout: Optional[int],
        no_verify_ssl: bool,
        show: bool
    ):
        """
        Configure Storyblok Manager settings.

        \b
        Examples:
          sbm configure --space-id 123456 --token MY_TOKEN
          sbm configure --timeout 60
          sbm configure --show
        """
        config_manager = ctx.config_manager

        if show:
            config = config_manager.get()
            click.echo("\nCurrent Configuration:")
            click.echo(f"  API URL:           {config.base_url}")
            click.echo(f"  Space ID:          {config.space_id or '(not configured)'}")
            click.echo(f"  Management Token:  {_mask(config.management_token)}")
            click.echo(f"  Timeout:           {config.timeout}s")
            click.echo(f"  Verify SSL:        {config.verify_ssl}")
            click.echo(f"  Config Path:       {config_manager.get_config_path()}")
            return

        # Interactive configuration if no options provided
        if not any([space_id, token, timeout, no_verify_ssl]):
            click.echo("Interactive configuration setup:")

            current = config_manager.get()

            space_id = click.prompt("Space ID", default=current.space_id or None)
            token = click.prompt(
                "Management token (leave empty to keep current)",
                default='',
                hide_input=True,
                show_default=False
            )
            timeout = click.prompt(
                "Request timeout (seconds)",
                default=current.timeout,
                type=int
            )

        updates = {}
        if space_id:
            updates['space_id'] = space_id
        if token:
            updates['management_token'] = token
        if timeout:
            updates['timeout'] = timeout
        if no_verify_ssl:
            updates['verify_ssl'] = False

        if updates:
            config_manager.update(**updates)
            print_success("Configuration saved successfully.")
            print_info(f"Run '{__prog_name__} doctor' to verify the connection.")
        else:
            print_info("No changes made.")

    @cli.command('config-clear')
    @click.confirmation_option(prompt='Are you sure you want to clear all configuration?')
    @pass_context
    def config_clear(ctx: StoryblokContext):
        """Clear all stored configuration."""
        ctx.config_manager.clear()
        print_success("Configuration cleared.")

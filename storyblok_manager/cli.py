"""
Storyblok Manager CLI - Command line interface for the Storyblok Management API.

This module provides the main CLI entry point. Commands live in the
commands/ package:
- Configuration management (settings.py)
- Component schemas (components.py)
- Stories (stories.py)
- Assets (assets.py)
- Diagnostics (doctor.py)
"""

import sys
import logging
from pathlib import Path
from typing import Optional

import click

from . import __version__, __prog_name__
from .config import get_config_manager
from .commands import StoryblokContext
from .commands.assets import register_asset_commands
from .commands.components import register_component_commands
from .commands.doctor import register_doctor_commands
from .commands.settings import register_settings_commands
from .commands.stories import register_story_commands
from .utils import print_error

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name=__prog_name__)
@click.option(
    '--config-dir',
    type=click.Path(path_type=Path),
    envvar='STORYBLOK_CONFIG_DIR',
    help='Custom configuration directory'
)
@click.pass_context
def cli(ctx, config_dir: Optional[Path]):
    """
    Storyblok Manager - Storyblok Management API Tool.

    Manage components, stories and assets of a Storyblok space.

    \b
    Quick Start:
      1. Configure credentials:  sbm configure --space-id 123456 --token TOKEN
      2. Check the connection:   sbm doctor
      3. Upload an image:        sbm assets upload hero.png
      4. Create a story:         sbm stories create "Home" home page

    \b
    Environment Variables:
      STORYBLOK_SPACE_ID          - Space ID
      STORYBLOK_MANAGEMENT_TOKEN  - Management API token
      STORYBLOK_CONFIG_DIR        - Custom configuration directory
    """
    ctx.ensure_object(StoryblokContext)
    ctx.obj.config_manager = get_config_manager(config_dir)


register_settings_commands(cli)
register_component_commands(cli)
register_story_commands(cli)
register_asset_commands(cli)
register_doctor_commands(cli)


# ============================================================================
# Entry Point
# ============================================================================

def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nAborted.")
        sys.exit(130)
    except Exception as e:
        logger.exception("Unexpected error")
        print_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()

"""
CLI command modules for Storyblok Manager.

Shared context, option decorators and output helpers used by all commands.
"""

import functools
import sys

import click

from ..config import ConfigManager
from ..utils import (
    OutputFormat,
    print_error,
    print_info,
    print_success,
    print_warning,
)


class StoryblokContext:
    """CLI context object for sharing state between commands."""

    def __init__(self):
        self.config_manager: ConfigManager = None  # type: ignore[assignment]
        self.verbose: bool = False
        self.quiet: bool = False
        self.output_format: OutputFormat = OutputFormat.TABLE


pass_context = click.make_pass_decorator(StoryblokContext, ensure=True)


def common_options(f):
    """Common options for all commands."""
    f = click.option(
        '-v', '--verbose',
        is_flag=True,
        help='Enable verbose output'
    )(f)
    f = click.option(
        '-q', '--quiet',
        is_flag=True,
        help='Suppress non-essential output'
    )(f)
    f = click.option(
        '-f', '--format',
        'output_format',
        type=click.Choice(['table', 'json', 'csv']),
        default='table',
        help='Output format'
    )(f)
    return f


def require_config(f):
    """Decorator to require space ID and management token."""
    @click.pass_context
    def wrapper(click_ctx, *args, **kwargs):
        ctx = click_ctx.ensure_object(StoryblokContext)
        config = ctx.config_manager.get()

        if not config.is_configured():
            print_error(
                "Storyblok Manager is not configured.",
                f"Missing: {', '.join(config.missing_settings())}. "
                "Run 'sbm configure' or set STORYBLOK_SPACE_ID and "
                "STORYBLOK_MANAGEMENT_TOKEN."
            )
            sys.exit(1)

        return click_ctx.invoke(f, *args, **kwargs)

    return functools.update_wrapper(wrapper, f)


__all__ = [
    "StoryblokContext",
    "pass_context",
    "common_options",
    "require_config",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]

"""
Story commands for Storyblok Manager.

Commands:
- stories create: Create a story
- stories update: Update fields of a story
- stories publish: Publish a story
"""

import sys
from pathlib import Path
from typing import Optional

import click

from ..api import StoryblokClient
from ..exceptions import RemoteError, StoryblokError
from ..utils import (
    OutputFormat,
    format_story_detail,
    load_json_file,
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

content_file_option = click.option(
    '--content-file',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='JSON file with the story content'
)


def _load_content(content_file: Optional[Path]):
    if content_file is None:
        return None
    try:
        return load_json_file(content_file)
    except ValueError as e:
        print_error(str(e))
        sys.exit(1)


def register_story_commands(cli: click.Group) -> None:
    """Register story commands with the CLI."""

    @cli.group('stories')
    def stories():
        """Create, update and publish stories."""

    @stories.command('create')
    @common_options
    @click.argument('title')
    @click.argument('slug')
    @click.argument('component')
    @content_file_option
    @click.option('--publish', is_flag=True, help='Publish immediately')
    @click.option('--path', default='', help='Parent path')
    @pass_context
    @require_config
    def create_story(
        ctx: StoryblokContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        title: str,
        slug: str,
        component: str,
        content_file: Optional[Path],
        publish: bool,
        path: str
    ):
        """
        Create a story from a component.

        \b
        Examples:
          sbm stories create "Home" home page
          sbm stories create "About" about page --content-file about.json --publish
        """
        setup_logging(verbose, quiet)
        fmt = OutputFormat(output_format)
        content = _load_content(content_file)

        try:
            with StoryblokClient(ctx.config_manager.get()) as client:
                story = client.create_story(
                    title, slug, component,
                    content=content,
                    publish=publish,
                    path=path,
                )
                if fmt != OutputFormat.JSON:
                    print_success("Story created successfully!")
                format_story_detail(story, fmt)

        except StoryblokError as e:
            print_error(str(e), e.details)
            sys.exit(1)

    @stories.command('update')
    @common_options
    @click.argument('story_id', type=int)
    @click.option('--title', help='New title')
    @click.option('--slug', help='New slug')
    @content_file_option
    @pass_context
    @require_config
    def update_story(
        ctx: StoryblokContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        story_id: int,
        title: Optional[str],
        slug: Optional[str],
        content_file: Optional[Path]
    ):
        """
        Update fields of an existing story.

        \b
        Examples:
          sbm stories update 123 --title "New title"
          sbm stories update 123 --content-file content.json
        """
        setup_logging(verbose, quiet)
        fmt = OutputFormat(output_format)

        fields = {}
        if title:
            fields['title'] = title
        if slug:
            fields['slug'] = slug
        content = _load_content(content_file)
        if content is not None:
            fields['content'] = content

        if not fields:
            print_info("Nothing to update.")
            return

        try:
            with StoryblokClient(ctx.config_manager.get()) as client:
                story = client.update_story(story_id, **fields)
                if fmt != OutputFormat.JSON:
                    print_success(f"Story updated: {story_id}")
                format_story_detail(story, fmt)

        except RemoteError as e:
            if e.is_not_found:
                print_error(f"Story not found: {story_id}")
            else:
                print_error(str(e), e.details)
            sys.exit(1)
        except StoryblokError as e:
            print_error(str(e), e.details)
            sys.exit(1)

    @stories.command('publish')
    @common_options
    @click.argument('story_id', type=int)
    @pass_context
    @require_config
    def publish_story(
        ctx: StoryblokContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        story_id: int
    ):
        """Publish a story."""
        setup_logging(verbose, quiet)
        fmt = OutputFormat(output_format)

        try:
            with StoryblokClient(ctx.config_manager.get()) as client:
                story = client.publish_story(story_id)
                if fmt != OutputFormat.JSON:
                    print_success(f"Story published: {story_id}")
                format_story_detail(story, fmt)

        except RemoteError as e:
            if e.is_not_found:
                print_error(f"Story not found: {story_id}")
            else:
                print_error(str(e), e.details)
            sys.exit(1)
        except StoryblokError as e:
            print_error(str(e), e.details)
            sys.exit(1)

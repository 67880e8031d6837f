"""
Diagnostic command for Storyblok Manager.
"""

import sys

import click

from ..diagnostics import (
    STATUS_FAIL,
    STATUS_OK,
    STATUS_WARN,
    TROUBLESHOOTING_TIPS,
    run_diagnostics,
)
from ..utils import OutputFormat, print_csv, print_json, print_table, setup_logging
from . import StoryblokContext, common_options, pass_context, print_warning

STATUS_STYLES = {
    STATUS_OK: ("OK", "green"),
    STATUS_WARN: ("WARN", "yellow"),
    STATUS_FAIL: ("FAIL", "red"),
}


def register_doctor_commands(cli: click.Group) -> None:
    """Register the doctor command with the CLI."""

    @cli.command('doctor')
    @common_options
    @pass_context
    def doctor(ctx: StoryblokContext, verbose: bool, quiet: bool, output_format: str):
        """
        Check configuration, connectivity and upload permission.

        Performs a small test upload, which is deleted again afterwards.
        """
        setup_logging(verbose, quiet)
        fmt = OutputFormat(output_format)

        results = run_diagnostics(ctx.config_manager.get())
        headers = ["Check", "Status", "Details"]

        if fmt == OutputFormat.JSON:
            print_json(results)
        elif fmt == OutputFormat.CSV:
            print_csv(headers, [[r.test, r.status, r.details] for r in results])
        else:
            rows = []
            for result in results:
                label, color = STATUS_STYLES[result.status]
                rows.append([result.test, click.style(label, fg=color), result.details])
            click.echo("\nStoryblok API Diagnostic:\n")
            print_table(headers, rows)

            if any(r.status == STATUS_WARN for r in results):
                print_warning("Some checks reported warnings; see details above.")

            if not quiet:
                click.echo("\nTroubleshooting tips:")
                for tip in TROUBLESHOOTING_TIPS:
                    click.echo(f"  - {tip}")

        if not all(result.passed for result in results):
            sys.exit(1)

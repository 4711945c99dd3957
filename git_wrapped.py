#!/usr/bin/env python3
"""
git-wrapped CLI

Summarizes one year of commits made by a set of authors in a local Git
repository:
- Total commit count
- Earliest and latest commit by time of day
- Average line additions and deletions
- Largest and smallest commit
- Busiest day

Usage:
    python git_wrapped.py --path PATH --emails EMAILS [OPTIONS]

Examples:
    python git_wrapped.py --path . --emails me@example.com
    python git_wrapped.py --path ~/src/app --year 2024 --emails "me@example.com, me@work.com"
    python git_wrapped.py --path . --emails me@example.com --window legacy --format table
"""

import logging
import sys
from typing import List, Optional

import click
from rich.console import Console
from rich.text import Text

from config.settings import export_config, get_settings, load_settings
from shared.errors import ConfigurationError, WrappedError
from shared.models import WindowMode, WrappedSummary
from services.wrapped.commit_filter import parse_author_set
from services.wrapped.main import generate_wrapped
from services.wrapped.reporter import build_output, build_table

logger = logging.getLogger(__name__)

# Initialize Rich consoles
console = Console()
err_console = Console(stderr=True)

EXIT_FAILURE = 1


def configure_logging(settings):
    """Configure root logging from the monitoring settings."""
    logging.basicConfig(
        level=getattr(logging, settings.monitoring.log_level),
        format=settings.monitoring.log_format,
    )


class WrappedCLI:
    """Console presentation for git-wrapped."""

    def __init__(self):
        self.console = console
        self.err_console = err_console

    def display_summary(self, summary: WrappedSummary, output_format: str = "text"):
        """Print the summary as plain text or as a table."""
        if output_format == "table":
            self.console.print(build_table(summary))
            return
        self.console.print(
            build_output(summary), markup=False, emoji=False, highlight=False, soft_wrap=True
        )

    def display_error_message(self, error: str):
        """Print a single-line diagnostic."""
        self.err_console.print(
            Text(f"Error generating your wrapped. [err={error}]", style="red"), soft_wrap=True
        )

    def display_usage_error(self, ctx: click.Context, message: str):
        """Print a configuration problem followed by the command usage."""
        self.err_console.print(Text(message, style="yellow"), soft_wrap=True)
        click.echo(ctx.get_usage(), err=True)


# CLI instance
cli = WrappedCLI()


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    '--path',
    help='The path to the repository to be analyzed'
)
@click.option(
    '--year',
    default=lambda: get_settings().wrapped.default_year,
    show_default="GIT_WRAPPED_WRAPPED__DEFAULT_YEAR or 2023",
    help='The year for which the wrapped should be generated',
    type=click.IntRange(1, 9998)
)
@click.option(
    '--emails',
    help='A comma separated list of emails to identify the author'
)
@click.option(
    '--window',
    default=lambda: get_settings().wrapped.window_mode.value,
    show_default="GIT_WRAPPED_WRAPPED__WINDOW_MODE or calendar",
    help='Year window: calendar year, or the legacy 00:01 Jan 1 to 00:01 Dec 31 range',
    type=click.Choice([mode.value for mode in WindowMode])
)
@click.option(
    '--rev',
    default=lambda: get_settings().git.rev,
    show_default="GIT_WRAPPED_GIT__REV or --all",
    help='Revision set to walk'
)
@click.option(
    '--format',
    'output_format',
    default='text',
    show_default=True,
    help='Output format',
    type=click.Choice(['text', 'table'])
)
@click.option(
    '--verbose',
    '-v',
    is_flag=True,
    help='Enable verbose output'
)
@click.pass_context
def wrapped(
    ctx: click.Context,
    path: Optional[str],
    year: int,
    emails: Optional[str],
    window: str,
    rev: str,
    output_format: str,
    verbose: bool
):
    """Generate a yearly Git wrapped for a set of author emails."""

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug(f"Effective configuration: {export_config()}")

    if not path:
        cli.display_usage_error(ctx, "Forgot to specify the --path to the git repository")
        sys.exit(EXIT_FAILURE)

    if not emails:
        cli.display_usage_error(
            ctx,
            "Forgot to specify a valid email address of the author for which the wrapped will be created"
        )
        sys.exit(EXIT_FAILURE)

    try:
        authors = parse_author_set(emails)
    except ConfigurationError as e:
        cli.display_usage_error(ctx, str(e))
        sys.exit(EXIT_FAILURE)

    logger.debug(f"Generating wrapped for {sorted(authors.emails)} in {year} from {path}")

    try:
        summary = generate_wrapped(
            path,
            year,
            authors,
            mode=WindowMode(window),
            rev=rev,
            tz=get_settings().wrapped.tz(),
        )
    except WrappedError as e:
        logger.debug(f"Wrapped generation failed: {e!r}")
        cli.display_error_message(str(e))
        sys.exit(EXIT_FAILURE)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        cli.display_error_message(str(e))
        sys.exit(EXIT_FAILURE)

    cli.display_summary(summary, output_format)


def main(argv: Optional[List[str]] = None):
    """Console entry point; every command line error exits with status 1."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        cli.display_error_message(str(e))
        sys.exit(EXIT_FAILURE)
    configure_logging(settings)

    try:
        wrapped.main(args=argv, prog_name="git-wrapped", standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(EXIT_FAILURE)
    except click.Abort:
        err_console.print("Aborted!")
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    main()

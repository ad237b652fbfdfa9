"""subexec CLI main entry point with global options."""

import click

from .. import __version__
from ..config import resolve_settings
from ..logging_config import setup_logging


@click.group()
@click.version_option(__version__, prog_name="subexec")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (overrides $SUBEXEC_LOG_LEVEL)",
)
def cli(log_level):
    """subexec - run executables and report failures."""
    try:
        settings = resolve_settings(log_level)
        setup_logging(settings.log_level)
    except ValueError as e:
        raise click.UsageError(str(e)) from e


# Register commands at module level so tests can import cli with commands attached
from .commands.execute import call, check_call, check_output, run
from .commands.quote import quote

cli.add_command(run)
cli.add_command(call)
cli.add_command(check_call)
cli.add_command(check_output)
cli.add_command(quote)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

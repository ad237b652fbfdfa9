"""Quote command - print the argument string for a list of tokens."""

import click

from ...quoting import quote as quote_tokens
from ...quoting import split_args


@click.command(context_settings=dict(ignore_unknown_options=True))
@click.argument("tokens", nargs=-1, type=click.UNPROCESSED)
@click.option(
    "--split",
    is_flag=True,
    help="Parse the tokens back as an argument string, one token per line",
)
def quote(tokens, split):
    '''Quote TOKENS into a single argument string.

    Examples:
        subexec quote echo "a b"       # echo "a b"
        subexec quote --split 'a"""b'  # a"b
    '''
    if split:
        for token in split_args(" ".join(tokens)):
            click.echo(token)
        return
    click.echo(quote_tokens(tokens))

import click

from cli.relay_blocks import relay_blocks


@click.group()
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx):
    pass


# Derive receipts and publish them per block
cli.add_command(relay_blocks, "relay_blocks")

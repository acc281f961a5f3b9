import click

from cli.get_contract import get_contract
from cli.load_abi import load_abi
from cli.lookup_signature import lookup_event, lookup_function
from cli.resolve_proxy import resolve_proxy


@click.group()
@click.version_option(version="0.3.0")
@click.pass_context
def cli(ctx):
    pass


# Contract metadata
cli.add_command(get_contract, "get_contract")
cli.add_command(load_abi, "load_abi")

# Selector / event hash lookups
cli.add_command(lookup_function, "lookup_function")
cli.add_command(lookup_event, "lookup_event")

# Proxy implementation
cli.add_command(resolve_proxy, "resolve_proxy")

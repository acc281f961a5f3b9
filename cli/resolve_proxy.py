import asyncio
import json

import click

from config.settings import settings
from constants.proxy_slot_constants import PROXY_SLOTS
from proxies.proxy_resolvers import SequenceWalletResolver, get_slot_resolver
from proxies.storage_provider import Web3StorageProvider
from utils.formatter_utils import storage_word_to_address
from utils.logger_utils import configure_logging, get_logger
from utils.rpc_provider_utils import get_async_web3

logger = get_logger("Resolve Proxy CLI")

SEQUENCE_WALLET = "SEQUENCE_WALLET"


async def _resolve(address: str, slot: str, provider_uri: str) -> dict:
    if slot.upper() == SEQUENCE_WALLET:
        resolver = SequenceWalletResolver
    else:
        resolver = get_slot_resolver(PROXY_SLOTS.get(slot.upper(), slot))
        if resolver is None:
            raise click.BadParameter(
                f"No resolver registered for {slot}. Known: {', '.join(list(PROXY_SLOTS) + [SEQUENCE_WALLET])}",
                param_hint="--slot",
            )

    w3 = get_async_web3(provider_uri, timeout=settings.chain.rpc_timeout)
    word = await resolver.resolve(Web3StorageProvider(w3), address)
    return {
        "address": address,
        "resolver": str(resolver),
        "storage": word,
        "implementation": storage_word_to_address(word),
    }


@click.command()
@click.option("-a", "--address", required=True, type=str, help="Proxy contract address (0x-prefixed).")
@click.option(
    "-s",
    "--slot",
    required=True,
    type=str,
    help="Slot constant matched in the bytecode, either its hex value or a name such as EIP1967_IMPL.",
)
@click.option(
    "-p",
    "--provider-uri",
    default=settings.chain.provider_uri,
    show_default=True,
    type=str,
    help="The URI of the JSON-RPC node used for storage reads.",
)
@click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")
def resolve_proxy(address: str, slot: str, provider_uri: str, log_file: str):
    """Reads the implementation address of a proxy using the resolver registered for SLOT."""
    configure_logging(log_file, settings.app.log_level)

    try:
        output = asyncio.run(_resolve(address, slot, provider_uri))
    except click.BadParameter:
        raise
    except Exception:
        logger.exception(f"Failed to resolve proxy {address}:")
        raise

    click.echo(json.dumps(output, indent=2))

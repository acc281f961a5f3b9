import asyncio
import json

import click

from config.settings import settings
from loaders.defaults import defaults_with_env
from utils.async_utils import create_async_session
from utils.logger_utils import configure_logging, get_logger

logger = get_logger("Load ABI CLI")


async def _load_abi(address: str) -> list:
    async with create_async_session(timeout=settings.loaders.request_timeout) as session:
        abi_loader = defaults_with_env(settings.loaders, session=session)["abi_loader"]
        return await abi_loader.load_abi(address)


@click.command()
@click.option("-a", "--address", required=True, type=str, help="Contract address (0x-prefixed).")
@click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")
def load_abi(address: str, log_file: str):
    """Prints the ABI of a verified contract as JSON."""
    configure_logging(log_file, settings.app.log_level)

    try:
        abi = asyncio.run(_load_abi(address))
    except Exception:
        logger.exception("Failed to load ABI:")
        raise

    logger.info(f"Loaded {len(abi)} ABI items for {address}")
    click.echo(json.dumps(abi, indent=2))


if __name__ == "__main__":
    load_abi()

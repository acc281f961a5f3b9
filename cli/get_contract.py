import asyncio
import json

import click

from config.settings import settings
from loaders.defaults import defaults_with_env
from utils.async_utils import create_async_session
from utils.logger_utils import configure_logging, get_logger

logger = get_logger("Get Contract CLI")


async def _get_contract(address: str, with_sources: bool) -> dict:
    async with create_async_session(timeout=settings.loaders.request_timeout) as session:
        abi_loader = defaults_with_env(settings.loaders, session=session)["abi_loader"]
        result = await abi_loader.get_contract(address)

        output = result.model_dump()
        if with_sources:
            if result.get_sources is None:
                logger.warning(f"{result.loader_name or 'No loader'} cannot provide sources for {address}")
                output["sources"] = None
            else:
                sources = await result.get_sources()
                output["sources"] = [source.model_dump() for source in sources]
        return output


@click.command()
@click.option("-a", "--address", required=True, type=str, help="Contract address (0x-prefixed).")
@click.option("--with-sources", is_flag=True, default=False, help="Also fetch the verified source files.")
@click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")
def get_contract(address: str, with_sources: bool, log_file: str):
    """
    Fetches ABI, name and compiler settings of a verified contract,
    trying Sourcify, then Etherscan (then Blockscout when configured).
    """
    configure_logging(log_file, settings.app.log_level)
    logger.info(f"Loading contract metadata for {address}...")

    try:
        output = asyncio.run(_get_contract(address, with_sources))
    except Exception:
        logger.exception("Failed to load contract metadata:")
        raise

    if not output["ok"]:
        logger.info(f"No verified contract found for {address}")
    click.echo(json.dumps(output, indent=2))


if __name__ == "__main__":
    get_contract()

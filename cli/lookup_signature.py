import asyncio
import json

import click

from config.settings import settings
from loaders.defaults import default_signature_lookup
from utils.async_utils import create_async_session
from utils.logger_utils import configure_logging, get_logger

logger = get_logger("Lookup Signature CLI")


async def _lookup(kind: str, key: str) -> list:
    async with create_async_session(timeout=settings.loaders.request_timeout) as session:
        lookup = default_signature_lookup(session=session)
        if kind == "function":
            return await lookup.load_functions(key)
        return await lookup.load_events(key)


def _run(kind: str, key: str, log_file: str):
    configure_logging(log_file, settings.app.log_level)

    try:
        signatures = asyncio.run(_lookup(kind, key))
    except Exception:
        logger.exception(f"Failed to look up {kind} {key}:")
        raise

    if not signatures:
        logger.info(f"No known {kind} signature for {key}")
    click.echo(json.dumps(signatures, indent=2))


@click.command()
@click.option("-s", "--selector", required=True, type=str, help="4-byte function selector, e.g. 0x7ff36ab5.")
@click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")
def lookup_function(selector: str, log_file: str):
    """Lists candidate function signatures for a selector."""
    _run("function", selector, log_file)


@click.command()
@click.option("-h", "--hash", "event_hash", required=True, type=str, help="32-byte event topic hash.")
@click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")
def lookup_event(event_hash: str, log_file: str):
    """Lists candidate event signatures for a topic hash."""
    _run("event", event_hash, log_file)

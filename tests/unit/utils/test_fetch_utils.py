import aiohttp
import pytest
from unittest.mock import AsyncMock, MagicMock

from errors.resolution_errors import FetchError
from utils.fetch_utils import fetch_json, redact_url

URL = "https://api.etherscan.io/api?module=contract&action=getabi&address=0xabc&apikey=SECRET"


def make_session(status=200, reason="OK", body=None, json_error=None):
    response = MagicMock()
    response.status = status
    response.reason = reason
    response.json = AsyncMock(return_value=body, side_effect=json_error)

    session = MagicMock()
    session.get.return_value.__aenter__.return_value = response
    return session


def test_redact_url():
    assert redact_url(URL).endswith("apikey=***")
    assert "SECRET" not in redact_url(URL)
    assert redact_url("https://example.com/a?b=c") == "https://example.com/a?b=c"


@pytest.mark.asyncio
async def test_fetch_json_returns_decoded_body():
    session = make_session(body={"status": "1", "result": "[]"})

    payload = await fetch_json(URL, session=session, headers={"Accept": "application/json"})

    assert payload == {"status": "1", "result": "[]"}
    session.get.assert_called_once_with(URL, headers={"Accept": "application/json"})


@pytest.mark.asyncio
async def test_fetch_json_non_2xx_raises_with_status():
    session = make_session(status=404, reason="Not Found")

    with pytest.raises(FetchError) as exc_info:
        await fetch_json(URL, session=session)

    err = exc_info.value
    assert err.status == 404
    assert str(err) == "HTTP 404 Not Found"
    assert "SECRET" not in err.url


@pytest.mark.asyncio
async def test_fetch_json_invalid_body():
    session = make_session(json_error=ValueError("Expecting value"))

    with pytest.raises(FetchError, match="Invalid JSON response") as exc_info:
        await fetch_json(URL, session=session)

    assert exc_info.value.status is None


@pytest.mark.asyncio
async def test_fetch_json_connection_error():
    session = MagicMock()
    session.get.side_effect = aiohttp.ClientConnectionError("connection refused")

    with pytest.raises(FetchError, match="Request failed") as exc_info:
        await fetch_json(URL, session=session)

    assert exc_info.value.status is None
    assert isinstance(exc_info.value.cause, aiohttp.ClientConnectionError)

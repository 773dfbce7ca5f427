"""One-shot API key validation against the remote messages endpoint."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from chatflow.config import settings
from chatflow.errors import ApiError, InvalidCredentialError, NetworkError

logger = logging.getLogger(__name__)


def build_request(api_key: str) -> tuple[dict[str, str], dict[str, Any]]:
    """Return the (headers, json body) pair for a validation request.

    The body is the smallest request that still goes through the API's
    authentication check: one short user turn and a tiny token cap.
    """
    headers = {
        "x-api-key": api_key,
        "anthropic-version": settings.api_version,
        "content-type": "application/json",
    }
    payload = {
        "model": settings.validation_model,
        "messages": [{"role": "user", "content": "Hi"}],
        "max_tokens": settings.validation_max_tokens,
    }
    return headers, payload


async def validate_api_key(api_key: str, endpoint: str) -> bool:
    """POST a trivial completion to *endpoint* using *api_key*.

    Returns True on HTTP 200. There is no False result: a rejected key
    raises ``InvalidCredentialError`` (401), any other status raises
    ``ApiError`` and transport failures raise ``NetworkError``. The
    response body is never read.
    """
    headers, payload = build_request(api_key)

    try:
        async with (
            aiohttp.ClientSession() as session,
            session.post(endpoint, json=payload, headers=headers) as resp,
        ):
            status = resp.status
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        logger.warning("API validation could not reach %s: %s", endpoint, exc)
        msg = f"Failed to connect to API: {exc}"
        raise NetworkError(msg) from exc

    if status == 200:
        logger.info("API key validated against %s", endpoint)
        return True
    if status == 401:
        logger.info("API key rejected by %s", endpoint)
        msg = "Invalid API key"
        raise InvalidCredentialError(msg)

    logger.warning("API validation against %s returned status %d", endpoint, status)
    raise ApiError(status)

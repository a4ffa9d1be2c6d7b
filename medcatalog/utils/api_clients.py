"""
API Client Utility Module

This module provides helper functions for making HTTP requests to external APIs:
building the shared client, encoding query strings, and turning transport and
decoding failures into typed errors.
"""
import json
import logging
import re
import urllib.parse
from typing import Any, Dict, List, Tuple

import httpx
from httpx import Response

from medcatalog.errors import ResponseValidationError, UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "medcatalog/0.1.0",
}

# Characters of the openFDA query grammar that must reach the API unencoded
SEARCH_SAFE_CHARS = '():+"*'

_API_KEY_PARAM = re.compile(r"(api_key=)[^&]*")


def create_http_client(timeout: int = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    """
    Create the HTTP client shared by all outbound requests.

    Args:
        timeout: Request timeout in seconds

    Returns:
        Configured httpx.AsyncClient; the caller owns it and must close it
    """
    return httpx.AsyncClient(timeout=timeout, headers=DEFAULT_HEADERS)


def encode_search(query: str) -> str:
    return urllib.parse.quote(query, safe=SEARCH_SAFE_CHARS)


def build_url(base_url: str, params: List[Tuple[str, Any]]) -> str:
    """
    Join a base URL and already-encoded parameters, keeping their order.

    Args:
        base_url: Endpoint URL without a query string
        params: (name, value) pairs; values must already be URL safe

    Returns:
        Complete URL
    """
    query = "&".join(f"{name}={value}" for name, value in params)
    return f"{base_url}?{query}"


def redact_api_key(url: str) -> str:
    return _API_KEY_PARAM.sub(r"\1***", url)


async def send_get(client: httpx.AsyncClient, url: str) -> Response:
    """
    Issue a single GET request. No retries are attempted.

    Args:
        client: Shared HTTP client
        url: Fully built request URL

    Returns:
        The HTTP response, whatever its status

    Raises:
        UpstreamError: If the request could not be completed
    """
    logger.info(f"Making GET request to {redact_api_key(url)}")
    try:
        return await client.get(url)
    except httpx.HTTPError as e:
        logger.error(f"Request failed: {e.__class__.__name__}: {str(e)}")
        raise UpstreamError(None, f"{e.__class__.__name__}: {str(e)}") from e


def parse_json(response: Response) -> Dict[str, Any]:
    """
    Decode a JSON response body.

    Raises:
        ResponseValidationError: If the body is not valid JSON
    """
    try:
        return response.json()
    except json.JSONDecodeError as e:
        logger.error(f"Failed to decode response as JSON: {response.text[:200]}...")
        raise ResponseValidationError(f"Invalid FDA API response: {str(e)}") from e

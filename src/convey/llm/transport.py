"""
Asynchronous HTTP transport shared by LLM providers.

One call performs one request with a fresh client; the decoded JSON body is
returned whatever the HTTP status, since providers report their own errors as
JSON documents.
"""

from typing import Any, Dict, Optional
import json
import logging

import httpx

from .errors import TransportError

_logger = logging.getLogger("convey.console")

DEFAULT_TIMEOUT = 60.0


def encode_json(payload: Any) -> bytes:
    """Serialize a payload as UTF-8 encoded JSON."""
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


async def async_request(
    url: str,
    method: str = "POST",
    body: Optional[Any] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
    params: Optional[Dict[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Any:
    """
    Perform one HTTP request and decode the JSON response.

    Args:
        url: Target URL
        method: HTTP method
        body: JSON-serializable request body, sent as UTF-8 JSON
        headers: Extra request headers
        timeout: Request timeout in seconds (None disables it)
        params: Query parameters appended to the URL
        transport: Optional httpx transport (used by tests)

    Returns:
        Decoded JSON response body

    Raises:
        TransportError: On an unsendable request, timeout, connection failure
            or a non-JSON body
    """
    request_headers = {"Content-Type": "application/json"}
    request_headers.update(headers or {})
    try:
        content = encode_json(body) if body is not None else None
    except (TypeError, ValueError) as e:
        raise TransportError(
            f"Request body is not JSON serializable: {e}", status="REQUEST_ERROR"
        ) from e

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.request(
                method,
                url,
                params=params,
                content=content,
                headers=request_headers,
            )
    except httpx.TimeoutException as e:
        raise TransportError(
            f"Request timed out after {timeout}s", status="TIMEOUT"
        ) from e
    except httpx.HTTPError as e:
        raise TransportError(f"Request failed: {e}", status="NETWORK_ERROR") from e
    except httpx.InvalidURL as e:
        raise TransportError(f"Invalid request URL: {e}", status="REQUEST_ERROR") from e

    _logger.debug("HTTP %s %s -> %d", method, response.url.path, response.status_code)

    try:
        return response.json()
    except ValueError as e:
        raise TransportError(
            f"Invalid JSON in response (HTTP {response.status_code})",
            status="INVALID_RESPONSE",
            status_code=response.status_code,
        ) from e

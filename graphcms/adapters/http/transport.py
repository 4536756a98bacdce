"""
HTTP transport for the remote store.

Owns the httpx.AsyncClient. Every request carries the bearer credential;
httpx sets Content-Type only when a JSON body is sent. Failures never escape
as httpx exceptions: non-success responses and transport errors both become
StoreError.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from graphcms.core.errors import StoreError
from graphcms.settings.models import StoreConfig

logger = logging.getLogger(__name__)


class StoreTransport:
    """JSON request/response against `{base_url}{api_prefix}`."""

    def __init__(
        self,
        config: StoreConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.root_url,
            headers={"Authorization": f"Bearer {config.api_key}"},
            timeout=config.timeout_seconds,
            transport=transport,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        """
        Send a request and decode the JSON response.

        Returns None for 204 or an empty success body.

        Raises:
            StoreError: Non-success status, undecodable body, or no response.
        """
        kwargs: dict[str, Any] = {}
        if params:
            kwargs["params"] = params
        if body is not None:
            kwargs["json"] = body

        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise StoreError(f"Request failed: {e}", 0) from e
        logger.debug("%s %s -> %s", method, path, response.status_code)

        if not response.is_success:
            raise _error_from_response(response)

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise StoreError(
                "Invalid JSON in response", response.status_code, response.text
            ) from e

    async def aclose(self) -> None:
        await self._client.aclose()


def _error_from_response(response: httpx.Response) -> StoreError:
    try:
        details = response.json()
    except ValueError:
        details = {"message": "Request failed"}

    message = details.get("message") if isinstance(details, dict) else None
    return StoreError(message or f"HTTP {response.status_code}", response.status_code, details)

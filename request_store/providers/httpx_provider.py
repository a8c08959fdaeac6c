import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional

import httpx

from request_store.core.provider import ProviderParameter
from request_store.settings import Settings

logger = logging.getLogger(__name__)

# Methods whose params travel in the URL rather than in a JSON body
QUERY_METHODS = frozenset({"GET", "HEAD", "DELETE"})


def _extract_headers(extra_data: Any) -> Dict[str, str]:
    if isinstance(extra_data, Mapping):
        headers = extra_data.get("headers") or {}
        return {str(k): str(v) for k, v in headers.items()}
    return {}


def _decode_response(response: httpx.Response, method: str) -> Any:
    if method == "HEAD" or not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        return response.json()
    return response.text


class HttpxProvider:
    """
    Provider that performs requests with an httpx.AsyncClient.

    GET, HEAD and DELETE send the fetch params as query parameters; POST, PUT and
    PATCH send them as a JSON body. `extra_data={"headers": {...}}` adds request
    headers. Non-2xx responses raise httpx.HTTPStatusError.

    Attributes:
        client (httpx.AsyncClient): The client used for every request.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        settings: Optional[Settings] = None,
    ):
        self._owns_client = client is None
        if client is None:
            settings = settings or Settings()
            client = httpx.AsyncClient(
                base_url=base_url or settings.get_base_url() or "",
                timeout=timeout if timeout is not None else settings.get_timeout(),
            )
        self.client = client

    async def __call__(self, parameter: ProviderParameter) -> Any:
        headers = _extract_headers(parameter.extra_data)
        if parameter.method in QUERY_METHODS:
            response = await self.client.request(
                parameter.method, parameter.url, params=parameter.query, headers=headers
            )
        else:
            response = await self.client.request(parameter.method, parameter.url, json=parameter.body, headers=headers)
        logger.debug(f"{parameter.method} {response.request.url} -> {response.status_code}")
        response.raise_for_status()
        return _decode_response(response, parameter.method)

    async def aclose(self) -> None:
        """Close the client if this provider created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "HttpxProvider":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

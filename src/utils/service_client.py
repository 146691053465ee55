"""
Service Communication Helper with Correlation ID
Use this for HTTP requests to the catalog and upload APIs
with proper correlation ID propagation
"""

from typing import Any, Dict, Optional

import httpx

from src.config import config
from src.utils.correlation_id import (
    create_headers_with_correlation_id,
)


class ServiceClient:
    """HTTP client for inter-service communication with correlation ID support"""

    def __init__(self, base_url: str, timeout: Optional[float] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else config.http_timeout

    def _get_headers(
        self, additional_headers: Optional[Dict[str, str]] = None
    ) -> Dict[str, str]:
        """Create headers with correlation ID"""
        return create_headers_with_correlation_id(additional_headers)

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}{endpoint}"

    async def get(
        self, endpoint: str, headers: Optional[Dict[str, str]] = None, **kwargs
    ) -> httpx.Response:
        """Make a GET request with correlation ID"""
        request_headers = self._get_headers(headers)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(self._url(endpoint), headers=request_headers, **kwargs)

    async def post(
        self,
        endpoint: str,
        data: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ) -> httpx.Response:
        """
        Make a POST request with correlation ID.

        ``data`` is sent as JSON; pass ``files=`` instead for multipart uploads.
        """
        request_headers = self._get_headers(headers)
        if data is not None:
            kwargs["json"] = data

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self._url(endpoint), headers=request_headers, **kwargs)

    async def put(
        self,
        endpoint: str,
        data: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ) -> httpx.Response:
        """Make a PUT request with correlation ID"""
        request_headers = self._get_headers(headers)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.put(
                self._url(endpoint), json=data, headers=request_headers, **kwargs
            )

    async def delete(
        self, endpoint: str, headers: Optional[Dict[str, str]] = None, **kwargs
    ) -> httpx.Response:
        """Make a DELETE request with correlation ID"""
        request_headers = self._get_headers(headers)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.delete(self._url(endpoint), headers=request_headers, **kwargs)


# Pre-configured service clients
catalog_service_client = ServiceClient(config.catalog_api_url)
upload_service_client = ServiceClient(config.upload_api_url)

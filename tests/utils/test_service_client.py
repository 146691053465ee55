"""Tests for the service client and correlation id helpers"""
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from src.config import config
from src.utils.correlation_id import (
    CORRELATION_ID_HEADER,
    extract_correlation_id_from_headers,
    set_correlation_id,
)
from src.utils.service_client import ServiceClient


class TestCorrelationId:
    """Test correlation id helpers"""

    def test_extract_is_case_insensitive(self):
        assert extract_correlation_id_from_headers({"x-correlation-id": "abc"}) == "abc"

    def test_extract_generates_when_missing(self):
        assert extract_correlation_id_from_headers({})

    def test_header_name_comes_from_config(self):
        assert CORRELATION_ID_HEADER == config.correlation_id_header


class TestServiceClient:
    """Test ServiceClient class"""

    def test_headers_carry_correlation_id(self):
        set_correlation_id("req-42")
        client = ServiceClient("http://catalog.test/")
        headers = client._get_headers({"Accept": "application/json"})
        assert headers[CORRELATION_ID_HEADER] == "req-42"
        assert headers["Accept"] == "application/json"
        assert client.base_url == "http://catalog.test"

    @pytest.mark.asyncio
    async def test_post_sends_json(self):
        http = MagicMock()
        http.post = AsyncMock(return_value="response")
        http.__aenter__ = AsyncMock(return_value=http)
        http.__aexit__ = AsyncMock(return_value=False)

        with patch("src.utils.service_client.httpx.AsyncClient", return_value=http) as client_cls:
            client = ServiceClient("http://catalog.test", timeout=3.0)
            result = await client.post("/api/products/p1/variants", data={"name": "Red"})

        assert result == "response"
        client_cls.assert_called_once_with(timeout=3.0)
        args, kwargs = http.post.await_args
        assert args[0] == "http://catalog.test/api/products/p1/variants"
        assert kwargs["json"] == {"name": "Red"}

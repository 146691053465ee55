"""
Unit tests for the HTTP persistence gateway and asset store
"""

import httpx
import pytest
from unittest.mock import AsyncMock, patch

from src.core.errors import GatewayError
from src.models.variant import DifferentiatorSummary
from src.repositories.gateway import ImageUpload
from src.repositories.http_gateway import HttpAssetStore, HttpPersistenceGateway, unwrap


def response(status_code=200, json=None, method="GET", url="http://catalog.test/api"):
    """httpx response bound to a request so raise_for_status works"""
    return httpx.Response(status_code, json=json, request=httpx.Request(method, url))


@pytest.fixture
def mock_client():
    """Mock ServiceClient"""
    return AsyncMock()


@pytest.fixture
def gateway(mock_client):
    return HttpPersistenceGateway(mock_client)


@pytest.fixture
def asset_store(mock_client):
    return HttpAssetStore(mock_client, folder="images/variants")


def wire_variant(sku, name="T-Shirt Red"):
    return {
        "sku": sku,
        "name": name,
        "price": 19.99,
        "costPrice": 9.5,
        "images": [],
        "attributeGroups": [
            {"id": "g1", "name": "General", "attributes": [
                {"id": "c1", "fieldType": "TEXT", "label": "Color", "value": "Red", "isDifferentiator": True},
            ]},
        ],
    }


class TestUnwrap:
    """Test unwrap helper"""

    def test_nested_data(self):
        assert unwrap({"data": {"variant": 1}}, "variant") == 1

    def test_top_level(self):
        assert unwrap({"variant": 2}, "variant") == 2

    def test_bare(self):
        assert unwrap([1, 2], "variants") == [1, 2]


class TestHttpPersistenceGateway:
    """Test HttpPersistenceGateway class"""

    @pytest.mark.asyncio
    async def test_create_variant_from_product_response(self, gateway, mock_client, red_variant):
        unsaved = red_variant.model_copy(deep=True, update={"sku": None})
        mock_client.post.return_value = response(
            201,
            json={"data": {"product": {"variants": [wire_variant("TS-BLUE", "Blue"), wire_variant("TS-NEW")]}}},
            method="POST",
        )

        saved = await gateway.create_variant("prod-1", unsaved)

        assert saved.sku == "TS-NEW"
        assert saved.key == unsaved.key
        endpoint = mock_client.post.await_args.args[0]
        assert endpoint == "/api/products/prod-1/variants"
        sent = mock_client.post.await_args.kwargs["data"]
        assert "sku" not in sent
        assert sent["attributeGroups"][0]["attributes"][0]["fieldType"] == "text"

    @pytest.mark.asyncio
    async def test_create_variant_from_variant_response(self, gateway, mock_client, red_variant):
        mock_client.post.return_value = response(201, json={"variant": wire_variant("TS-9")}, method="POST")
        saved = await gateway.create_variant("prod-1", red_variant)
        assert saved.sku == "TS-9"
        assert saved.attribute_groups[0].attributes[0].field_type.value == "text"

    @pytest.mark.asyncio
    async def test_create_variant_without_sku(self, gateway, mock_client, red_variant):
        mock_client.post.return_value = response(201, json={"data": {"product": {"variants": []}}}, method="POST")
        with pytest.raises(GatewayError):
            await gateway.create_variant("prod-1", red_variant)

    @pytest.mark.asyncio
    async def test_update_variant(self, gateway, mock_client, red_variant):
        mock_client.put.return_value = response(200, json={"data": {"variant": wire_variant("TS-RED")}}, method="PUT")

        saved = await gateway.update_variant("prod-1", "TS-RED", red_variant)

        assert saved.sku == "TS-RED"
        assert mock_client.put.await_args.args[0] == "/api/products/prod-1/variants/TS-RED"

    @pytest.mark.asyncio
    async def test_update_variant_empty_body(self, gateway, mock_client, red_variant):
        mock_client.put.return_value = httpx.Response(204, request=httpx.Request("PUT", "http://catalog.test"))
        saved = await gateway.update_variant("prod-1", "TS-RED", red_variant)
        assert saved.sku == "TS-RED"
        assert saved is not red_variant

    @pytest.mark.asyncio
    async def test_http_error_becomes_gateway_error(self, gateway, mock_client):
        mock_client.delete.return_value = response(404, json={"error": "not found"}, method="DELETE")

        with pytest.raises(GatewayError) as exc_info:
            await gateway.delete_variant("prod-1", "TS-RED")
        assert exc_info.value.status_code == 502
        assert exc_info.value.details["status_code"] == 404

    @pytest.mark.asyncio
    async def test_transport_error_becomes_gateway_error(self, gateway, mock_client):
        mock_client.get.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(GatewayError) as exc_info:
            await gateway.list_variants("prod-1")
        assert "connection refused" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_list_variants(self, gateway, mock_client):
        mock_client.get.return_value = response(
            json={"data": {"variants": [wire_variant("A"), wire_variant("B")]}}
        )
        variants = await gateway.list_variants("prod-1")
        assert [v.sku for v in variants] == ["A", "B"]

    @pytest.mark.asyncio
    async def test_list_variants_invalid_payload(self, gateway, mock_client):
        mock_client.get.return_value = response(json={"data": {"variants": "oops"}})
        with pytest.raises(GatewayError):
            await gateway.list_variants("prod-1")

    @pytest.mark.asyncio
    async def test_list_variants_skips_invalid_records(self, gateway, mock_client):
        """A stored variant with an off-catalog unit does not block the others"""
        bad = wire_variant("BAD")
        bad["attributeGroups"][0]["attributes"].append(
            {"id": "w1", "fieldType": "weight", "label": "Weight", "value": {"value": 1, "unit": "stone"}}
        )
        mock_client.get.return_value = response(
            json={"data": {"variants": [wire_variant("A"), bad, {"price": -1}]}}
        )

        with patch("src.repositories.http_gateway.logger") as mock_logger:
            variants = await gateway.list_variants("prod-1")

        assert [v.sku for v in variants] == ["A"]
        assert mock_logger.warning.call_count == 2
        assert mock_logger.warning.call_args_list[0].kwargs["metadata"]["sku"] == "BAD"

    @pytest.mark.asyncio
    async def test_update_differentiators(self, gateway, mock_client):
        mock_client.put.return_value = response(200, json={}, method="PUT")
        summary = DifferentiatorSummary(attributes=["c1"], values={"c1": ["Red", "Blue"]})

        await gateway.update_differentiators("prod-1", summary)

        mock_client.put.assert_awaited_once_with(
            "/api/products/prod-1",
            data={"differentiators": {"attributes": ["c1"], "values": {"c1": ["Red", "Blue"]}}},
        )


class TestHttpAssetStore:
    """Test HttpAssetStore class"""

    @pytest.mark.asyncio
    async def test_upload(self, asset_store, mock_client):
        mock_client.post.return_value = response(
            json={"success": True, "data": [
                {"url": "https://cdn.example.com/a.jpg", "key": "images/variants/a.jpg",
                 "filename": "a.jpg", "size": 4, "mimetype": "image/jpeg"},
            ]},
            method="POST",
        )

        uploaded = await asset_store.upload([ImageUpload(filename="a.jpg", content=b"data", content_type="image/jpeg")])

        assert [image.url for image in uploaded] == ["https://cdn.example.com/a.jpg"]
        call = mock_client.post.await_args
        assert call.args[0] == "/api/upload/multiple"
        assert call.kwargs["params"] == {"folder": "images/variants"}
        assert call.kwargs["files"] == [("images", ("a.jpg", b"data", "image/jpeg"))]

    @pytest.mark.asyncio
    async def test_upload_nothing(self, asset_store, mock_client):
        assert await asset_store.upload([]) == []
        mock_client.post.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_upload_invalid_body(self, asset_store, mock_client):
        mock_client.post.return_value = response(json={"data": "oops"}, method="POST")
        with pytest.raises(GatewayError):
            await asset_store.upload([ImageUpload(filename="a.jpg", content=b"x")])

    @pytest.mark.asyncio
    async def test_delete(self, asset_store, mock_client):
        mock_client.delete.return_value = response(200, json={}, method="DELETE")
        await asset_store.delete("images/variants/a.jpg")
        assert mock_client.delete.await_args.args[0] == "/api/upload/images/variants/a.jpg"

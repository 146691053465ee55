"""Shared test fixtures"""
import pytest
from unittest.mock import AsyncMock

from src.models.variant import AttributeGroup, AttributeInstance, Variant
from src.repositories.gateway import AssetStore, PersistenceGateway
from src.utils.id_generator import IdGenerator


@pytest.fixture
def id_generator():
    """Id generator with a frozen clock; the monotonic stamp still advances"""
    return IdGenerator(clock=lambda: 1_700_000_000_000_000_000)


@pytest.fixture
def make_variant():
    """Factory for variants with one attribute group"""
    def _make(sku=None, name="T-Shirt", attributes=None, images=None, **fields):
        group = AttributeGroup(
            id="g1",
            name="General",
            attributes=[
                AttributeInstance(
                    id=attribute_id,
                    field_type=field_type,
                    label=attribute_id,
                    value=value,
                )
                for attribute_id, field_type, value in (attributes or [])
            ],
        )
        return Variant(
            sku=sku,
            name=name,
            price=fields.pop("price", 19.99),
            cost_price=fields.pop("cost_price", 9.5),
            images=images or [],
            attribute_groups=[group],
            **fields,
        )
    return _make


@pytest.fixture
def red_variant(make_variant):
    """Saved variant with a text color attribute"""
    return make_variant(sku="TS-RED", name="T-Shirt Red", attributes=[("c1", "text", "Red")])


@pytest.fixture
def blue_variant(make_variant):
    """Saved variant with a text color attribute"""
    return make_variant(sku="TS-BLUE", name="T-Shirt Blue", attributes=[("c1", "text", "Blue")])


@pytest.fixture
def mock_gateway():
    """Mock persistence gateway"""
    return AsyncMock(spec=PersistenceGateway)


@pytest.fixture
def mock_asset_store():
    """Mock asset store"""
    return AsyncMock(spec=AssetStore)

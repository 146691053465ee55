"""
Persistence boundary for variants and their images.

The workspace only talks to these interfaces; the HTTP implementations live
in ``src.repositories.http_gateway`` and tests substitute AsyncMocks.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.models.variant import DifferentiatorSummary, Variant


class ImageUpload(BaseModel):
    """A file selected for upload to the asset store"""
    filename: str
    content: bytes
    content_type: str = Field("application/octet-stream", alias="contentType")

    model_config = ConfigDict(populate_by_name=True)


class UploadedImage(BaseModel):
    """Asset store record of a stored image"""
    url: str
    key: Optional[str] = None
    filename: Optional[str] = None
    size: Optional[int] = None
    mimetype: Optional[str] = None


class PersistenceGateway(ABC):
    """Stores variants for a product and assigns their SKUs."""

    @abstractmethod
    async def create_variant(self, product_id: str, variant: Variant) -> Variant:
        """Persist an unsaved variant; the returned copy carries its SKU"""

    @abstractmethod
    async def update_variant(self, product_id: str, sku: str, variant: Variant) -> Variant:
        """Replace a saved variant"""

    @abstractmethod
    async def delete_variant(self, product_id: str, sku: str) -> None:
        """Remove a saved variant"""

    @abstractmethod
    async def list_variants(self, product_id: str) -> List[Variant]:
        """Current persisted variants of a product"""

    @abstractmethod
    async def update_differentiators(self, product_id: str, summary: DifferentiatorSummary) -> None:
        """Store the product-level differentiator summary"""


class AssetStore(ABC):
    """Stores variant images and hands back their public URLs."""

    @abstractmethod
    async def upload(self, files: List[ImageUpload], folder: Optional[str] = None) -> List[UploadedImage]:
        """Upload a batch of images"""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete a stored image by key"""

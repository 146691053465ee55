"""
HTTP implementations of the persistence gateway and the asset store.

Both talk to the catalog REST API through ``ServiceClient`` so the
correlation id of the current request is forwarded. Any transport failure or
non-2xx response surfaces as ``GatewayError``.
"""

from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from src.config import config
from src.core.errors import GatewayError
from src.core.logger import logger
from src.models.variant import DifferentiatorSummary, Variant
from src.repositories.gateway import (
    AssetStore,
    ImageUpload,
    PersistenceGateway,
    UploadedImage,
)
from src.utils.service_client import (
    ServiceClient,
    catalog_service_client,
    upload_service_client,
)


def unwrap(payload: Any, key: str) -> Any:
    """Pick ``key`` out of ``{data: {key}}``, ``{key}`` or the bare payload"""
    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, dict) and key in data:
            return data[key]
        if key in payload:
            return payload[key]
        if data is not None:
            return data
    return payload


class _HttpRepository:
    """Shared request/response handling"""

    target = "catalog"

    def __init__(self, client: ServiceClient):
        self.client = client

    async def _request(self, method: str, endpoint: str, **kwargs) -> Any:
        try:
            response = await getattr(self.client, method)(endpoint, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(
                f"{self.target} API returned {status}",
                metadata={"endpoint": endpoint, "method": method.upper(), "status_code": status},
            )
            raise GatewayError(
                f"{self.target.capitalize()} API request failed with status {status}",
                details={"endpoint": endpoint, "status_code": status},
            ) from e
        except httpx.HTTPError as e:
            logger.error(
                f"{self.target} API unreachable",
                error=e,
                metadata={"endpoint": endpoint, "method": method.upper()},
            )
            raise GatewayError(
                f"{self.target.capitalize()} API request failed: {str(e)}",
                details={"endpoint": endpoint},
            ) from e

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise GatewayError(
                f"{self.target.capitalize()} API returned an invalid body",
                details={"endpoint": endpoint},
            ) from e


class HttpPersistenceGateway(_HttpRepository, PersistenceGateway):
    """Variants stored through ``/api/products/{id}/variants``"""

    def __init__(self, client: Optional[ServiceClient] = None):
        super().__init__(client or catalog_service_client)

    @staticmethod
    def _variants_path(product_id: str, sku: Optional[str] = None) -> str:
        path = f"/api/products/{product_id}/variants"
        return f"{path}/{sku}" if sku else path

    @staticmethod
    def _to_variant(data: Any, endpoint: str) -> Variant:
        try:
            return Variant.model_validate(data)
        except ValidationError as e:
            raise GatewayError(
                "Catalog API returned an invalid variant",
                details={"endpoint": endpoint, "errors": e.errors(include_url=False)},
            ) from e

    async def create_variant(self, product_id: str, variant: Variant) -> Variant:
        endpoint = self._variants_path(product_id)
        payload = await self._request("post", endpoint, data=variant.to_wire())

        created = unwrap(payload, "variant")
        if not isinstance(created, dict) or "sku" not in created:
            # The catalog answers with the whole product; the new variant is last
            variants = unwrap(unwrap(payload, "product"), "variants")
            created = variants[-1] if isinstance(variants, list) and variants else None

        if not isinstance(created, dict) or not created.get("sku"):
            raise GatewayError(
                "Catalog API did not return a SKU for the new variant",
                details={"endpoint": endpoint},
            )

        saved = self._to_variant(created, endpoint)
        saved.key = variant.key
        logger.info(
            f"Variant created: {saved.sku}",
            metadata={"product_id": product_id, "sku": saved.sku},
        )
        return saved

    async def update_variant(self, product_id: str, sku: str, variant: Variant) -> Variant:
        endpoint = self._variants_path(product_id, sku)
        payload = await self._request("put", endpoint, data=variant.to_wire())

        updated = unwrap(payload, "variant")
        if isinstance(updated, dict) and updated.get("sku"):
            saved = self._to_variant(updated, endpoint)
        else:
            saved = variant.model_copy(deep=True, update={"sku": sku})
        saved.key = variant.key

        logger.info(
            f"Variant updated: {sku}",
            metadata={"product_id": product_id, "sku": sku},
        )
        return saved

    async def delete_variant(self, product_id: str, sku: str) -> None:
        await self._request("delete", self._variants_path(product_id, sku))
        logger.info(
            f"Variant deleted: {sku}",
            metadata={"product_id": product_id, "sku": sku},
        )

    async def list_variants(self, product_id: str) -> List[Variant]:
        endpoint = self._variants_path(product_id)
        payload = await self._request("get", endpoint)
        variants = unwrap(payload, "variants")
        if not isinstance(variants, list):
            raise GatewayError(
                "Catalog API returned an invalid variant list",
                details={"endpoint": endpoint},
            )
        loaded = []
        for position, item in enumerate(variants):
            try:
                loaded.append(Variant.model_validate(item))
            except ValidationError as e:
                sku = item.get("sku") if isinstance(item, dict) else None
                logger.warning(
                    "Skipping invalid stored variant",
                    metadata={
                        "product_id": product_id,
                        "position": position,
                        "sku": sku,
                        "errors": e.errors(include_url=False),
                    },
                )
        return loaded

    async def update_differentiators(self, product_id: str, summary: DifferentiatorSummary) -> None:
        await self._request(
            "put",
            f"/api/products/{product_id}",
            data={"differentiators": summary.model_dump()},
        )
        logger.debug(
            "Differentiators stored",
            metadata={"product_id": product_id, "attributes": summary.attributes},
        )


class HttpAssetStore(_HttpRepository, AssetStore):
    """Images stored through ``/api/upload``"""

    target = "upload"

    def __init__(self, client: Optional[ServiceClient] = None, folder: Optional[str] = None):
        super().__init__(client or upload_service_client)
        self.folder = folder or config.upload_folder

    async def upload(self, files: List[ImageUpload], folder: Optional[str] = None) -> List[UploadedImage]:
        if not files:
            return []

        multipart = [
            ("images", (image.filename, image.content, image.content_type))
            for image in files
        ]
        payload = await self._request(
            "post",
            "/api/upload/multiple",
            files=multipart,
            params={"folder": folder or self.folder},
        )

        records = unwrap(payload, "images")
        if isinstance(records, dict):
            records = [records]
        if not isinstance(records, list):
            raise GatewayError("Upload API returned an invalid body")

        try:
            uploaded = [UploadedImage.model_validate(record) for record in records]
        except ValidationError as e:
            raise GatewayError(
                "Upload API returned an invalid image record",
                details={"errors": e.errors(include_url=False)},
            ) from e

        logger.info(
            f"Uploaded {len(uploaded)} images",
            metadata={"count": len(uploaded), "folder": folder or self.folder},
        )
        return uploaded

    async def delete(self, key: str) -> None:
        await self._request("delete", f"/api/upload/{key}")

"""
Variant Workspace

Holds the variants of one product while they are being edited and
coordinates the asynchronous boundary: saving and deleting through the
persistence gateway and uploading images through the asset store.

All mutation is synchronous; only gateway calls await. A variant is marked
as processing before the first await and unmarked when its operation ends,
so a second operation on the same variant is rejected instead of queued.
"""

from typing import Dict, Iterable, List, Optional, Set

from src.core.errors import (
    ConfirmationRequiredError,
    GatewayError,
    ImageCapacityError,
    InvalidReferenceError,
    UnsavedVariantPendingError,
    VariantBusyError,
)
from src.core.logger import logger
from src.models.variant import (
    MAX_IMAGES_PER_VARIANT,
    DifferentiatorSummary,
    Variant,
    VariantOperationResult,
    VariantPatch,
    VariantSummary,
)
from src.repositories.gateway import (
    AssetStore,
    ImageUpload,
    PersistenceGateway,
    UploadedImage,
)
from src.services.attribute_group_engine import AttributeGroupEngine
from src.services.differentiator_service import calculate_differentiators
from src.services.duplicate_detector import is_duplicate as is_duplicate_of
from src.services.variant_service import VariantService
from src.utils.id_generator import IdGenerator, default_id_generator
from src.utils.ordering import check_index


class VariantWorkspace:
    """
    Editing session over the variants of one product.

    Args:
        product_id: Product the variants belong to
        gateway: Persistence gateway for variants and the differentiator summary
        asset_store: Image store used by ``upload_images``
        variants: Variants loaded for the product
        id_generator: Source of group/attribute ids and local variant keys
    """

    def __init__(
        self,
        product_id: str,
        gateway: PersistenceGateway,
        asset_store: Optional[AssetStore] = None,
        variants: Optional[Iterable[Variant]] = None,
        id_generator: Optional[IdGenerator] = None,
    ):
        self.product_id = product_id
        self.gateway = gateway
        self.asset_store = asset_store
        self.id_generator = id_generator or default_id_generator
        self.variant_service = VariantService(self.id_generator)

        self.variants: List[Variant] = list(variants or [])
        self._snapshots: Dict[str, Variant] = {
            variant.key: variant.model_copy(deep=True) for variant in self.variants
        }
        self._processing: Set[str] = set()
        self.summary = DifferentiatorSummary()
        self.differentiators()

    @classmethod
    async def load(
        cls,
        product_id: str,
        gateway: PersistenceGateway,
        asset_store: Optional[AssetStore] = None,
        id_generator: Optional[IdGenerator] = None,
    ) -> "VariantWorkspace":
        """Workspace seeded with the product's persisted variants"""
        variants = await gateway.list_variants(product_id)
        logger.info(
            f"Loaded {len(variants)} variants",
            metadata={"product_id": product_id, "variant_count": len(variants)},
        )
        return cls(product_id, gateway, asset_store, variants, id_generator)

    # ===== State =====

    @property
    def has_unsaved_variant(self) -> bool:
        return any(not variant.is_saved for variant in self.variants)

    @property
    def is_busy(self) -> bool:
        return bool(self._processing)

    def is_processing(self, index: int) -> bool:
        return self.get_variant(index).key in self._processing

    def get_variant(self, index: int) -> Variant:
        check_index(self.variants, index, what="variant")
        return self.variants[index]

    def index_of(self, key: str) -> int:
        return self.variant_service.find_index(self.variants, key)

    def _ensure_can_add(self) -> None:
        if self.has_unsaved_variant:
            raise UnsavedVariantPendingError()
        if self._processing:
            raise VariantBusyError()

    def _begin(self, variant: Variant) -> None:
        if variant.key in self._processing:
            raise VariantBusyError(details={"variant": variant.sku or variant.key})
        self._processing.add(variant.key)

    def _end(self, variant: Variant) -> None:
        self._processing.discard(variant.key)

    # ===== Local edits =====

    def add_new_variant(self) -> int:
        """Append an empty, unsaved variant and return its index"""
        self._ensure_can_add()
        variant = self.variant_service.create_empty()
        self.variants.append(variant)
        self._snapshots[variant.key] = variant.model_copy(deep=True)
        return len(self.variants) - 1

    def clone_variant(self, index: int) -> int:
        """Append an unsaved copy of the variant at ``index``"""
        self._ensure_can_add()
        cloned = self.variant_service.clone(self.get_variant(index))
        self.variants.append(cloned)
        self._snapshots[cloned.key] = cloned.model_copy(deep=True)

        logger.info(
            "Variant cloned successfully",
            metadata={"product_id": self.product_id, "source_index": index},
        )
        return len(self.variants) - 1

    def engine_for(self, index: int) -> AttributeGroupEngine:
        """Group engine bound to one variant and this product's attribute ids"""
        variant = self.get_variant(index)
        reserved = {
            attribute_id
            for other in self.variants
            for attribute_id in other.attribute_ids()
        }
        return AttributeGroupEngine(
            variant,
            id_generator=self.id_generator,
            reserved_ids=reserved,
            differentiators=self.summary,
        )

    def edit_variant(self, index: int, patch: VariantPatch) -> Variant:
        variant = self.get_variant(index)
        updated = self.variant_service.apply_edits(variant, patch)
        return self._assign(variant, updated)

    def cancel_edits(self, index: int) -> Variant:
        """Revert a variant to its last committed state"""
        variant = self.get_variant(index)
        snapshot = self._snapshots.get(variant.key)
        if snapshot is None:
            raise InvalidReferenceError(
                f"No committed state for variant {variant.sku or variant.key}",
                details={"index": index},
            )
        return self._assign(variant, snapshot.model_copy(deep=True))

    def commit_local(self, index: int) -> Variant:
        """Make the current state the one ``cancel_edits`` reverts to"""
        variant = self.get_variant(index)
        self._snapshots[variant.key] = variant.model_copy(deep=True)
        return variant

    # ===== Derived views =====

    def differentiators(self) -> DifferentiatorSummary:
        """Recompute the summary; engines keep seeing the same object"""
        computed = calculate_differentiators(self.variants)
        self.summary.attributes = computed.attributes
        self.summary.values = computed.values
        return self.summary

    def is_duplicate(self, index: int) -> bool:
        return is_duplicate_of(self.get_variant(index), index, self.variants)

    def summaries(self) -> List[VariantSummary]:
        return [self.variant_service.summarize(variant) for variant in self.variants]

    # ===== Persistence =====

    async def save_variant(self, index: int) -> VariantOperationResult:
        """
        Create or update the variant at ``index`` through the gateway.

        Raises:
            VariantBusyError: If the variant already has an operation in flight
        """
        variant = self.get_variant(index)
        self._begin(variant)
        was_saved = variant.is_saved

        try:
            payload = variant.model_copy(deep=True)
            if was_saved:
                saved = await self.gateway.update_variant(self.product_id, variant.sku, payload)
            else:
                saved = await self.gateway.create_variant(self.product_id, payload)
        except GatewayError as e:
            logger.error(
                "Failed to save variant",
                error=e,
                metadata={"product_id": self.product_id, "variant": variant.sku or variant.key},
            )
            return VariantOperationResult(
                success=False,
                message="Failed to save variant",
                variant_index=self._current_index(variant.key),
                sku=variant.sku,
            )
        finally:
            self._end(variant)

        position = self.index_of(variant.key)
        live = self.variants[position]
        self._snapshots[live.key] = saved.model_copy(deep=True, update={"key": live.key})
        if live.model_dump(exclude={"sku"}) == payload.model_dump(exclude={"sku"}):
            self._assign(live, saved)
        else:
            # Edited while the save was in flight; keep the newer local state
            live.sku = saved.sku

        message = "Variant updated successfully" if was_saved else "Variant added successfully"
        logger.info(
            message,
            metadata={"product_id": self.product_id, "sku": saved.sku},
        )
        await self._push_differentiators()

        return VariantOperationResult(
            success=True,
            message=message,
            variant_index=position,
            sku=saved.sku,
        )

    async def delete_variant(self, index: int, confirmed: bool = False) -> VariantOperationResult:
        """
        Remove a variant.

        Unsaved variants are dropped locally. Saved ones are deleted through the
        gateway and need ``confirmed=True``.

        Raises:
            VariantBusyError: If the variant already has an operation in flight
            ConfirmationRequiredError: If a saved variant is deleted unconfirmed
        """
        variant = self.get_variant(index)
        if variant.key in self._processing:
            raise VariantBusyError(details={"variant": variant.sku or variant.key})

        if not variant.is_saved:
            self._forget(variant.key)
            self.differentiators()
            return VariantOperationResult(success=True, message="Variant removed", variant_index=index)

        if not confirmed:
            raise ConfirmationRequiredError(
                f"Delete variant {variant.sku}? This cannot be undone",
                details={"sku": variant.sku},
            )

        self._begin(variant)
        try:
            await self.gateway.delete_variant(self.product_id, variant.sku)
        except GatewayError as e:
            logger.error(
                "Failed to delete variant",
                error=e,
                metadata={"product_id": self.product_id, "sku": variant.sku},
            )
            return VariantOperationResult(
                success=False,
                message="Failed to delete variant",
                variant_index=self._current_index(variant.key),
                sku=variant.sku,
            )
        finally:
            self._end(variant)

        self._forget(variant.key)
        logger.info(
            "Variant deleted successfully",
            metadata={"product_id": self.product_id, "sku": variant.sku},
        )
        await self._push_differentiators()

        return VariantOperationResult(success=True, message="Variant deleted successfully", sku=variant.sku)

    async def upload_images(self, index: int, files: List[ImageUpload]) -> VariantOperationResult:
        """
        Upload images and append their URLs to the variant.

        Raises:
            ImageCapacityError: If the batch would exceed the image limit
            VariantBusyError: If the variant already has an operation in flight
        """
        if self.asset_store is None:
            raise InvalidReferenceError("No asset store configured for image uploads")

        variant = self.get_variant(index)
        if len(files) > self.variant_service.remaining_image_slots(variant):
            raise ImageCapacityError(len(variant.images), len(files), MAX_IMAGES_PER_VARIANT)
        self._begin(variant)

        try:
            uploaded = await self.asset_store.upload(files)
        except GatewayError as e:
            logger.error(
                "Failed to upload images",
                error=e,
                metadata={"product_id": self.product_id, "count": len(files)},
            )
            return VariantOperationResult(
                success=False,
                message="Failed to upload images",
                variant_index=self._current_index(variant.key),
                sku=variant.sku,
            )
        finally:
            self._end(variant)

        position = self.index_of(variant.key)
        target = self.variants[position]
        try:
            self.variant_service.add_images(target, [image.url for image in uploaded])
        except ImageCapacityError as e:
            # Images were added while the upload was in flight
            logger.error(
                "Uploaded images no longer fit the variant",
                error=e,
                metadata={"product_id": self.product_id, "count": len(uploaded)},
            )
            await self._discard_uploads(uploaded)
            return VariantOperationResult(
                success=False,
                message=e.message,
                variant_index=position,
                sku=target.sku,
            )

        return VariantOperationResult(
            success=True,
            message=f"{len(uploaded)} images uploaded successfully",
            variant_index=position,
            sku=target.sku,
        )

    async def _push_differentiators(self) -> None:
        summary = self.differentiators()
        try:
            await self.gateway.update_differentiators(self.product_id, summary.model_copy(deep=True))
        except GatewayError as e:
            logger.error(
                "Failed to store differentiators",
                error=e,
                metadata={"product_id": self.product_id},
            )

    async def _discard_uploads(self, uploaded: List[UploadedImage]) -> None:
        for image in uploaded:
            if not image.key:
                continue
            try:
                await self.asset_store.delete(image.key)
            except GatewayError as e:
                logger.error(
                    "Failed to delete uploaded image",
                    error=e,
                    metadata={"product_id": self.product_id, "key": image.key},
                )

    @staticmethod
    def _assign(target: Variant, source: Variant) -> Variant:
        """Copy ``source`` onto the live ``target`` so open engines keep editing it"""
        for field_name in Variant.model_fields:
            if field_name != "key":
                setattr(target, field_name, getattr(source, field_name))
        return target

    def _current_index(self, key: str) -> Optional[int]:
        for position, variant in enumerate(self.variants):
            if variant.key == key:
                return position
        return None

    def _forget(self, key: str) -> None:
        self.variants = [variant for variant in self.variants if variant.key != key]
        self._snapshots.pop(key, None)

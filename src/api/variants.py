"""
Variant API Endpoints

Stateless computations over the variants of one product: differentiator
summary, duplicate check, clone and card summary. Persistence stays with the
catalog API.
"""

from fastapi import APIRouter, Depends

from src.core.errors import ErrorResponseModel
from src.core.logger import logger
from src.models.variant import (
    DifferentiatorRequest,
    DifferentiatorSummary,
    DuplicateCheckRequest,
    DuplicateCheckResponse,
    Variant,
    VariantSummary,
)
from src.services.differentiator_service import calculate_differentiators
from src.services.duplicate_detector import find_duplicates
from src.services.variant_service import VariantService

router = APIRouter(prefix="/api/variants", tags=["variants"])


def get_variant_service() -> VariantService:
    """Get variant service instance."""
    return VariantService()


@router.post("/differentiators", response_model=DifferentiatorSummary)
async def differentiators(request: DifferentiatorRequest):
    """
    Attribute ids whose values differ across the given variants.

    Unset values (empty, zero, false) are ignored; values are compared by
    their display string.
    """
    return calculate_differentiators(request.variants)


@router.post(
    "/duplicate-check",
    response_model=DuplicateCheckResponse,
    response_model_by_alias=True,
)
async def duplicate_check(request: DuplicateCheckRequest):
    """Siblings identical to the candidate variant (advisory)."""
    matches = find_duplicates(request.candidate, request.candidate_index, request.variants)
    if matches:
        logger.info(
            "Duplicate variant detected",
            metadata={"candidate_index": request.candidate_index, "duplicates": matches},
        )
    return DuplicateCheckResponse(is_duplicate=bool(matches), duplicate_indexes=matches)


@router.post(
    "/clone",
    responses={422: {"model": ErrorResponseModel}},
)
async def clone_variant(
    variant: Variant,
    service: VariantService = Depends(get_variant_service),
):
    """Unsaved copy of a variant: no SKU and the name suffixed with (Copy)."""
    return service.clone(variant).to_wire()


@router.post(
    "/summary",
    response_model=VariantSummary,
    response_model_by_alias=True,
)
async def summarize_variant(
    variant: Variant,
    service: VariantService = Depends(get_variant_service),
):
    return service.summarize(variant)

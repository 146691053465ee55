"""
Attribute Value API Endpoints

Formatting and default values for single attribute values.
"""

from fastapi import APIRouter

from src.core.errors import ErrorResponse, ErrorResponseModel
from src.models.variant import (
    DefaultValueRequest,
    DefaultValueResponse,
    FormatValueRequest,
    FormatValueResponse,
)
from src.services import attribute_value_service
from src.services.field_type_registry import label_of

router = APIRouter(prefix="/api/attributes", tags=["attributes"])


@router.post(
    "/format",
    response_model=FormatValueResponse,
    responses={400: {"model": ErrorResponseModel}},
)
async def format_value(request: FormatValueRequest):
    """
    Display string of an attribute value.

    When `fieldType` is given the value is checked against it first.
    """
    value = request.value
    if request.field_type is not None:
        try:
            value = attribute_value_service.coerce(request.field_type, value)
        except ValueError as e:
            raise ErrorResponse(
                str(e),
                status_code=400,
                details={"field_type": request.field_type.value},
            ) from e

    return FormatValueResponse(formatted=attribute_value_service.format_for_display(value))


@router.post(
    "/default",
    response_model=DefaultValueResponse,
    response_model_by_alias=True,
    responses={400: {"model": ErrorResponseModel}},
)
async def default_value(request: DefaultValueRequest):
    """Initial value and label of a newly added attribute."""
    value = attribute_value_service.default_value_for(request.field_type)
    return DefaultValueResponse(
        field_type=request.field_type,
        label=label_of(request.field_type),
        value=attribute_value_service.to_plain(value),
    )

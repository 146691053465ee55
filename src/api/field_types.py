"""
Field Type API Endpoints

Read-only catalog of attribute field types and their unit catalogs, used by
the attribute form to build its inputs.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from src.core.errors import ErrorResponseModel
from src.models.field_types import FieldTypeDescriptor, UnitDefinition
from src.services import field_type_registry

router = APIRouter(prefix="/api/field-types", tags=["field-types"])


@router.get("", response_model=List[FieldTypeDescriptor], response_model_by_alias=True)
async def list_field_types():
    """All field types with their labels and default unit catalogs."""
    return field_type_registry.list_field_types()


@router.get("/sizes")
async def list_size_options():
    """Clothing size options offered by the size field."""
    return field_type_registry.size_options()


@router.get(
    "/{field_type}",
    response_model=FieldTypeDescriptor,
    response_model_by_alias=True,
    responses={400: {"model": ErrorResponseModel}},
)
async def get_field_type(field_type: str, unit_type: Optional[str] = Query(None, alias="unitType")):
    return field_type_registry.describe(field_type, unit_type)


@router.get(
    "/{field_type}/units",
    response_model=List[UnitDefinition],
    responses={400: {"model": ErrorResponseModel}},
)
async def list_units(field_type: str, unit_type: Optional[str] = Query(None, alias="unitType")):
    """
    Units offered for a field type.

    `unitType` selects the catalog of number/text with unit fields and is
    ignored by every other field type.
    """
    return list(field_type_registry.catalog_for(field_type, unit_type).values())

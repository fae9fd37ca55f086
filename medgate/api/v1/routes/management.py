"""Management API endpoints (reference data mutations and cache control)."""
from typing import Optional
from fastapi import APIRouter, Depends
from medgate import schemas
from medgate.api.deps import get_reference_cache, get_reference_data_service
from medgate.api.v1.routes.reference_data import upstream_error
from medgate.core.errors import TransportError
from medgate.core.security import verify_admin_key
from medgate.services.cache import ReferenceDataCache
from medgate.services.reference_data import ReferenceDataService

router = APIRouter()


@router.post("/static-data", response_model=schemas.ApiResponse)
async def create_reference_data_api(
    item: schemas.ReferenceDataCreate,
    service: ReferenceDataService = Depends(get_reference_data_service),
    verified: bool = Depends(verify_admin_key)
):
    """Create a reference-data item. Requires Admin API Key."""
    try:
        return await service.create(item)
    except TransportError as e:
        raise upstream_error(e)


@router.patch("/static-data/bulk-update-status", response_model=schemas.ApiResponse)
async def bulk_update_reference_data_status_api(
    update: schemas.BulkStatusUpdate,
    service: ReferenceDataService = Depends(get_reference_data_service),
    verified: bool = Depends(verify_admin_key)
):
    """Set the active flag on several reference-data items. Requires Admin API Key."""
    try:
        return await service.bulk_update_status(update)
    except TransportError as e:
        raise upstream_error(e)


@router.put("/static-data/{item_id}", response_model=schemas.ApiResponse)
async def update_reference_data_api(
    item_id: int,
    item: schemas.ReferenceDataUpdate,
    service: ReferenceDataService = Depends(get_reference_data_service),
    verified: bool = Depends(verify_admin_key)
):
    """Update a reference-data item. Requires Admin API Key."""
    try:
        return await service.update(item_id, item)
    except TransportError as e:
        raise upstream_error(e)


@router.patch("/static-data/{item_id}/toggle-status", response_model=schemas.ApiResponse)
async def toggle_reference_data_api(
    item_id: int,
    service: ReferenceDataService = Depends(get_reference_data_service),
    verified: bool = Depends(verify_admin_key)
):
    """Flip the active flag of a reference-data item. Requires Admin API Key."""
    try:
        return await service.toggle_status(item_id)
    except TransportError as e:
        raise upstream_error(e)


@router.delete("/static-data/{item_id}", response_model=schemas.ApiResponse)
async def delete_reference_data_api(
    item_id: int,
    service: ReferenceDataService = Depends(get_reference_data_service),
    verified: bool = Depends(verify_admin_key)
):
    """Delete a reference-data item. Requires Admin API Key."""
    try:
        return await service.delete(item_id)
    except TransportError as e:
        raise upstream_error(e)


@router.post("/cache/invalidate", response_model=schemas.CacheInvalidationResponse)
def invalidate_cache_api(
    type: Optional[str] = None,
    cache: ReferenceDataCache = Depends(get_reference_cache),
    verified: bool = Depends(verify_admin_key)
):
    """Drop one cached type, or the whole cache when no type is given. Requires Admin API Key."""
    cache.invalidate(type)
    return schemas.CacheInvalidationResponse(invalidated=type or "*", cached_keys=cache.keys())

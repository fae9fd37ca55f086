"""Public reference data endpoints, served through the cache."""
from typing import Dict, List
from fastapi import APIRouter, Depends, HTTPException
from medgate import schemas
from medgate.api.deps import get_reference_data_service
from medgate.core.errors import TransportError
from medgate.core.logging_config import logger
from medgate.services.reference_data import ReferenceDataService

router = APIRouter()


def upstream_error(exc: TransportError) -> HTTPException:
    """Maps an upstream failure onto the response we give our own caller."""
    status_code = exc.status_code if exc.status_code and exc.status_code >= 400 else 502
    logger.warning(f"Upstream failure surfaced as HTTP {status_code}: {exc.message}")
    return HTTPException(status_code=status_code, detail=exc.message)


@router.get("/static", response_model=Dict[str, List[schemas.ReferenceDataItem]])
async def all_reference_data(service: ReferenceDataService = Depends(get_reference_data_service)):
    """Every reference-data collection, grouped by type."""
    try:
        return await service.get_all()
    except TransportError as e:
        raise upstream_error(e)


@router.get("/static/types", response_model=List[str])
async def reference_data_types(service: ReferenceDataService = Depends(get_reference_data_service)):
    try:
        return await service.types()
    except TransportError as e:
        raise upstream_error(e)


@router.get("/static/{type_}", response_model=List[schemas.ReferenceDataItem])
async def reference_data_by_type(
    type_: str,
    service: ReferenceDataService = Depends(get_reference_data_service)
):
    """One reference-data collection (cached per type)."""
    try:
        return await service.by_type(type_)
    except TransportError as e:
        raise upstream_error(e)


@router.get("/static/{type_}/{code}", response_model=schemas.ReferenceDataItem)
async def reference_data_by_code(
    type_: str,
    code: str,
    service: ReferenceDataService = Depends(get_reference_data_service)
):
    try:
        return await service.by_code(type_, code)
    except TransportError as e:
        raise upstream_error(e)

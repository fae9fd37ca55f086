"""Pydantic schemas."""
from medgate.schemas.schemas import (
    Principal, ApiResponse,
    ReferenceDataItem, ReferenceDataCreate, ReferenceDataUpdate,
    ReferenceDataFilters, BulkStatusUpdate,
    GenerateReportRequest,
    ActionAccessRequest, RouteAccessRequest, EndpointAccessRequest,
    AccessResponse, RouteAccessResponse,
    CapabilitySet, MenuItem, CapabilitiesRequest, CapabilitiesResponse,
    CacheInvalidationResponse
)

__all__ = [
    "Principal", "ApiResponse",
    "ReferenceDataItem", "ReferenceDataCreate", "ReferenceDataUpdate",
    "ReferenceDataFilters", "BulkStatusUpdate",
    "GenerateReportRequest",
    "ActionAccessRequest", "RouteAccessRequest", "EndpointAccessRequest",
    "AccessResponse", "RouteAccessResponse",
    "CapabilitySet", "MenuItem", "CapabilitiesRequest", "CapabilitiesResponse",
    "CacheInvalidationResponse"
]

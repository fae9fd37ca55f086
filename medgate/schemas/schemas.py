"""Pydantic schemas for principals, reference data and request/response validation."""
from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any
from datetime import datetime

from medgate.core.permissions import Action, Category, RouteDecision, RouteTier


# --- Principal ---
class Principal(BaseModel):
    """The logged-in actor, as supplied by the identity provider."""
    id: int
    role: str
    active: bool = True


# --- Upstream envelope ---
class ApiResponse(BaseModel):
    success: bool
    data: Any = None
    message: str = ""


# --- Reference Data Schemas ---
class ReferenceDataItem(BaseModel):
    id: Optional[int] = None
    type: str
    code: str
    label_en: str
    label_ar: str
    description: Optional[str] = None
    is_active: bool = True
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def label(self, locale: str = "en") -> str:
        return self.label_ar if locale == "ar" else self.label_en


class ReferenceDataCreate(BaseModel):
    type: str
    code: str
    label_en: str
    label_ar: str
    description: Optional[str] = None
    is_active: bool = True
    metadata: Optional[Dict[str, Any]] = None


class ReferenceDataUpdate(BaseModel):
    type: Optional[str] = None  # without it the affected type is unknown
    code: Optional[str] = None
    label_en: Optional[str] = None
    label_ar: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None
    metadata: Optional[Dict[str, Any]] = None


class ReferenceDataFilters(BaseModel):
    type: Optional[List[str]] = None
    code: Optional[str] = None
    label: Optional[str] = None
    label_ar: Optional[str] = None
    is_active: Optional[bool] = None
    page: Optional[int] = None
    per_page: Optional[int] = None


class BulkStatusUpdate(BaseModel):
    ids: List[int]
    is_active: bool


# --- Reports ---
class GenerateReportRequest(BaseModel):
    report_type: str
    format: str = "pdf"
    filters: Dict[str, Any] = Field(default_factory=dict)


# --- Access Schemas (the evaluator's I/O) ---
class ActionAccessRequest(BaseModel):
    principal: Optional[Principal] = None
    category: Category
    action: Action


class RouteAccessRequest(BaseModel):
    principal: Optional[Principal] = None
    path: str


class EndpointAccessRequest(BaseModel):
    principal: Optional[Principal] = None
    method: str
    endpoint: str


class AccessResponse(BaseModel):
    decision: bool
    reason: str


class RouteAccessResponse(BaseModel):
    path: str
    tier: Optional[RouteTier] = None
    decision: RouteDecision
    reason: str


# --- Capability projection ---
class CapabilitySet(BaseModel):
    """Flat capability flags for UI gating."""
    is_admin: bool = False
    is_employee: bool = False

    can_view_users: bool = False
    can_create_users: bool = False
    can_update_users: bool = False
    can_delete_users: bool = False

    can_view_patients: bool = False
    can_create_patients: bool = False
    can_update_patients: bool = False
    can_delete_patients: bool = False

    can_view_records: bool = False
    can_create_records: bool = False
    can_update_records: bool = False
    can_delete_records: bool = False

    can_view_transfers: bool = False
    can_create_transfers: bool = False
    can_update_transfers: bool = False
    can_delete_transfers: bool = False
    can_receive_transfers: bool = False
    can_complete_transfers: bool = False

    class Config:
        frozen = True


class MenuItem(BaseModel):
    label: str
    path: str
    group: str

    class Config:
        frozen = True


class CapabilitiesRequest(BaseModel):
    principal: Optional[Principal] = None


class CapabilitiesResponse(BaseModel):
    capabilities: CapabilitySet
    menu: List[MenuItem]
    default_route: str


# --- Cache management ---
class CacheInvalidationResponse(BaseModel):
    invalidated: str
    cached_keys: List[str]

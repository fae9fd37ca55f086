"""Reference data (static lookup vocabularies) backed by the TTL cache."""
from typing import Any, Dict, List, Optional

from medgate.core.errors import ReferenceDataLoadError, TransportError
from medgate.core.logging_config import logger
from medgate.schemas import (
    ApiResponse,
    BulkStatusUpdate,
    ReferenceDataCreate,
    ReferenceDataFilters,
    ReferenceDataItem,
    ReferenceDataUpdate,
)
from medgate.services.cache import ALL_KEY, ReferenceDataCache
from medgate.services.transport import ApiTransport, build_query

# Reference-data types the UI looks up by name
ROLE = "role"
GENDER = "gender"
HEALTH_CENTER_TYPE = "health_center_type"
STATUS = "status"


def group_by_type(items: List[ReferenceDataItem]) -> Dict[str, List[ReferenceDataItem]]:
    """Regroup a flat collection by type, keeping the original order."""
    groups: Dict[str, List[ReferenceDataItem]] = {}
    for item in items:
        groups.setdefault(item.type, []).append(item)
    return groups


def _parse_items(response: ApiResponse, what: str) -> List[ReferenceDataItem]:
    if not response.success:
        raise ReferenceDataLoadError(response.message or f"Failed to load {what}", data=response.data)
    return [ReferenceDataItem.model_validate(item) for item in (response.data or [])]


def _flatten_groups(data: Any) -> List[dict]:
    """The bulk payload is either a flat list or a mapping of type to list."""
    if data is None:
        return []
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and all(group is None or isinstance(group, list) for group in data.values()):
        return [item for group in data.values() for item in (group or [])]
    raise ReferenceDataLoadError(f"Unexpected reference data payload: {type(data).__name__}", data=data)


def _require_success(response: ApiResponse, what: str) -> None:
    if not response.success:
        logger.warning(f"Reference data {what} rejected upstream: {response.message}")
        raise TransportError(response.message or f"Reference data {what} failed", data=response.data)


class ReferenceDataService:
    """Reads and mutations for reference data.

    Per-type reads and the bulk read go through the cache. Every successful
    mutation invalidates the affected type before returning; when the type
    cannot be known from the call the whole cache is cleared.
    """

    def __init__(self, transport: ApiTransport, cache: ReferenceDataCache):
        self.transport = transport
        self.cache = cache

    # --- Cached reads ---

    async def get_all(self) -> Dict[str, List[ReferenceDataItem]]:
        async def load() -> List[ReferenceDataItem]:
            response = await self.transport.get("/static")
            if not response.success:
                raise ReferenceDataLoadError(response.message or "Failed to load reference data", data=response.data)
            return [ReferenceDataItem.model_validate(item) for item in _flatten_groups(response.data)]

        return group_by_type(await self.cache.fetch_or_load(ALL_KEY, load))

    async def by_type(self, type_: str) -> List[ReferenceDataItem]:
        async def load() -> List[ReferenceDataItem]:
            response = await self.transport.get(f"/static/{type_}")
            return _parse_items(response, f"reference data of type {type_!r}")

        return await self.cache.fetch_or_load(type_, load)

    async def roles(self) -> List[ReferenceDataItem]:
        return await self.by_type(ROLE)

    async def genders(self) -> List[ReferenceDataItem]:
        return await self.by_type(GENDER)

    async def health_center_types(self) -> List[ReferenceDataItem]:
        return await self.by_type(HEALTH_CENTER_TYPE)

    async def statuses(self) -> List[ReferenceDataItem]:
        return await self.by_type(STATUS)

    # --- Uncached reads ---

    async def list_items(self, filters: Optional[ReferenceDataFilters] = None) -> ApiResponse:
        params = build_query(**filters.model_dump()) if filters else None
        return await self.transport.get("/static-data", params=params)

    async def types(self) -> List[str]:
        response = await self.transport.get("/static/types")
        if not response.success:
            raise ReferenceDataLoadError(response.message or "Failed to load reference data types")
        return list(response.data or [])

    async def by_code(self, type_: str, code: str) -> ReferenceDataItem:
        response = await self.transport.get(f"/static/{type_}/{code}")
        if not response.success:
            raise ReferenceDataLoadError(response.message or f"Reference data {type_}/{code} not found")
        return ReferenceDataItem.model_validate(response.data)

    async def by_id(self, item_id: int) -> ReferenceDataItem:
        response = await self.transport.get(f"/static-data/{item_id}")
        if not response.success:
            raise ReferenceDataLoadError(response.message or f"Reference data #{item_id} not found")
        return ReferenceDataItem.model_validate(response.data)

    # --- Mutations ---

    async def create(self, item: ReferenceDataCreate) -> ApiResponse:
        response = await self.transport.post("/static-data", item.model_dump())
        _require_success(response, "create")
        self.cache.invalidate(item.type)
        return response

    async def update(self, item_id: int, item: ReferenceDataUpdate) -> ApiResponse:
        response = await self.transport.put(f"/static-data/{item_id}", item.model_dump(exclude_none=True))
        _require_success(response, f"update #{item_id}")
        # Without a type hint the affected collection is unknown
        self.cache.invalidate(item.type)
        return response

    async def toggle_status(self, item_id: int) -> ApiResponse:
        response = await self.transport.patch(f"/static-data/{item_id}/toggle-status")
        _require_success(response, f"toggle #{item_id}")
        self.cache.invalidate()
        return response

    async def bulk_update_status(self, update: BulkStatusUpdate) -> ApiResponse:
        response = await self.transport.patch("/static-data/bulk-update-status", update.model_dump())
        _require_success(response, "bulk status update")
        self.cache.invalidate()
        return response

    async def delete(self, item_id: int) -> ApiResponse:
        response = await self.transport.delete(f"/static-data/{item_id}")
        _require_success(response, f"delete #{item_id}")
        # Delete does not report which type was touched
        self.cache.invalidate()
        return response

    # --- Cache helpers ---

    async def refresh(self, type_: Optional[str] = None) -> None:
        if type_:
            self.cache.invalidate(type_)
            await self.by_type(type_)
        else:
            self.cache.invalidate()
            await self.get_all()
        logger.info(f"Reference data refreshed: {type_ or ALL_KEY}")

    def cached(self, type_: str) -> Optional[List[ReferenceDataItem]]:
        return self.cache.get(type_)

    def is_cached(self, type_: str) -> bool:
        return self.cache.is_cached(type_)

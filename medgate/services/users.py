"""User management facade."""
from typing import Any, Dict, Optional

from medgate.schemas import ApiResponse
from medgate.services.transport import ApiTransport, build_query


class UserService:
    def __init__(self, transport: ApiTransport):
        self.transport = transport

    async def list_users(
        self,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        search: Optional[str] = None,
        role_code: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> ApiResponse:
        params = build_query(
            page=page, per_page=per_page, search=search, role_code=role_code, is_active=is_active
        )
        return await self.transport.get("/users", params=params)

    # Same query shape as list_users; kept as a separate entry point for search boxes
    search_users = list_users

    async def get_user(self, user_id: int) -> ApiResponse:
        return await self.transport.get(f"/users/{user_id}")

    async def create_user(self, data: Dict[str, Any]) -> ApiResponse:
        return await self.transport.post("/users", data)

    async def update_user(self, user_id: int, data: Dict[str, Any]) -> ApiResponse:
        return await self.transport.put(f"/users/{user_id}", data)

    async def delete_user(self, user_id: int) -> ApiResponse:
        return await self.transport.delete(f"/users/{user_id}")

"""Record transfer facade, including the receive/complete workflow steps."""
from typing import Any, Dict, Optional

from medgate.schemas import ApiResponse
from medgate.services.transport import ApiTransport, build_query


class TransferService:
    def __init__(self, transport: ApiTransport):
        self.transport = transport

    async def list_transfers(
        self,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        record_id: Optional[int] = None,
        sender_id: Optional[int] = None,
        recipient_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> ApiResponse:
        params = build_query(
            page=page,
            per_page=per_page,
            record_id=record_id,
            sender_id=sender_id,
            recipient_id=recipient_id,
            status=status,
        )
        return await self.transport.get("/transfers", params=params)

    async def get_transfer(self, transfer_id: int) -> ApiResponse:
        return await self.transport.get(f"/transfers/{transfer_id}")

    async def create_transfer(self, data: Dict[str, Any]) -> ApiResponse:
        return await self.transport.post("/transfers", data)

    async def update_transfer(self, transfer_id: int, data: Dict[str, Any]) -> ApiResponse:
        return await self.transport.put(f"/transfers/{transfer_id}", data)

    async def delete_transfer(self, transfer_id: int) -> ApiResponse:
        return await self.transport.delete(f"/transfers/{transfer_id}")

    async def receive_transfer(self, transfer_id: int) -> ApiResponse:
        return await self.transport.post(f"/transfers/{transfer_id}/receive")

    async def complete_transfer(self, transfer_id: int) -> ApiResponse:
        return await self.transport.post(f"/transfers/{transfer_id}/complete")

    async def transfers_by_record(self, record_id: int, page: int = 1, per_page: int = 15) -> ApiResponse:
        return await self.list_transfers(page=page, per_page=per_page, record_id=record_id)

    async def transfers_by_sender(self, sender_id: int, page: int = 1, per_page: int = 15) -> ApiResponse:
        return await self.list_transfers(page=page, per_page=per_page, sender_id=sender_id)

    async def transfers_by_recipient(self, recipient_id: int, page: int = 1, per_page: int = 15) -> ApiResponse:
        return await self.list_transfers(page=page, per_page=per_page, recipient_id=recipient_id)

    async def pending_transfers(self, page: int = 1, per_page: int = 15) -> ApiResponse:
        return await self.list_transfers(page=page, per_page=per_page, status="pending")

    async def completed_transfers(self, page: int = 1, per_page: int = 15) -> ApiResponse:
        return await self.list_transfers(page=page, per_page=per_page, status="completed")

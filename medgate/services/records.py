"""Medical record facade."""
from typing import Any, Dict, Optional

from medgate.schemas import ApiResponse
from medgate.services.transport import ApiTransport, build_query


class MedicalRecordService:
    def __init__(self, transport: ApiTransport):
        self.transport = transport

    async def list_records(
        self,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        # Patient filters
        patient_name: Optional[str] = None,
        patient_national_id: Optional[str] = None,
        patient_gender: Optional[str] = None,
        # Status and type filters
        status_code: Optional[str] = None,
        problem_type_code: Optional[str] = None,
        health_center_code: Optional[str] = None,
        # Date ranges
        created_from: Optional[str] = None,
        created_to: Optional[str] = None,
        modified_from: Optional[str] = None,
        modified_to: Optional[str] = None,
        # Transfers
        has_transfers: Optional[bool] = None,
        transfer_notes: Optional[str] = None,
        has_completed_workflow: Optional[bool] = None,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        patient_id: Optional[int] = None,
        created_by: Optional[int] = None,
    ) -> ApiResponse:
        if sort_order is not None and sort_order not in ("asc", "desc"):
            raise ValueError(f"sort_order must be 'asc' or 'desc', got {sort_order!r}")

        params = build_query(
            page=page,
            per_page=per_page,
            patient_id=patient_id,
            patient_name=patient_name,
            patient_national_id=patient_national_id,
            patient_gender=patient_gender,
            status_code=status_code,
            problem_type_code=problem_type_code,
            health_center_code=health_center_code,
            created_by=created_by,
            created_from=created_from,
            created_to=created_to,
            modified_from=modified_from,
            modified_to=modified_to,
            has_transfers=has_transfers,
            transfer_notes=transfer_notes,
            has_completed_workflow=has_completed_workflow,
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        return await self.transport.get("/records", params=params)

    async def get_record(self, record_id: int) -> ApiResponse:
        return await self.transport.get(f"/records/{record_id}")

    async def create_record(self, data: Dict[str, Any]) -> ApiResponse:
        return await self.transport.post("/records", data)

    async def update_record(self, record_id: int, data: Dict[str, Any]) -> ApiResponse:
        return await self.transport.put(f"/records/{record_id}", data)

    async def delete_record(self, record_id: int) -> ApiResponse:
        return await self.transport.delete(f"/records/{record_id}")

    async def records_by_patient(self, patient_id: int, page: int = 1, per_page: int = 15) -> ApiResponse:
        return await self.list_records(page=page, per_page=per_page, patient_id=patient_id)

    async def records_by_status(self, status_code: str, page: int = 1, per_page: int = 15) -> ApiResponse:
        return await self.list_records(page=page, per_page=per_page, status_code=status_code)

    async def records_by_health_center(self, health_center_code: str, page: int = 1, per_page: int = 15) -> ApiResponse:
        return await self.list_records(page=page, per_page=per_page, health_center_code=health_center_code)

    async def records_by_creator(self, created_by: int, page: int = 1, per_page: int = 15) -> ApiResponse:
        return await self.list_records(page=page, per_page=per_page, created_by=created_by)

"""Patient management facade."""
from typing import Any, Dict, Optional

from medgate.schemas import ApiResponse
from medgate.services.transport import ApiTransport, build_query


class PatientService:
    def __init__(self, transport: ApiTransport):
        self.transport = transport

    async def list_patients(
        self,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        search: Optional[str] = None,
        gender_code: Optional[str] = None,
    ) -> ApiResponse:
        params = build_query(page=page, per_page=per_page, search=search, gender_code=gender_code)
        return await self.transport.get("/patients", params=params)

    async def get_patient(self, patient_id: int) -> ApiResponse:
        return await self.transport.get(f"/patients/{patient_id}")

    async def create_patient(self, data: Dict[str, Any]) -> ApiResponse:
        return await self.transport.post("/patients", data)

    async def update_patient(self, patient_id: int, data: Dict[str, Any]) -> ApiResponse:
        return await self.transport.put(f"/patients/{patient_id}", data)

    async def delete_patient(self, patient_id: int) -> ApiResponse:
        return await self.transport.delete(f"/patients/{patient_id}")

    async def search_patients(self, query: str, page: int = 1, per_page: int = 15) -> ApiResponse:
        """Search by name or national ID."""
        return await self.list_patients(page=page, per_page=per_page, search=query)

    async def patients_by_gender(self, gender_code: str, page: int = 1, per_page: int = 15) -> ApiResponse:
        return await self.list_patients(page=page, per_page=per_page, gender_code=gender_code)

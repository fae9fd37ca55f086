"""Report listing and generation."""
from typing import Any

from medgate.core.logging_config import logger
from medgate.core.errors import TransportError
from medgate.schemas import GenerateReportRequest
from medgate.services.transport import ApiTransport


class ReportService:
    def __init__(self, transport: ApiTransport):
        self.transport = transport

    async def available_reports(self) -> Any:
        """Return the report catalogue (the envelope's data)."""
        try:
            response = await self.transport.get("/reports/available")
        except TransportError as exc:
            logger.error(f"Error fetching available reports: {exc}")
            raise
        return response.data

    async def generate_report(self, request: GenerateReportRequest) -> bytes:
        """Generate a report and return the file contents."""
        try:
            return await self.transport.post_bytes("/reports/generate", request.model_dump())
        except TransportError as exc:
            logger.error(f"Error generating report {request.report_type!r}: {exc}")
            raise

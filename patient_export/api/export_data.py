"""
Export call handler.

Narrows the caller's scope to the request, runs the export and wraps the
archive for transport. Errors propagate to the transport layer unchanged.
"""
import base64
import logging

from patient_export.api.schemas import ExportDataRequest, ExportDataResponse
from patient_export.core.export.export_service import ExportService
from patient_export.core.export.scope import ExportScope

logger = logging.getLogger(__name__)


async def export_data(
    service: ExportService,
    request: ExportDataRequest,
    caller_scope: ExportScope,
) -> ExportDataResponse:
    """Export patient data as a base64 encoded zip archive.

    Args:
        service: Export service to run against
        request: Validated request body
        caller_scope: Scope the caller is authorized for

    Returns:
        ExportDataResponse with the encoded archive
    """
    scope = request.to_scope(caller_scope)
    logger.info(f"Export requested: {scope.kind.value} {scope.target or ''}".rstrip())
    archive = await service.export(scope)
    return ExportDataResponse(content=base64.b64encode(archive).decode("ascii"))

"""
Patient export API surface

Request/response schemas and the export call handler.
"""

from .export_data import export_data
from .schemas import ExportDataRequest, ExportDataResponse

__all__ = ["export_data", "ExportDataRequest", "ExportDataResponse"]

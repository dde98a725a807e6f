"""Export pipeline: table encoding, projections and archive assembly."""
from patient_export.core.export.archive import ArchiveWriter, with_archive
from patient_export.core.export.csv_table import build_table, encode_field, encode_row
from patient_export.core.export.export_service import (
    USER_CATEGORIES,
    DefaultExportService,
    ExportService,
    UserCategory,
    gather_all,
)
from patient_export.core.export.projectors import TableSpec
from patient_export.core.export.scope import ExportScope, ScopeKind

__all__ = [
    # Table encoding
    "encode_field",
    "encode_row",
    "build_table",
    "TableSpec",
    # Archive assembly
    "ArchiveWriter",
    "with_archive",
    # Orchestration
    "ExportService",
    "DefaultExportService",
    "UserCategory",
    "USER_CATEGORIES",
    "gather_all",
    "ExportScope",
    "ScopeKind",
]

"""Abstract interfaces for external dependencies."""
from patient_export.core.ports.data_store import ClinicalDataStorePort

__all__ = [
    "ClinicalDataStorePort",
]

"""In-memory implementation of ClinicalDataStorePort.

Keeps records in insertion order per collection path. Used for local runs
and as the reference store in tests.
"""
from typing import Any, Dict, List, Optional

from patient_export.core.exceptions import ValidationError
from patient_export.core.models.collections import CollectionSelector
from patient_export.core.models.records import ClinicalRecord, PatientProfile, UserType
from patient_export.core.ports.data_store import ClinicalDataStorePort


class InMemoryDataStore(ClinicalDataStorePort):
    """Dictionary-backed document store."""

    def __init__(self):
        self._collections: Dict[str, List[ClinicalRecord[Any]]] = {}
        self._users: Dict[str, ClinicalRecord[PatientProfile]] = {}

    def add_user(self, user_id: str, profile: PatientProfile) -> None:
        """Register a user profile (replaces an existing one)."""
        self._users[user_id] = ClinicalRecord(user_id, profile)

    def add(self, selector: CollectionSelector, record_id: str, content: Any) -> None:
        """Append a document to a collection.

        Raises:
            ValidationError: If content does not match the selector's model
        """
        if not isinstance(content, selector.model):
            raise ValidationError(
                f"{selector.path} expects {selector.model.__name__}, "
                f"got {type(content).__name__}"
            )
        self._collections.setdefault(selector.path, []).append(
            ClinicalRecord(record_id, content)
        )

    async def query(self, selector: CollectionSelector) -> List[ClinicalRecord[Any]]:
        return list(self._collections.get(selector.path, []))

    async def get_user(self, user_id: str) -> Optional[ClinicalRecord[PatientProfile]]:
        return self._users.get(user_id)

    async def get_all_patients(self) -> List[ClinicalRecord[PatientProfile]]:
        return [
            user for user in self._users.values()
            if user.content.type == UserType.PATIENT
        ]

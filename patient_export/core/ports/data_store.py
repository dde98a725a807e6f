"""Data store port interface.

Defines the contract for reading clinical documents. Core code depends only
on this abstraction, not on specific implementations like Redis.
"""
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from patient_export.core.models.collections import CollectionSelector
from patient_export.core.models.records import ClinicalRecord, PatientProfile


class ClinicalDataStorePort(ABC):
    """Abstract interface for clinical document queries.

    Implementations: InMemoryDataStore, RedisDocumentStore
    """

    @abstractmethod
    async def query(self, selector: CollectionSelector) -> List[ClinicalRecord[Any]]:
        """Fetch every document of one collection.

        Args:
            selector: Collection path and content model

        Returns:
            Records in the store's native order

        Raises:
            QueryError: If the underlying store rejects the query
        """
        pass

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[ClinicalRecord[PatientProfile]]:
        """Retrieve one user profile.

        Args:
            user_id: Unique user identifier

        Returns:
            User record or None if not found
        """
        pass

    @abstractmethod
    async def get_all_patients(self) -> List[ClinicalRecord[PatientProfile]]:
        """Retrieve every user whose type is patient.

        Returns:
            Patient records, fully materialized
        """
        pass

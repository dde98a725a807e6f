"""Redis implementation of ClinicalDataStorePort.

Each collection path is one Redis hash mapping document id to the
document's JSON. Users live in the "users" hash.
"""
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from redis.exceptions import RedisError

from patient_export.adapters.storage.document_codec import decode_document
from patient_export.config.export_settings import REDIS_KEY_PREFIX
from patient_export.core.exceptions import QueryError, ValidationError
from patient_export.core.models.collections import CollectionSelector, Collections
from patient_export.core.models.records import ClinicalRecord, PatientProfile, UserType
from patient_export.core.ports.data_store import ClinicalDataStorePort

logger = logging.getLogger(__name__)


def _text(value) -> str:
    return value.decode("utf-8") if isinstance(value, bytes) else value


class RedisDocumentStore(ClinicalDataStorePort):
    """Redis implementation of ClinicalDataStorePort.

    Query results are ordered by document id, matching the default
    ordering of document databases.

    Args:
        redis_client: Configured redis.Redis instance
        key_prefix: Prefix for all collection keys (default: "store:")
    """

    def __init__(self, redis_client, key_prefix: str = REDIS_KEY_PREFIX):
        self._redis = redis_client
        self._prefix = key_prefix

    def _key(self, path: str) -> str:
        """Build Redis key for a collection path."""
        return f"{self._prefix}{path}"

    def _decode(self, selector: CollectionSelector, doc_id: str, raw) -> ClinicalRecord[Any]:
        try:
            content = decode_document(selector.model, json.loads(_text(raw)))
        except (ValueError, ValidationError) as e:
            raise QueryError(f"Undecodable document {selector.path}/{doc_id}: {e}") from e
        return ClinicalRecord(doc_id, content)

    def _fetch_all(self, path: str) -> List[Tuple[str, Any]]:
        try:
            raw: Dict[Any, Any] = self._redis.hgetall(self._key(path))
        except RedisError as e:
            raise QueryError(f"Query failed for {path}: {e}") from e
        return sorted((_text(doc_id), value) for doc_id, value in raw.items())

    async def query(self, selector: CollectionSelector) -> List[ClinicalRecord[Any]]:
        """Fetch and decode every document of a collection."""
        documents = self._fetch_all(selector.path)
        logger.debug(f"Fetched {len(documents)} documents from {selector.path}")
        return [self._decode(selector, doc_id, raw) for doc_id, raw in documents]

    async def get_user(self, user_id: str) -> Optional[ClinicalRecord[PatientProfile]]:
        """Retrieve one user profile from the users hash."""
        selector = Collections.users()
        try:
            raw = self._redis.hget(self._key(selector.path), user_id)
        except RedisError as e:
            raise QueryError(f"User lookup failed for {user_id}: {e}") from e
        if raw is None:
            return None
        return self._decode(selector, user_id, raw)

    async def get_all_patients(self) -> List[ClinicalRecord[PatientProfile]]:
        """Retrieve every patient profile."""
        users = await self.query(Collections.users())
        return [user for user in users if user.content.type == UserType.PATIENT]

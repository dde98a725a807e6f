"""
Export orchestration.

Resolves a scope to a list of user ids, queries every category of each
user concurrently and assembles all tables into one zip archive.

Archive layout:
    questionnaire_{id}.csv                     once per questionnaire
    {userId}/appointments.csv
    {userId}/medicationRequests.csv
    {userId}/messages.csv
    {userId}/{observationCollection}.csv        one per observation category
    {userId}/questionnaireResponses_kccq.csv
    {userId}/symptomScores.csv
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Tuple

from patient_export.core.exceptions import ForbiddenError, NotFoundError
from patient_export.core.export.archive import ArchiveWriter, with_archive
from patient_export.core.export.projectors import (
    APPOINTMENTS_TABLE,
    KCCQ_RESPONSES_TABLE,
    MEDICATION_REQUESTS_TABLE,
    MESSAGES_TABLE,
    OBSERVATION_TABLES,
    QUESTIONNAIRE_TABLE,
    SYMPTOM_SCORES_TABLE,
    TableSpec,
)
from patient_export.core.export.scope import ExportScope, ScopeKind
from patient_export.core.models.collections import (
    CollectionSelector,
    Collections,
    ObservationCollection,
)
from patient_export.core.ports.data_store import ClinicalDataStorePort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserCategory:
    """One per-user table: archive file stem, collection and projection."""

    name: str
    selector: Callable[[str], CollectionSelector]
    table: TableSpec[Any]

    def entry_path(self, user_id: str) -> str:
        return f"{user_id}/{self.name}.csv"


def _observation_category(collection: ObservationCollection) -> UserCategory:
    return UserCategory(
        name=collection.value,
        selector=lambda user_id: Collections.user_observations(user_id, collection),
        table=OBSERVATION_TABLES[collection],
    )


USER_CATEGORIES: Tuple[UserCategory, ...] = (
    UserCategory("appointments", Collections.user_appointments, APPOINTMENTS_TABLE),
    UserCategory(
        "medicationRequests",
        Collections.user_medication_requests,
        MEDICATION_REQUESTS_TABLE,
    ),
    UserCategory("messages", Collections.user_messages, MESSAGES_TABLE),
    *(_observation_category(collection) for collection in ObservationCollection),
    UserCategory(
        "questionnaireResponses_kccq",
        Collections.user_questionnaire_responses,
        KCCQ_RESPONSES_TABLE,
    ),
    UserCategory("symptomScores", Collections.user_symptom_scores, SYMPTOM_SCORES_TABLE),
)


def questionnaire_entry_path(questionnaire_id: str) -> str:
    return f"questionnaire_{questionnaire_id}.csv"


async def gather_all(coroutines: List[Awaitable[Any]]) -> List[Any]:
    """Run coroutines concurrently and wait for all of them.

    Fails fast: the first error propagates and the remaining tasks are
    cancelled.

    Returns:
        Results in the order of the given coroutines
    """
    tasks = [asyncio.ensure_future(coroutine) for coroutine in coroutines]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class ExportService(ABC):
    """Patient data export entry points."""

    @abstractmethod
    async def export_for_user(
        self,
        user_id: str,
        within_organization: Optional[str] = None,
    ) -> bytes:
        """Export a single user.

        Args:
            user_id: User to export
            within_organization: If set, the user must belong to this organization

        Raises:
            NotFoundError: If the user does not exist
            ForbiddenError: If the user belongs to another organization
        """
        pass

    @abstractmethod
    async def export_for_organization(self, organization_id: str) -> bytes:
        """Export every patient whose organization equals organization_id."""
        pass

    @abstractmethod
    async def export_for_all(self) -> bytes:
        """Export every patient."""
        pass

    async def export(self, scope: ExportScope) -> bytes:
        """Dispatch an already-authorized scope onto the matching export."""
        if scope.kind == ScopeKind.SINGLE_USER:
            return await self.export_for_user(scope.target, scope.within_organization)
        if scope.kind == ScopeKind.ORGANIZATION:
            return await self.export_for_organization(scope.target)
        return await self.export_for_all()


class DefaultExportService(ExportService):
    """
    Export service backed by a ClinicalDataStorePort.

    Users are processed one after another; within a user all category
    queries run concurrently. Any failure aborts the whole export.
    """

    def __init__(self, data_store: ClinicalDataStorePort):
        self._store = data_store

    async def export_for_user(
        self,
        user_id: str,
        within_organization: Optional[str] = None,
    ) -> bytes:
        patient = await self._store.get_user(user_id)
        if patient is None:
            raise NotFoundError(f"Patient with ID {user_id} not found")
        if within_organization is not None and patient.content.organization != within_organization:
            logger.warning(f"Export of {user_id} denied outside organization {within_organization}")
            raise ForbiddenError(f"Export of user {user_id} not permitted")
        return await self._create_patients_archive([patient.id])

    async def export_for_organization(self, organization_id: str) -> bytes:
        patients = await self._store.get_all_patients()
        user_ids = [
            patient.id
            for patient in patients
            if patient.content.organization == organization_id
        ]
        logger.info(
            f"Organization {organization_id}: {len(user_ids)}/{len(patients)} patients selected"
        )
        return await self._create_patients_archive(user_ids)

    async def export_for_all(self) -> bytes:
        patients = await self._store.get_all_patients()
        return await self._create_patients_archive([patient.id for patient in patients])

    # Helpers - Archive Generation

    async def _create_patients_archive(self, user_ids: List[str]) -> bytes:
        logger.info(f"Starting export for {len(user_ids)} users")

        async def generate(writer: ArchiveWriter) -> None:
            await self._add_questionnaires(writer)
            for user_id in user_ids:
                entries = await gather_all([
                    self._build_user_table(user_id, category)
                    for category in USER_CATEGORIES
                ])
                for path, data in entries:
                    writer.append_entry(data, path)

        archive = await with_archive(generate)
        logger.info(f"Export finished: {len(user_ids)} users, {len(archive)} bytes")
        return archive

    async def _add_questionnaires(self, writer: ArchiveWriter) -> None:
        questionnaires = await self._store.query(Collections.questionnaires())
        for questionnaire in questionnaires:
            data = QUESTIONNAIRE_TABLE.build(questionnaire.content.leaf_items())
            writer.append_entry(data, questionnaire_entry_path(questionnaire.id))

    async def _build_user_table(
        self,
        user_id: str,
        category: UserCategory,
    ) -> Tuple[str, bytes]:
        records = await self._store.query(category.selector(user_id))
        return category.entry_path(user_id), category.table.build(records)

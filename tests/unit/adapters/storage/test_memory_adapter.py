"""Tests for InMemoryDataStore implementing ClinicalDataStorePort."""
from datetime import datetime, timezone

import pytest

from patient_export.adapters.storage.memory_adapter import InMemoryDataStore
from patient_export.core.exceptions import ValidationError
from patient_export.core.models import Appointment, Collections, PatientProfile, UserType
from patient_export.core.ports.data_store import ClinicalDataStorePort

WHEN = datetime(2025, 1, 5, tzinfo=timezone.utc)


class TestInMemoryDataStore:
    def test_implements_data_store_port(self):
        assert isinstance(InMemoryDataStore(), ClinicalDataStorePort)

    @pytest.mark.asyncio
    async def test_query_returns_insertion_order(self):
        store = InMemoryDataStore()
        selector = Collections.user_appointments("u1")
        store.add(selector, "b", Appointment("booked", WHEN, WHEN, WHEN))
        store.add(selector, "a", Appointment("booked", WHEN, WHEN, WHEN))

        records = await store.query(selector)

        assert [record.id for record in records] == ["b", "a"]

    @pytest.mark.asyncio
    async def test_query_unknown_collection_is_empty(self):
        store = InMemoryDataStore()

        assert await store.query(Collections.user_messages("u1")) == []

    @pytest.mark.asyncio
    async def test_query_returns_copy(self):
        store = InMemoryDataStore()
        selector = Collections.user_appointments("u1")
        store.add(selector, "a", Appointment("booked", WHEN, WHEN, WHEN))

        (await store.query(selector)).clear()

        assert len(await store.query(selector)) == 1

    def test_add_rejects_wrong_model(self):
        store = InMemoryDataStore()

        with pytest.raises(ValidationError):
            store.add(Collections.user_messages("u1"), "x", PatientProfile())

    @pytest.mark.asyncio
    async def test_get_user(self):
        store = InMemoryDataStore()
        store.add_user("u1", PatientProfile(organization="stanford"))

        user = await store.get_user("u1")

        assert user.id == "u1"
        assert user.content.organization == "stanford"
        assert await store.get_user("missing") is None

    @pytest.mark.asyncio
    async def test_get_all_patients_excludes_staff(self):
        store = InMemoryDataStore()
        store.add_user("p1", PatientProfile())
        store.add_user("c1", PatientProfile(type=UserType.CLINICIAN))

        patients = await store.get_all_patients()

        assert [patient.id for patient in patients] == ["p1"]

"""
Document store collection selectors.

A selector names one collection path in the document store together with
the content model its documents decode into.
"""
from dataclasses import dataclass
from enum import Enum

from patient_export.core.models.fhir import (
    MedicationRequest,
    Observation,
    Questionnaire,
    QuestionnaireResponse,
)
from patient_export.core.models.records import (
    Appointment,
    Message,
    PatientProfile,
    SymptomScore,
)


class ObservationCollection(Enum):
    """Observation categories stored per user. Values are collection names."""
    BODY_WEIGHT = "bodyWeightObservations"
    BLOOD_PRESSURE = "bloodPressureObservations"
    CREATININE = "creatinineObservations"
    DRY_WEIGHT = "dryWeightObservations"
    EGFR = "eGfrObservations"
    HEART_RATE = "heartRateObservations"
    POTASSIUM = "potassiumObservations"


@dataclass(frozen=True)
class CollectionSelector:
    path: str
    model: type


class Collections:
    """Factory for collection selectors."""

    @staticmethod
    def users() -> CollectionSelector:
        return CollectionSelector("users", PatientProfile)

    @staticmethod
    def questionnaires() -> CollectionSelector:
        return CollectionSelector("questionnaires", Questionnaire)

    @staticmethod
    def user_appointments(user_id: str) -> CollectionSelector:
        return CollectionSelector(f"users/{user_id}/appointments", Appointment)

    @staticmethod
    def user_medication_requests(user_id: str) -> CollectionSelector:
        return CollectionSelector(f"users/{user_id}/medicationRequests", MedicationRequest)

    @staticmethod
    def user_messages(user_id: str) -> CollectionSelector:
        return CollectionSelector(f"users/{user_id}/messages", Message)

    @staticmethod
    def user_observations(user_id: str, collection: ObservationCollection) -> CollectionSelector:
        return CollectionSelector(f"users/{user_id}/{collection.value}", Observation)

    @staticmethod
    def user_questionnaire_responses(user_id: str) -> CollectionSelector:
        return CollectionSelector(
            f"users/{user_id}/questionnaireResponses", QuestionnaireResponse
        )

    @staticmethod
    def user_symptom_scores(user_id: str) -> CollectionSelector:
        return CollectionSelector(f"users/{user_id}/symptomScores", SymptomScore)

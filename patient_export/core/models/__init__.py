"""Domain models and entities.

Clinical records read by the export pipeline.
"""

from patient_export.core.models.collections import (
    CollectionSelector,
    Collections,
    ObservationCollection,
)
from patient_export.core.models.fhir import (
    CodeableConcept,
    Coding,
    Dosage,
    DoseAndRate,
    MedicationRequest,
    Observation,
    ObservationComponent,
    Quantity,
    Questionnaire,
    QuestionnaireAnswerOption,
    QuestionnaireItem,
    QuestionnaireResponse,
    QuestionnaireResponseAnswer,
    QuestionnaireResponseItem,
    Reference,
    Timing,
    TimingRepeat,
)
from patient_export.core.models.records import (
    Appointment,
    ClinicalRecord,
    LocalizedText,
    Message,
    PatientProfile,
    SymptomScore,
    UserType,
)
from patient_export.core.models.tree import iter_leaves

__all__ = [
    # records.py models
    "ClinicalRecord",
    "PatientProfile",
    "UserType",
    "LocalizedText",
    "Appointment",
    "Message",
    "SymptomScore",
    # fhir.py models
    "Coding",
    "CodeableConcept",
    "Quantity",
    "Reference",
    "Questionnaire",
    "QuestionnaireItem",
    "QuestionnaireAnswerOption",
    "QuestionnaireResponse",
    "QuestionnaireResponseItem",
    "QuestionnaireResponseAnswer",
    "Observation",
    "ObservationComponent",
    "MedicationRequest",
    "Dosage",
    "DoseAndRate",
    "Timing",
    "TimingRepeat",
    # collections.py
    "CollectionSelector",
    "Collections",
    "ObservationCollection",
    # tree traversal
    "iter_leaves",
]

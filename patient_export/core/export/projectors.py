"""
Per-category table projections.

Each TableSpec pairs a fixed header with a projection that flattens one
record into exactly one cell per header. Observation categories map onto
their TableSpec through OBSERVATION_TABLES; adding a category is a table edit.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Iterable, List, Optional, Tuple, TypeVar

from patient_export.config.export_settings import (
    KCCQ_QUESTION_LINK_IDS,
    KCCQ_QUESTIONNAIRE_URL,
    LOINC_DIASTOLIC,
    LOINC_SYSTOLIC,
)
from patient_export.core.export.csv_table import build_table
from patient_export.core.export.formatting import (
    format_datetime,
    format_number,
    format_optional_datetime,
    format_optional_number,
    format_optional_text,
)
from patient_export.core.models.collections import ObservationCollection
from patient_export.core.models.fhir import (
    Coding,
    MedicationRequest,
    Observation,
    ObservationComponent,
    QuestionnaireAnswerOption,
    QuestionnaireItem,
    QuestionnaireResponse,
)
from patient_export.core.models.records import (
    Appointment,
    ClinicalRecord,
    Message,
    SymptomScore,
)

T = TypeVar("T")


@dataclass(frozen=True)
class TableSpec(Generic[T]):
    """Header, row projection and optional row filter for one table."""

    headers: Tuple[str, ...]
    project: Callable[[T], List[str]]
    include: Optional[Callable[[T], bool]] = None

    def build(self, records: Iterable[T]) -> bytes:
        if self.include is not None:
            records = [record for record in records if self.include(record)]
        return build_table(self.headers, records, self.project)


# Questionnaires

def _format_answer_option(option: QuestionnaireAnswerOption) -> str:
    coding = option.value_coding or Coding()
    return f"{coding.display or ''} ({coding.code or ''})"


def _project_questionnaire_item(item: QuestionnaireItem) -> List[str]:
    options = "|".join(_format_answer_option(option) for option in item.answer_option)
    return [
        format_optional_text(item.link_id),
        format_optional_text(item.text),
        format_optional_text(item.type),
        options,
    ]


QUESTIONNAIRE_TABLE: TableSpec[QuestionnaireItem] = TableSpec(
    headers=("linkId", "text", "type", "options"),
    project=_project_questionnaire_item,
)


# Appointments

def _project_appointment(record: ClinicalRecord[Appointment]) -> List[str]:
    appointment = record.content
    return [
        record.id,
        appointment.status,
        format_datetime(appointment.created),
        format_datetime(appointment.start),
        format_datetime(appointment.end),
    ]


APPOINTMENTS_TABLE: TableSpec[ClinicalRecord[Appointment]] = TableSpec(
    headers=("id", "status", "created", "start", "end"),
    project=_project_appointment,
)


# Messages

def _project_message(record: ClinicalRecord[Message]) -> List[str]:
    message = record.content
    return [
        record.id,
        message.type,
        message.title.localize(),
        format_optional_text(message.action),
        format_optional_text(message.reference),
        format_datetime(message.creation_date),
        format_optional_datetime(message.completion_date),
        format_optional_datetime(message.due_date),
    ]


MESSAGES_TABLE: TableSpec[ClinicalRecord[Message]] = TableSpec(
    headers=(
        "id",
        "type",
        "title",
        "action",
        "reference",
        "creationDate",
        "completionDate",
        "dueDate",
    ),
    project=_project_message,
)


# Medication requests

def _segment(parts: List[str], index: int) -> str:
    return parts[index] if index < len(parts) else ""


def _project_medication_request(record: ClinicalRecord[MedicationRequest]) -> List[str]:
    request = record.content
    parts = request.reference_parts()
    quantity = request.dose_quantity()
    return [
        record.id,
        _segment(parts, 1),
        _segment(parts, 3),
        format_optional_number(quantity.value if quantity else None),
        format_optional_text(quantity.unit if quantity else None),
        format_optional_number(request.frequency_per_day()),
    ]


MEDICATION_REQUESTS_TABLE: TableSpec[ClinicalRecord[MedicationRequest]] = TableSpec(
    headers=(
        "id",
        "medicationCode (RxNorm)",
        "drugCode (RxNorm)",
        "quantity",
        "quantityUnit",
        "frequencyPerDay",
    ),
    project=_project_medication_request,
)


# Observations

def _project_observation(record: ClinicalRecord[Observation]) -> List[str]:
    observation = record.content
    quantity = observation.value_quantity
    return [
        record.id,
        format_optional_number(quantity.value if quantity else None),
        format_optional_text(quantity.unit if quantity else None),
        format_optional_datetime(observation.effective_date_time),
    ]


def _component_cells(component: Optional[ObservationComponent]) -> List[str]:
    quantity = component.value_quantity if component else None
    return [
        format_optional_number(quantity.value if quantity else None),
        format_optional_text(quantity.unit if quantity else None),
    ]


def _project_blood_pressure(record: ClinicalRecord[Observation]) -> List[str]:
    observation = record.content
    return [
        record.id,
        *_component_cells(observation.find_component(LOINC_SYSTOLIC)),
        *_component_cells(observation.find_component(LOINC_DIASTOLIC)),
        format_optional_datetime(observation.effective_date_time),
    ]


OBSERVATION_TABLE: TableSpec[ClinicalRecord[Observation]] = TableSpec(
    headers=("id", "value", "unit", "effectiveDateTime"),
    project=_project_observation,
)

BLOOD_PRESSURE_TABLE: TableSpec[ClinicalRecord[Observation]] = TableSpec(
    headers=(
        "id",
        "systolicValue",
        "systolicUnit",
        "diastolicValue",
        "diastolicUnit",
        "effectiveDateTime",
    ),
    project=_project_blood_pressure,
)

OBSERVATION_TABLES: Dict[ObservationCollection, TableSpec[ClinicalRecord[Observation]]] = {
    collection: OBSERVATION_TABLE for collection in ObservationCollection
}
OBSERVATION_TABLES[ObservationCollection.BLOOD_PRESSURE] = BLOOD_PRESSURE_TABLE


# Questionnaire responses (KCCQ)

def _is_kccq_response(record: ClinicalRecord[QuestionnaireResponse]) -> bool:
    return record.content.questionnaire == KCCQ_QUESTIONNAIRE_URL


def _project_kccq_response(record: ClinicalRecord[QuestionnaireResponse]) -> List[str]:
    response = record.content
    return [
        record.id,
        *(
            format_optional_text(response.first_coded_answer(link_id))
            for link_id in KCCQ_QUESTION_LINK_IDS.values()
        ),
        format_optional_datetime(response.authored),
    ]


KCCQ_RESPONSES_TABLE: TableSpec[ClinicalRecord[QuestionnaireResponse]] = TableSpec(
    headers=("id", *KCCQ_QUESTION_LINK_IDS.keys(), "authored"),
    project=_project_kccq_response,
    include=_is_kccq_response,
)


# Symptom scores

def _project_symptom_score(record: ClinicalRecord[SymptomScore]) -> List[str]:
    score = record.content
    return [
        record.id,
        format_number(score.overall_score),
        format_optional_number(score.physical_limits_score),
        format_optional_number(score.social_limits_score),
        format_optional_number(score.symptom_frequency_score),
        format_optional_number(score.quality_of_life_score),
        format_number(score.dizziness_score),
        format_datetime(score.date),
        format_optional_text(score.questionnaire_response_id),
    ]


SYMPTOM_SCORES_TABLE: TableSpec[ClinicalRecord[SymptomScore]] = TableSpec(
    headers=(
        "id",
        "overallScore",
        "physicalLimitsScore",
        "socialLimitsScore",
        "symptomFrequencyScore",
        "qualityOfLifeScore",
        "dizzinessScore",
        "date",
        "questionnaireResponseId",
    ),
    project=_project_symptom_score,
)

"""
JSON document decoding.

Maps camelCase FHIR-style JSON documents onto the core dataclasses.
Timestamps are ISO 8601 strings; a trailing "Z" is accepted.
"""
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from patient_export.core.exceptions import ValidationError
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
    LocalizedText,
    Message,
    PatientProfile,
    SymptomScore,
    UserType,
)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp.

    Raises:
        ValidationError: If the value is not a valid timestamp
    """
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError) as e:
        raise ValidationError(f"Invalid timestamp: {value!r}") from e


def _required(document: Dict[str, Any], key: str) -> Any:
    value = document.get(key)
    if value is None:
        raise ValidationError(f"Missing required field: {key}")
    return value


def _required_timestamp(document: Dict[str, Any], key: str) -> datetime:
    return parse_timestamp(_required(document, key))


def _optional(value: Optional[Dict[str, Any]], decode: Callable[[Dict[str, Any]], Any]) -> Any:
    return decode(value) if value is not None else None


def _many(values: Optional[List[Dict[str, Any]]], decode: Callable[[Dict[str, Any]], Any]) -> List[Any]:
    return [decode(value) for value in values or []]


# FHIR primitives

def decode_coding(document: Dict[str, Any]) -> Coding:
    return Coding(
        system=document.get("system"),
        code=document.get("code"),
        display=document.get("display"),
    )


def decode_codeable_concept(document: Dict[str, Any]) -> CodeableConcept:
    return CodeableConcept(
        coding=_many(document.get("coding"), decode_coding),
        text=document.get("text"),
    )


def decode_quantity(document: Dict[str, Any]) -> Quantity:
    return Quantity(value=document.get("value"), unit=document.get("unit"))


# Questionnaires

def decode_questionnaire_item(document: Dict[str, Any]) -> QuestionnaireItem:
    return QuestionnaireItem(
        link_id=document.get("linkId"),
        text=document.get("text"),
        type=document.get("type"),
        answer_option=_many(
            document.get("answerOption"),
            lambda option: QuestionnaireAnswerOption(
                value_coding=_optional(option.get("valueCoding"), decode_coding)
            ),
        ),
        item=_many(document.get("item"), decode_questionnaire_item),
    )


def decode_questionnaire(document: Dict[str, Any]) -> Questionnaire:
    return Questionnaire(
        title=document.get("title"),
        url=document.get("url"),
        item=_many(document.get("item"), decode_questionnaire_item),
    )


def decode_questionnaire_response_item(document: Dict[str, Any]) -> QuestionnaireResponseItem:
    return QuestionnaireResponseItem(
        link_id=document.get("linkId"),
        answer=_many(
            document.get("answer"),
            lambda answer: QuestionnaireResponseAnswer(
                value_coding=_optional(answer.get("valueCoding"), decode_coding),
                value_string=answer.get("valueString"),
            ),
        ),
        item=_many(document.get("item"), decode_questionnaire_response_item),
    )


def decode_questionnaire_response(document: Dict[str, Any]) -> QuestionnaireResponse:
    return QuestionnaireResponse(
        questionnaire=_required(document, "questionnaire"),
        authored=parse_timestamp(document.get("authored")),
        item=_many(document.get("item"), decode_questionnaire_response_item),
    )


# Observations

def decode_observation(document: Dict[str, Any]) -> Observation:
    return Observation(
        code=_optional(document.get("code"), decode_codeable_concept),
        value_quantity=_optional(document.get("valueQuantity"), decode_quantity),
        effective_date_time=parse_timestamp(document.get("effectiveDateTime")),
        component=_many(
            document.get("component"),
            lambda component: ObservationComponent(
                code=decode_codeable_concept(component.get("code") or {}),
                value_quantity=_optional(component.get("valueQuantity"), decode_quantity),
            ),
        ),
    )


# Medication requests

def _decode_timing(document: Dict[str, Any]) -> Timing:
    repeat = document.get("repeat")
    return Timing(
        repeat=TimingRepeat(
            frequency=repeat.get("frequency"),
            period=repeat.get("period"),
            period_unit=repeat.get("periodUnit"),
        ) if repeat is not None else None
    )


def _decode_dosage(document: Dict[str, Any]) -> Dosage:
    return Dosage(
        dose_and_rate=_many(
            document.get("doseAndRate"),
            lambda entry: DoseAndRate(
                dose_quantity=_optional(entry.get("doseQuantity"), decode_quantity)
            ),
        ),
        timing=_optional(document.get("timing"), _decode_timing),
    )


def decode_medication_request(document: Dict[str, Any]) -> MedicationRequest:
    return MedicationRequest(
        medication_reference=_optional(
            document.get("medicationReference"),
            lambda reference: Reference(reference=reference.get("reference")),
        ),
        dosage_instruction=_many(document.get("dosageInstruction"), _decode_dosage),
    )


# User-scoped records

def decode_patient_profile(document: Dict[str, Any]) -> PatientProfile:
    try:
        user_type = UserType(document.get("type", UserType.PATIENT.value))
    except ValueError as e:
        raise ValidationError(f"Unknown user type: {document.get('type')!r}") from e
    return PatientProfile(type=user_type, organization=document.get("organization"))


def decode_appointment(document: Dict[str, Any]) -> Appointment:
    return Appointment(
        status=_required(document, "status"),
        created=_required_timestamp(document, "created"),
        start=_required_timestamp(document, "start"),
        end=_required_timestamp(document, "end"),
    )


def decode_message(document: Dict[str, Any]) -> Message:
    return Message(
        type=_required(document, "type"),
        title=LocalizedText(_required(document, "title")),
        creation_date=_required_timestamp(document, "creationDate"),
        action=document.get("action"),
        reference=document.get("reference"),
        completion_date=parse_timestamp(document.get("completionDate")),
        due_date=parse_timestamp(document.get("dueDate")),
    )


def decode_symptom_score(document: Dict[str, Any]) -> SymptomScore:
    return SymptomScore(
        overall_score=_required(document, "overallScore"),
        dizziness_score=_required(document, "dizzinessScore"),
        date=_required_timestamp(document, "date"),
        physical_limits_score=document.get("physicalLimitsScore"),
        social_limits_score=document.get("socialLimitsScore"),
        symptom_frequency_score=document.get("symptomFrequencyScore"),
        quality_of_life_score=document.get("qualityOfLifeScore"),
        questionnaire_response_id=document.get("questionnaireResponseId"),
    )


DECODERS: Dict[type, Callable[[Dict[str, Any]], Any]] = {
    PatientProfile: decode_patient_profile,
    Questionnaire: decode_questionnaire,
    QuestionnaireResponse: decode_questionnaire_response,
    Observation: decode_observation,
    MedicationRequest: decode_medication_request,
    Appointment: decode_appointment,
    Message: decode_message,
    SymptomScore: decode_symptom_score,
}


def decode_document(model: type, document: Dict[str, Any]) -> Any:
    """Decode a JSON document into the given content model.

    Args:
        model: Target dataclass (a CollectionSelector's model)
        document: Parsed JSON object

    Returns:
        Instance of model

    Raises:
        ValidationError: If the model is unknown or the document is malformed
    """
    decoder = DECODERS.get(model)
    if decoder is None:
        raise ValidationError(f"No decoder for {model.__name__}")
    if not isinstance(document, dict):
        raise ValidationError(f"Expected JSON object for {model.__name__}")
    return decoder(document)

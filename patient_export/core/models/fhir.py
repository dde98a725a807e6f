"""
FHIR resource models consumed by the export pipeline.

Only the fields the export tables read are modelled. All fields that FHIR
marks optional stay Optional here; projectors decide how to render gaps.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from patient_export.core.models.tree import iter_leaves


@dataclass
class Coding:
    """A code from a terminology system."""

    system: Optional[str] = None
    code: Optional[str] = None
    display: Optional[str] = None


@dataclass
class CodeableConcept:
    coding: List[Coding] = field(default_factory=list)
    text: Optional[str] = None

    def contains_code(self, code: str) -> bool:
        """Check whether any coding carries the given code."""
        return any(coding.code == code for coding in self.coding)


@dataclass
class Quantity:
    value: Optional[float] = None
    unit: Optional[str] = None


@dataclass
class Reference:
    reference: Optional[str] = None


# Questionnaire definitions

@dataclass
class QuestionnaireAnswerOption:
    value_coding: Optional[Coding] = None


@dataclass
class QuestionnaireItem:
    """
    Node of a questionnaire item tree.

    Group items carry child items; only items without children are
    questions that can be answered and exported.
    """

    link_id: Optional[str] = None
    text: Optional[str] = None
    type: Optional[str] = None
    answer_option: List[QuestionnaireAnswerOption] = field(default_factory=list)
    item: List["QuestionnaireItem"] = field(default_factory=list)


@dataclass
class Questionnaire:
    title: Optional[str] = None
    url: Optional[str] = None
    item: List[QuestionnaireItem] = field(default_factory=list)

    def leaf_items(self) -> List[QuestionnaireItem]:
        """All answerable items in document order."""
        return list(iter_leaves(self.item))


# Questionnaire responses

@dataclass
class QuestionnaireResponseAnswer:
    value_coding: Optional[Coding] = None
    value_string: Optional[str] = None


@dataclass
class QuestionnaireResponseItem:
    link_id: Optional[str] = None
    answer: List[QuestionnaireResponseAnswer] = field(default_factory=list)
    item: List["QuestionnaireResponseItem"] = field(default_factory=list)


@dataclass
class QuestionnaireResponse:
    questionnaire: str
    authored: Optional[datetime] = None
    item: List[QuestionnaireResponseItem] = field(default_factory=list)

    def leaf_response_item(self, link_id: str) -> Optional[QuestionnaireResponseItem]:
        """Find the first leaf item with the given linkId.

        Args:
            link_id: Item linkId to look up

        Returns:
            Matching leaf item, or None if the response has no such answer
        """
        for leaf in iter_leaves(self.item):
            if leaf.link_id == link_id:
                return leaf
        return None

    def first_coded_answer(self, link_id: str) -> Optional[str]:
        """Code of the first answer's coding for a leaf item, if any."""
        leaf = self.leaf_response_item(link_id)
        if leaf is None or not leaf.answer:
            return None
        coding = leaf.answer[0].value_coding
        return coding.code if coding is not None else None


# Observations

@dataclass
class ObservationComponent:
    code: CodeableConcept = field(default_factory=CodeableConcept)
    value_quantity: Optional[Quantity] = None


@dataclass
class Observation:
    """
    Vital sign or lab observation.

    Blood pressure readings carry systolic/diastolic components instead of
    a top-level quantity.
    """

    code: Optional[CodeableConcept] = None
    value_quantity: Optional[Quantity] = None
    effective_date_time: Optional[datetime] = None
    component: List[ObservationComponent] = field(default_factory=list)

    def find_component(self, code: str) -> Optional[ObservationComponent]:
        """First component whose coding list contains the code."""
        for component in self.component:
            if component.code.contains_code(code):
                return component
        return None


# Medication requests

@dataclass
class TimingRepeat:
    frequency: Optional[int] = None
    period: Optional[float] = None
    period_unit: Optional[str] = None


@dataclass
class Timing:
    repeat: Optional[TimingRepeat] = None


@dataclass
class DoseAndRate:
    dose_quantity: Optional[Quantity] = None


@dataclass
class Dosage:
    dose_and_rate: List[DoseAndRate] = field(default_factory=list)
    timing: Optional[Timing] = None


@dataclass
class MedicationRequest:
    """
    Prescription of a medication for a patient.

    medication_reference points into the medication catalog as
    ``medications/{medicationCode}/drugs/{drugCode}``.
    """

    medication_reference: Optional[Reference] = None
    dosage_instruction: List[Dosage] = field(default_factory=list)

    def reference_parts(self) -> List[str]:
        reference = self.medication_reference.reference if self.medication_reference else None
        return (reference or "").split("/")

    def dose_quantity(self) -> Optional[Quantity]:
        if not self.dosage_instruction or not self.dosage_instruction[0].dose_and_rate:
            return None
        return self.dosage_instruction[0].dose_and_rate[0].dose_quantity

    def frequency_per_day(self) -> Optional[int]:
        if not self.dosage_instruction:
            return None
        timing = self.dosage_instruction[0].timing
        if timing is None or timing.repeat is None:
            return None
        return timing.repeat.frequency

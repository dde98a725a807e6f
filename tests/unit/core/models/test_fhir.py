"""Tests for FHIR model accessors."""
from patient_export.core.models import (
    CodeableConcept,
    Coding,
    Dosage,
    DoseAndRate,
    MedicationRequest,
    Observation,
    ObservationComponent,
    Quantity,
    QuestionnaireResponse,
    QuestionnaireResponseAnswer,
    QuestionnaireResponseItem,
    Reference,
)


def answered(link_id, code=None):
    answer = QuestionnaireResponseAnswer(value_coding=Coding(code=code)) if code else None
    return QuestionnaireResponseItem(link_id=link_id, answer=[answer] if answer else [])


class TestQuestionnaireResponse:
    def test_leaf_response_item_finds_nested_leaf(self):
        response = QuestionnaireResponse(
            questionnaire="q",
            item=[QuestionnaireResponseItem(link_id="group", item=[answered("q1", "2")])],
        )

        assert response.leaf_response_item("q1").link_id == "q1"

    def test_leaf_response_item_ignores_groups(self):
        response = QuestionnaireResponse(
            questionnaire="q",
            item=[QuestionnaireResponseItem(link_id="group", item=[answered("q1")])],
        )

        assert response.leaf_response_item("group") is None

    def test_first_coded_answer(self):
        item = QuestionnaireResponseItem(
            link_id="q1",
            answer=[
                QuestionnaireResponseAnswer(value_coding=Coding(code="first")),
                QuestionnaireResponseAnswer(value_coding=Coding(code="second")),
            ],
        )
        response = QuestionnaireResponse(questionnaire="q", item=[item])

        assert response.first_coded_answer("q1") == "first"

    def test_first_coded_answer_missing(self):
        response = QuestionnaireResponse(questionnaire="q", item=[answered("q1")])

        assert response.first_coded_answer("q1") is None
        assert response.first_coded_answer("unknown") is None

    def test_first_coded_answer_without_coding(self):
        item = QuestionnaireResponseItem(
            link_id="q1", answer=[QuestionnaireResponseAnswer(value_string="free text")]
        )
        response = QuestionnaireResponse(questionnaire="q", item=[item])

        assert response.first_coded_answer("q1") is None


class TestObservation:
    def test_find_component_matches_any_coding(self):
        component = ObservationComponent(
            code=CodeableConcept(coding=[Coding(code="other"), Coding(code="8480-6")]),
            value_quantity=Quantity(120, "mmHg"),
        )
        observation = Observation(component=[component])

        assert observation.find_component("8480-6") is component
        assert observation.find_component("8462-4") is None


class TestMedicationRequest:
    def test_reference_parts(self):
        request = MedicationRequest(medication_reference=Reference("medications/1/drugs/2"))
        assert request.reference_parts() == ["medications", "1", "drugs", "2"]

    def test_reference_parts_without_reference(self):
        assert MedicationRequest().reference_parts() == [""]

    def test_dose_quantity_and_frequency_absent(self):
        request = MedicationRequest(dosage_instruction=[Dosage()])
        assert request.dose_quantity() is None
        assert request.frequency_per_day() is None

    def test_dose_quantity_present(self):
        request = MedicationRequest(
            dosage_instruction=[Dosage(dose_and_rate=[DoseAndRate(Quantity(1, "tablet"))])]
        )
        assert request.dose_quantity() == Quantity(1, "tablet")

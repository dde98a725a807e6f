"""Tests for record models."""
from patient_export.core.models import ClinicalRecord, LocalizedText, PatientProfile, UserType


class TestLocalizedText:
    def test_plain_string(self):
        assert LocalizedText("Hello").localize("de") == "Hello"

    def test_exact_language(self):
        text = LocalizedText({"en": "Hello", "de": "Hallo"})
        assert text.localize("de") == "Hallo"

    def test_language_prefix_match(self):
        text = LocalizedText({"en": "Hello", "de": "Hallo"})
        assert text.localize("de-CH") == "Hallo"
        assert text.localize("de_DE") == "Hallo"

    def test_falls_back_to_default_language(self):
        text = LocalizedText({"en": "Hello", "de": "Hallo"})
        assert text.localize() == "Hello"
        assert text.localize("fr") == "Hello"

    def test_falls_back_to_any_value(self):
        assert LocalizedText({"es": "Hola"}).localize() == "Hola"

    def test_empty_mapping(self):
        assert LocalizedText({}).localize() == ""


class TestClinicalRecord:
    def test_is_immutable_envelope(self):
        record = ClinicalRecord("u1", PatientProfile(organization="stanford"))
        assert record.id == "u1"
        assert record.content.type == UserType.PATIENT
        assert record == ClinicalRecord("u1", PatientProfile(organization="stanford"))

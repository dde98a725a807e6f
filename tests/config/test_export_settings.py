"""Tests for export settings."""
from patient_export.config import export_settings


class TestExportSettings:
    def test_delimiters(self):
        assert export_settings.CSV_FIELD_DELIMITER == ";"
        assert export_settings.CSV_ROW_DELIMITER == "\n"

    def test_formula_prefixes(self):
        assert set(export_settings.FORMULA_PREFIXES) == {"=", "+", "-", "@"}

    def test_compression_level_in_zlib_range(self):
        assert 0 <= export_settings.ZIP_COMPRESSION_LEVEL <= 9

    def test_kccq_slots_in_column_order(self):
        assert list(export_settings.KCCQ_QUESTION_LINK_IDS) == [
            "q1a", "q1b", "q1c", "q2", "q3", "q4", "q5",
            "q6", "q7", "q8a", "q8b", "q8c", "q9",
        ]

    def test_blood_pressure_codes_distinct(self):
        assert export_settings.LOINC_SYSTOLIC != export_settings.LOINC_DIASTOLIC

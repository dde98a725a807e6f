"""
Export pipeline constants.

Centralized configuration for table encoding, archive compression,
instrument link ids and document store keys used across the export
pipeline. Deployment-tunable values can be overridden via environment.
"""
import os

# Table encoding
CSV_FIELD_DELIMITER = ";"
"""Cell delimiter (clinical free text often contains commas)"""

CSV_ROW_DELIMITER = "\n"
"""Row delimiter, no trailing newline after the last row"""

FORMULA_PREFIXES = ("=", "+", "-", "@")
"""Leading characters a spreadsheet would evaluate as a formula"""

# Archive
ZIP_COMPRESSION_LEVEL = int(os.getenv("EXPORT_ZIP_COMPRESSION_LEVEL", "9"))
"""Deflate level for archive entries (9 = maximum compression)"""

# Localization
DEFAULT_LANGUAGE = os.getenv("EXPORT_DEFAULT_LANGUAGE", "en")
"""Fallback language when resolving localized message titles"""

# Observation coding
LOINC_SYSTOLIC = "8480-6"
LOINC_DIASTOLIC = "8462-4"

# KCCQ instrument
KCCQ_QUESTIONNAIRE_URL = os.getenv(
    "EXPORT_KCCQ_QUESTIONNAIRE_URL",
    "http://spezi.health/fhir/questionnaire/9528ccc2-d1be-4c4c-9c3c-19f78e51ec19",
)
"""Only responses to this questionnaire end up in questionnaireResponses_kccq.csv"""

KCCQ_QUESTION_LINK_IDS = {
    "q1a": "question1a",
    "q1b": "question1b",
    "q1c": "question1c",
    "q2": "question2",
    "q3": "question3",
    "q4": "question4",
    "q5": "question5",
    "q6": "question6",
    "q7": "question7",
    "q8a": "question8a",
    "q8b": "question8b",
    "q8c": "question8c",
    "q9": "question9",
}
"""Column name -> response item linkId, in column order"""

# Document store
REDIS_KEY_PREFIX = os.getenv("EXPORT_REDIS_KEY_PREFIX", "store:")
"""Prefix for all collection hashes in the Redis document store"""

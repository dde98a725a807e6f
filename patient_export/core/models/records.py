"""
Clinical record envelope and flat user-scoped models.

Records are read-only snapshots returned by the document store for the
duration of one export call.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Generic, Optional, TypeVar, Union

from patient_export.config.export_settings import DEFAULT_LANGUAGE

T = TypeVar("T")


@dataclass(frozen=True)
class ClinicalRecord(Generic[T]):
    """Document identity plus typed payload."""

    id: str
    content: T


class UserType(Enum):
    """Account types known to the user directory."""
    ADMIN = "admin"
    OWNER = "owner"
    CLINICIAN = "clinician"
    PATIENT = "patient"


@dataclass
class PatientProfile:
    type: UserType = UserType.PATIENT
    organization: Optional[str] = None


@dataclass
class LocalizedText:
    """
    Text that is either a plain string or a language -> string mapping.

    Language keys use BCP 47 / POSIX style tags ("en", "en-US", "de_DE").
    """

    content: Union[str, Dict[str, str]]

    def localize(self, *languages: str) -> str:
        """Resolve to a display string.

        Each requested language is tried as exact tag, then by its primary
        subtag. Falls back to the default language, then to any value.

        Args:
            *languages: Preferred languages, most preferred first

        Returns:
            Display string ("" if no translation exists at all)
        """
        if isinstance(self.content, str):
            return self.content

        for language in (*languages, DEFAULT_LANGUAGE):
            exact = self.content.get(language)
            if exact:
                return exact
            prefix = language.replace("_", "-").split("-")[0]
            prefix_match = self.content.get(prefix)
            if prefix_match:
                return prefix_match

        return next(iter(self.content.values()), "")


@dataclass
class Appointment:
    status: str
    created: datetime
    start: datetime
    end: datetime


@dataclass
class Message:
    """User-facing task or notification."""

    type: str
    title: LocalizedText
    creation_date: datetime
    action: Optional[str] = None
    reference: Optional[str] = None
    completion_date: Optional[datetime] = None
    due_date: Optional[datetime] = None


@dataclass
class SymptomScore:
    """KCCQ-derived symptom scores for one questionnaire response."""

    overall_score: float
    dizziness_score: float
    date: datetime
    physical_limits_score: Optional[float] = None
    social_limits_score: Optional[float] = None
    symptom_frequency_score: Optional[float] = None
    quality_of_life_score: Optional[float] = None
    questionnaire_response_id: Optional[str] = None

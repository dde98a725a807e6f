"""
Export scopes.

A scope is the already-authorized target set of one export call. A
single-user scope may additionally be limited to one organization.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ScopeKind(Enum):
    SINGLE_USER = "single_user"
    ORGANIZATION = "organization"
    ALL = "all"


@dataclass(frozen=True)
class ExportScope:
    """Target of an export: one user, one organization, or every patient."""

    kind: ScopeKind
    target: Optional[str] = None
    # Single-user only: the user must belong to this organization
    within_organization: Optional[str] = None

    @classmethod
    def single_user(
        cls,
        user_id: str,
        within_organization: Optional[str] = None,
    ) -> "ExportScope":
        return cls(ScopeKind.SINGLE_USER, user_id, within_organization)

    @classmethod
    def organization(cls, organization_id: str) -> "ExportScope":
        return cls(ScopeKind.ORGANIZATION, organization_id)

    @classmethod
    def all(cls) -> "ExportScope":
        return cls(ScopeKind.ALL)

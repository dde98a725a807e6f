"""
Pydantic models for the export call.

Request/response shapes exchanged with the transport layer.
"""
from typing import Optional

from pydantic import BaseModel, Field

from patient_export.core.exceptions import ForbiddenError
from patient_export.core.export.scope import ExportScope, ScopeKind


class ExportDataRequest(BaseModel):
    """Request model for a patient data export"""

    user_id: Optional[str] = Field(
        None, alias="userId", description="Export only this user (omit for caller's full scope)"
    )

    def to_scope(self, caller_scope: ExportScope) -> ExportScope:
        """Narrow the caller's authorized scope to the requested user, if any.

        An organization-scoped caller keeps its organization as a limit on
        the single user; membership is checked when the export runs.

        Raises:
            ForbiddenError: If a single-user caller asks for another user
        """
        if self.user_id is None:
            return caller_scope
        if caller_scope.kind == ScopeKind.SINGLE_USER:
            if caller_scope.target != self.user_id:
                raise ForbiddenError(f"Export of user {self.user_id} not permitted")
            return caller_scope
        if caller_scope.kind == ScopeKind.ORGANIZATION:
            return ExportScope.single_user(self.user_id, within_organization=caller_scope.target)
        return ExportScope.single_user(self.user_id)


class ExportDataResponse(BaseModel):
    """Response model carrying the zip archive"""

    content: str = Field(..., description="Base64 encoded zip archive")

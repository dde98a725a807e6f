"""Core domain exceptions.

All exceptions raised by core logic inherit from CoreError.
Adapters catch provider-specific errors and re-raise as these.
"""


class CoreError(Exception):
    """Base for all core domain errors."""
    pass


class NotFoundError(CoreError):
    """Requested export target does not exist."""
    pass


class QueryError(CoreError):
    """Data store query failed."""
    pass


class ArchiveBuildError(CoreError):
    """Archive writer or table generation failed."""
    pass


class ValidationError(CoreError):
    """Data validation failed."""
    pass


class ForbiddenError(CoreError):
    """Requested export target lies outside the caller's scope."""
    pass

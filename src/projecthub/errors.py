"""Domain errors raised by project operations."""


class ProjectHubError(Exception):
    """Base class for ProjectHub domain errors."""

    pass


class ProjectValidationError(ProjectHubError):
    """Raised when project input fails validation."""

    pass


class ProjectConflictError(ProjectHubError):
    """Raised when a project would violate a uniqueness rule."""

    pass


class RecordExistsError(ProjectHubError):
    """Raised by stores that enforce primary keys themselves."""

    pass

"""Error taxonomy shared by the stores and the HTTP layer."""


class TaskboardError(Exception):
    """Base class for errors raised by Taskboard."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskboardError):
    """Malformed or missing input, rejected before any store access."""

    status_code = 400


class NotFoundOrUnauthorizedError(TaskboardError):
    """The target does not exist or belongs to another user."""

    status_code = 404


class ForbiddenError(TaskboardError):
    """The entity exists but belongs to another user (read paths only)."""

    status_code = 403


class UpstreamStoreError(TaskboardError):
    """The persistence layer failed."""

    status_code = 500

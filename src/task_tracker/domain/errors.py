class TaskError(Exception):
    """Base for errors surfaced to API callers as ``{"error": message}``."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskError):
    status_code = 400


class BadRequestError(TaskError):
    status_code = 400


class NotFoundError(TaskError):
    status_code = 404


class StoreCorruptedError(TaskError):
    """The task file exists but cannot be decoded into a task list."""

    status_code = 500

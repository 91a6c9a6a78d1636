"""
Typed service errors.

Crud and storage code raises these; the handler registered in
`surveyhub_core.app.main` turns them into JSON error bodies with the
matching HTTP status.
"""


class ServiceError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    status_code = 404


class InvalidPayloadError(ServiceError):
    status_code = 400


class InvalidFileError(InvalidPayloadError):
    pass


class ResponsePeriodError(ServiceError):
    status_code = 403


class ResponseEditForbiddenError(ServiceError):
    status_code = 403


class StorageError(ServiceError):
    status_code = 500

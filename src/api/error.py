from fastapi import status
from libs.result import Error

NOT_FOUND_SUFFIX = "_NOT_FOUND"

CLIENT_ERROR_STATUS = {
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "INVALID_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "JOB_NOT_DELETABLE": status.HTTP_403_FORBIDDEN,
    "INVALID_STATUS_TRANSITION": status.HTTP_403_FORBIDDEN,
    "BUSINESS_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "CLEANER_ALREADY_LINKED": status.HTTP_409_CONFLICT,
    "CLEANER_ACTIVE_ELSEWHERE": status.HTTP_409_CONFLICT,
    "EMAIL_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "CLIENT_HAS_INVOICES": status.HTTP_409_CONFLICT,
    "CLIENT_HAS_ACTIVE_JOBS": status.HTTP_409_CONFLICT,
    "INVOICE_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "VALIDATION_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "CANNOT_ADD_OWNER": status.HTTP_400_BAD_REQUEST,
    "INVALID_INVITATION": status.HTTP_400_BAD_REQUEST,
    "INVITATION_EXPIRED": status.HTTP_400_BAD_REQUEST,
    "INVALID_CURRENT_PASSWORD": status.HTTP_400_BAD_REQUEST,
    "ROLE_LOCKED": status.HTTP_400_BAD_REQUEST,
    "INVALID_WEBHOOK_SIGNATURE": status.HTTP_400_BAD_REQUEST,
}

DEPENDENCY_ERROR_CODES = (
    "IDENTITY_PROVIDER_ERROR",
    "PAYMENT_PROVIDER_ERROR",
    "STORAGE_ERROR",
    "EMAIL_ERROR",
    "DEPENDENCY_ERROR",
)


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(
        self, base_error: Error, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    ):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


def to_http_error(error: Error) -> Exception:
    """Map a use case error onto the exception the API answers with"""
    if error.code in CLIENT_ERROR_STATUS:
        return ClientError(error, status_code=CLIENT_ERROR_STATUS[error.code])
    if error.code.endswith(NOT_FOUND_SUFFIX):
        return ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    if error.code in DEPENDENCY_ERROR_CODES:
        return ServerError(error, status_code=status.HTTP_502_BAD_GATEWAY)
    return ServerError(error)

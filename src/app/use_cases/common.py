"""
Errors shared by every use case.
"""

from typing import Dict, List

from libs.result import Error
from src.app.services.errors import ProviderError

FORBIDDEN = Error("FORBIDDEN", "You do not have permission to perform this action")
CLIENT_NOT_FOUND = Error("CLIENT_NOT_FOUND", "Client not found")
JOB_NOT_FOUND = Error("JOB_NOT_FOUND", "Job not found")
INVOICE_NOT_FOUND = Error("INVOICE_NOT_FOUND", "Invoice not found")

_PROVIDER_CODES = {
    "identity": "IDENTITY_PROVIDER_ERROR",
    "payment": "PAYMENT_PROVIDER_ERROR",
    "storage": "STORAGE_ERROR",
    "email": "EMAIL_ERROR",
}


def validation_error(details: Dict[str, List[str]], message: str = "Validation failed") -> Error:
    """Field -> messages map wrapped in a VALIDATION_ERROR"""
    return Error("VALIDATION_ERROR", message, details=details)


def dependency_error(exc: ProviderError) -> Error:
    """Generic upstream failure; provider details stay in the logs"""
    code = _PROVIDER_CODES.get(exc.provider, "DEPENDENCY_ERROR")
    return Error(code, "An external service is unavailable, please try again later")

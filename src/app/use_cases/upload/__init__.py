"""
Upload Use Cases
"""

from .upload_image_use_case import (
    ALLOWED_CONTENT_TYPES,
    MAX_FILE_SIZE,
    UploadImageResponse,
    UploadImageUseCase,
    storage_file_name,
)

__all__ = [
    "UploadImageUseCase",
    "UploadImageResponse",
    "storage_file_name",
    "MAX_FILE_SIZE",
    "ALLOWED_CONTENT_TYPES",
]

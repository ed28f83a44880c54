"""
Job Use Cases
"""

from .create_job_use_case import CreateJobUseCase
from .delete_job_use_case import DeleteJobUseCase
from .dtos import (
    ChecklistItemResponse,
    CreateJobResponse,
    DeleteJobResponse,
    JobResponse,
    PhotoArchive,
    PhotoResponse,
    WhatsAppLinkResponse,
)
from .get_job_use_case import GetJobUseCase
from .job_media_use_cases import (
    AddJobPhotoUseCase,
    DownloadJobPhotosUseCase,
    UpdateChecklistItemUseCase,
)
from .job_whatsapp_use_case import JobWhatsAppLinkUseCase
from .list_jobs_use_case import ListJobsUseCase, ListTodayJobsUseCase
from .update_job_use_case import UpdateJobUseCase

__all__ = [
    "CreateJobUseCase",
    "ListJobsUseCase",
    "ListTodayJobsUseCase",
    "GetJobUseCase",
    "UpdateJobUseCase",
    "DeleteJobUseCase",
    "AddJobPhotoUseCase",
    "UpdateChecklistItemUseCase",
    "DownloadJobPhotosUseCase",
    "JobWhatsAppLinkUseCase",
    "JobResponse",
    "CreateJobResponse",
    "DeleteJobResponse",
    "ChecklistItemResponse",
    "PhotoResponse",
    "PhotoArchive",
    "WhatsAppLinkResponse",
]

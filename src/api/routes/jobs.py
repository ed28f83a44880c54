from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel, Field

from src.api.error import to_http_error
from src.app.services.image_storage import IImageStorage
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.jobs import (
    AddJobPhotoUseCase,
    ChecklistItemResponse,
    CreateJobResponse,
    CreateJobUseCase,
    DeleteJobResponse,
    DeleteJobUseCase,
    DownloadJobPhotosUseCase,
    GetJobUseCase,
    JobResponse,
    JobWhatsAppLinkUseCase,
    ListJobsUseCase,
    ListTodayJobsUseCase,
    PhotoResponse,
    UpdateChecklistItemUseCase,
    UpdateJobUseCase,
    WhatsAppLinkResponse,
)
from src.depends import get_current_user, get_image_storage, get_tenant_resolver, get_unit_of_work
from src.domain.actor import Actor
from src.domain.entities import JobFrequency, JobStatus, JobType, PhotoType

router = APIRouter(prefix="/jobs", tags=["Jobs"])

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class CreateJobRequest(BaseModel):
    """
    Job HTTP request payload

    RECURRING jobs need a frequency; the series is materialised as twelve
    occurrences and the checklist is attached to the first job only.
    """

    client_id: UUID
    scheduled_date: datetime
    type: JobType = JobType.ONE_OFF
    frequency: Optional[JobFrequency] = None
    scheduled_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    cleaner_id: Optional[UUID] = None
    notes: Optional[str] = None
    reminder_enabled: bool = True
    reminder_time: Optional[str] = Field(
        None, description="30 minutes, 1 hour, 2 hours, 1 day or 2 days"
    )
    checklist: Optional[List[str]] = None


class UpdateJobRequest(BaseModel):
    """Partial update; cleaners may only send status"""

    status: Optional[JobStatus] = None
    scheduled_date: Optional[datetime] = None
    scheduled_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    cleaner_id: Optional[str] = Field(None, description="Empty string unassigns")
    notes: Optional[str] = None
    reminder_enabled: Optional[bool] = None
    reminder_time: Optional[str] = None


class AddPhotoRequest(BaseModel):
    image_url: str = Field(..., min_length=1)
    photo_type: PhotoType


class UpdateChecklistItemRequest(BaseModel):
    completed: bool


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CreateJobResponse)
async def create_job(
    request: CreateJobRequest,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Schedule a job (or a recurring series)

    Raises:
        - 403 Forbidden: Caller cannot manage jobs
        - 404 Not Found: CLIENT_NOT_FOUND, CLEANER_NOT_FOUND
        - 422 Unprocessable Entity: Invalid schedule
    """
    result = await CreateJobUseCase(uow, tenants).execute(
        actor,
        client_id=request.client_id,
        scheduled_date=request.scheduled_date,
        type=request.type,
        frequency=request.frequency,
        scheduled_time=request.scheduled_time,
        cleaner_id=request.cleaner_id,
        notes=request.notes,
        reminder_enabled=request.reminder_enabled,
        reminder_time=request.reminder_time,
        checklist=request.checklist,
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("", response_model=List[JobResponse])
async def list_jobs(
    client_id: Optional[UUID] = Query(None),
    status: Optional[JobStatus] = Query(None),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Jobs of the caller's business; cleaners only see jobs assigned to them
    """
    result = await ListJobsUseCase(uow, tenants).execute(
        actor, client_id=client_id, status=status, start=start_date, end=end_date
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/today", response_model=List[JobResponse])
async def list_today_jobs(
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """Jobs scheduled for the current UTC day"""
    result = await ListTodayJobsUseCase(uow, tenants).execute(actor)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: UUID,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Raises:
        - 404 Not Found: JOB_NOT_FOUND (also for jobs the caller cannot see)
    """
    result = await GetJobUseCase(uow, tenants).execute(actor, job_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: UUID,
    request: UpdateJobRequest,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Raises:
        - 403 Forbidden: INVALID_STATUS_TRANSITION or missing permission
        - 404 Not Found: JOB_NOT_FOUND, CLEANER_NOT_FOUND
        - 422 Unprocessable Entity: Invalid schedule
    """
    changes = request.model_dump(exclude_unset=True)
    result = await UpdateJobUseCase(uow, tenants).execute(actor, job_id, changes)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.delete("/{job_id}", response_model=DeleteJobResponse)
async def delete_job(
    job_id: UUID,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Raises:
        - 403 Forbidden: JOB_NOT_DELETABLE unless the job is still SCHEDULED
        - 404 Not Found: JOB_NOT_FOUND
    """
    result = await DeleteJobUseCase(uow, tenants).execute(actor, job_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post("/{job_id}/photos", status_code=status.HTTP_201_CREATED, response_model=PhotoResponse)
async def add_job_photo(
    job_id: UUID,
    request: AddPhotoRequest,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Attach an uploaded image to a job

    Raises:
        - 404 Not Found: JOB_NOT_FOUND
    """
    result = await AddJobPhotoUseCase(uow, tenants).execute(
        actor, job_id, request.image_url, request.photo_type
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/{job_id}/photos/download")
async def download_job_photos(
    job_id: UUID,
    photo_type: Optional[PhotoType] = Query(None),
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
    storage: IImageStorage = Depends(get_image_storage),
):
    """
    Zip archive of the job's photos

    Raises:
        - 404 Not Found: JOB_NOT_FOUND, PHOTOS_NOT_FOUND
        - 502 Bad Gateway: Image storage unavailable
    """
    result = await DownloadJobPhotosUseCase(uow, tenants, storage).execute(
        actor, job_id, photo_type
    )

    if result.is_err():
        raise to_http_error(result.error)

    archive = result.value
    return Response(
        content=archive.content,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{archive.file_name}"'},
    )


@router.put("/{job_id}/checklist/{item_id}", response_model=ChecklistItemResponse)
async def update_checklist_item(
    job_id: UUID,
    item_id: UUID,
    request: UpdateChecklistItemRequest,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Raises:
        - 404 Not Found: JOB_NOT_FOUND, CHECKLIST_ITEM_NOT_FOUND
    """
    result = await UpdateChecklistItemUseCase(uow, tenants).execute(
        actor, job_id, item_id, request.completed
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/{job_id}/whatsapp/photos", response_model=WhatsAppLinkResponse)
async def job_photos_whatsapp_link(
    job_id: UUID,
    photo_type: Optional[PhotoType] = Query(None),
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    wa.me link sharing the job's photos with the client

    Answers with an error message instead of a link when the client has no phone.
    """
    result = await JobWhatsAppLinkUseCase(uow, tenants).photos_link(actor, job_id, photo_type)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/{job_id}/whatsapp/completion", response_model=WhatsAppLinkResponse)
async def job_completion_whatsapp_link(
    job_id: UUID,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """wa.me link telling the client the job is done"""
    result = await JobWhatsAppLinkUseCase(uow, tenants).completion_link(actor, job_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value

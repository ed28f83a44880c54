"""
Job Use Case DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import Client, Invoice, Job, JobChecklistItem, JobPhoto, User


class ChecklistItemResponse(BaseModel):
    id: str
    job_id: str
    item_text: str
    completed: bool

    @classmethod
    def from_entity(cls, item: JobChecklistItem) -> "ChecklistItemResponse":
        return cls(
            id=str(item.id), job_id=str(item.job_id), item_text=item.item_text,
            completed=item.completed,
        )


class PhotoResponse(BaseModel):
    id: str
    job_id: str
    image_url: str
    photo_type: str
    created_at: datetime

    @classmethod
    def from_entity(cls, photo: JobPhoto) -> "PhotoResponse":
        return cls(
            id=str(photo.id),
            job_id=str(photo.job_id),
            image_url=photo.image_url,
            photo_type=photo.photo_type.value,
            created_at=photo.created_at,
        )


class JobClientSummary(BaseModel):
    id: str
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None

    @classmethod
    def from_entity(cls, client: Client) -> "JobClientSummary":
        return cls(id=str(client.id), name=client.name, phone=client.phone, address=client.address)


class JobCleanerSummary(BaseModel):
    id: str
    email: str

    @classmethod
    def from_entity(cls, user: User) -> "JobCleanerSummary":
        return cls(id=str(user.id), email=user.email)


class JobInvoiceSummary(BaseModel):
    id: str
    invoice_number: str
    total_amount: float
    status: str

    @classmethod
    def from_entity(cls, invoice: Invoice) -> "JobInvoiceSummary":
        return cls(
            id=str(invoice.id),
            invoice_number=invoice.invoice_number,
            total_amount=invoice.total_amount,
            status=invoice.status.value,
        )


class JobResponse(BaseModel):
    """A job with its checklist, photos and related records"""

    id: str
    business_id: str
    client_id: str
    cleaner_id: Optional[str] = None
    type: str
    frequency: Optional[str] = None
    scheduled_date: datetime
    scheduled_time: Optional[str] = None
    status: str
    notes: Optional[str] = None
    reminder_enabled: bool
    reminder_time: str
    reminder_sent: bool
    created_at: datetime
    updated_at: datetime
    client: Optional[JobClientSummary] = None
    cleaner: Optional[JobCleanerSummary] = None
    checklist: List[ChecklistItemResponse] = []
    photos: List[PhotoResponse] = []
    invoice: Optional[JobInvoiceSummary] = None

    @classmethod
    def from_entity(cls, job: Job, **related) -> "JobResponse":
        return cls(
            id=str(job.id),
            business_id=str(job.business_id),
            client_id=str(job.client_id),
            cleaner_id=str(job.cleaner_id) if job.cleaner_id else None,
            type=job.type.value,
            frequency=job.frequency.value if job.frequency else None,
            scheduled_date=job.scheduled_date,
            scheduled_time=job.scheduled_time,
            status=job.status.value,
            notes=job.notes,
            reminder_enabled=job.reminder_enabled,
            reminder_time=job.reminder_time,
            reminder_sent=job.reminder_sent,
            created_at=job.created_at,
            updated_at=job.updated_at,
            **related,
        )


class CreateJobResponse(BaseModel):
    """The created job plus the recurring occurrences generated with it"""

    job: JobResponse
    recurring_created: int = 0


class DeleteJobResponse(BaseModel):
    status: str


class WhatsAppLinkResponse(BaseModel):
    """wa.me link; url and phone are null with an error when the client has no phone"""

    whatsapp_url: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def missing_phone(cls) -> "WhatsAppLinkResponse":
        return cls(error="Client phone number not available")


class PhotoArchive(BaseModel):
    """Zip archive of a job's photos"""

    file_name: str
    content: bytes

"""
Assembles JobResponse views with their related rows loaded in batches.
"""

from typing import Dict, List, Sequence
from uuid import UUID

from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import JOB_NOT_FOUND
from src.domain.actor import Actor
from src.domain.entities import Job
from src.domain.permissions import Action, can

from .dtos import (
    ChecklistItemResponse,
    JobCleanerSummary,
    JobClientSummary,
    JobInvoiceSummary,
    JobResponse,
    PhotoResponse,
)


async def build_job_views(
    uow: UnitOfWork,
    business_id: UUID,
    jobs: Sequence[Job],
    include_invoices: bool = False,
) -> List[JobResponse]:
    """
    Build responses for jobs of one business.

    Invoices are only attached when include_invoices is set; cleaners never
    see invoice data.
    """
    if not jobs:
        return []

    job_ids = [job.id for job in jobs]
    clients = {
        c.id: c
        for c in await uow.clients.get_many(business_id, list({j.client_id for j in jobs}))
    }
    cleaner_ids = list({j.cleaner_id for j in jobs if j.cleaner_id})
    cleaners = {u.id: u for u in await uow.users.get_by_ids(cleaner_ids)} if cleaner_ids else {}

    checklist: Dict[UUID, List[ChecklistItemResponse]] = {}
    for item in await uow.jobs.list_checklist(job_ids):
        checklist.setdefault(item.job_id, []).append(ChecklistItemResponse.from_entity(item))

    photos: Dict[UUID, List[PhotoResponse]] = {}
    for photo in await uow.jobs.list_photos(job_ids):
        photos.setdefault(photo.job_id, []).append(PhotoResponse.from_entity(photo))

    invoices = {}
    if include_invoices:
        invoices = {i.job_id: i for i in await uow.invoices.list_by_jobs(business_id, job_ids)}

    views = []
    for job in jobs:
        client = clients.get(job.client_id)
        cleaner = cleaners.get(job.cleaner_id) if job.cleaner_id else None
        invoice = invoices.get(job.id)
        views.append(
            JobResponse.from_entity(
                job,
                client=JobClientSummary.from_entity(client) if client else None,
                cleaner=JobCleanerSummary.from_entity(cleaner) if cleaner else None,
                checklist=checklist.get(job.id, []),
                photos=photos.get(job.id, []),
                invoice=JobInvoiceSummary.from_entity(invoice) if invoice else None,
            )
        )
    return views


async def load_visible_job(
    uow: UnitOfWork, tenants: TenantResolver, actor: Actor, job_id: UUID
) -> Result[Job]:
    """
    Job of the caller's business.

    Cleaners only reach jobs assigned to them; anything else is JOB_NOT_FOUND.
    """
    tenant = await tenants.resolve(actor.id, actor.role)
    if tenant.is_err():
        return tenant

    job = await uow.jobs.get(tenant.value, job_id)
    if job is None:
        return Return.err(JOB_NOT_FOUND)
    if not can(actor.role, Action.JOB_VIEW_ALL) and job.cleaner_id != actor.id:
        return Return.err(JOB_NOT_FOUND)
    return Return.ok(job)

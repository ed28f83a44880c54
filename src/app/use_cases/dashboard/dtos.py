from typing import List, Optional

from pydantic import BaseModel

from src.app.use_cases.cleaners.dtos import BusinessSummary
from src.app.use_cases.jobs.dtos import JobResponse


class DashboardStatsResponse(BaseModel):
    """
    Home screen figures.

    Financial figures are only filled in for owners; the cleaner-specific
    lists stay empty for owners.
    """

    role: str
    today_jobs: int
    today_jobs_list: List[JobResponse]
    monthly_earnings: float = 0
    unpaid_invoices: int = 0
    business: Optional[BusinessSummary] = None
    upcoming_jobs: List[JobResponse] = []
    in_progress_jobs: List[JobResponse] = []
    completed_this_week: int = 0

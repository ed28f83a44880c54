"""
Report Use Cases
"""

from .business_report_use_case import GetBusinessReportUseCase
from .client_report_use_case import GetClientReportUseCase
from .dtos import (
    BusinessReportResponse,
    ClientReportResponse,
    ReportExport,
    ReportType,
)
from .export_report_use_case import ExportReportUseCase

__all__ = [
    "GetBusinessReportUseCase",
    "GetClientReportUseCase",
    "ExportReportUseCase",
    "BusinessReportResponse",
    "ClientReportResponse",
    "ReportExport",
    "ReportType",
]

"""
WhatsApp deep links with pre-filled messages.

Numbers without a country code are treated as UK numbers.
"""

import re
from datetime import datetime
from typing import Iterable, Optional
from urllib.parse import quote

from src.domain.entities import Business, Client, Invoice, Job, JobChecklistItem, JobPhoto
from src.domain.entities.enums import InvoiceStatus, PhotoType

_NON_DIAL_CHARS = re.compile(r"[^\d+]")


def format_phone(phone: str) -> str:
    """Normalise to E.164-ish digits without the leading plus"""
    clean = _NON_DIAL_CHARS.sub("", phone)
    if not clean.startswith("+"):
        clean = "+44" + clean[1:] if clean.startswith("0") else "+" + clean
    return clean.replace("+", "")


def build_link(phone: str, message: str) -> str:
    return f"https://wa.me/{format_phone(phone)}?text={quote(message, safe='')}"


def _long_date(value: datetime) -> str:
    return f"{value.day} {value.strftime('%B %Y')}"


def _short_date(value: datetime) -> str:
    return value.strftime("%d/%m/%Y")


def _signature(business: Business, prefix: str = "\n") -> str:
    text = f"{prefix}{business.name}"
    if business.phone:
        text += f"\n📞 {business.phone}"
    return text


def invoice_message(
    invoice: Invoice, business: Business, client: Client, job: Optional[Job] = None
) -> str:
    lines = [
        f"📄 *Invoice {invoice.invoice_number}*",
        "",
        f"Hello {client.name},",
        "",
        "Your invoice is ready:",
        "",
        f"*Amount:* £{invoice.amount:.2f}",
    ]
    if invoice.vat_amount > 0:
        lines.append(f"*VAT:* £{invoice.vat_amount:.2f}")
    lines += [f"*Total:* £{invoice.total_amount:.2f}", ""]
    lines.append(f"*Due Date:* {_long_date(invoice.due_date)}")
    if job is not None:
        lines.append(
            f"*Service:* {job.type.value.replace('_', ' ')} - {_short_date(job.scheduled_date)}"
        )
    paid = invoice.status == InvoiceStatus.PAID
    lines += ["", f"*Status:* {'✅ Paid' if paid else '⏳ Unpaid'}", ""]
    if not paid:
        lines += ["Please arrange payment at your earliest convenience.", ""]
    lines.append("Thank you for your business!")
    return "\n".join(lines) + _signature(business, prefix="\n\n")


def job_photos_message(
    job: Job,
    business: Business,
    client: Client,
    photos: Iterable[JobPhoto],
    photo_type: Optional[PhotoType] = None,
) -> str:
    if photo_type == PhotoType.BEFORE:
        header = ["📸 *Before Photos - Job Update*", "", f"Hello {client.name},", "",
                  "Here are the before photos from your cleaning job:", ""]
    elif photo_type == PhotoType.AFTER:
        header = ["✨ *After Photos - Job Complete*", "", f"Hello {client.name},", "",
                  "Your cleaning job is complete! Here are the after photos:", ""]
    else:
        header = ["📸 *Job Photos*", "", f"Hello {client.name},", "",
                  "Here are the photos from your cleaning job:", ""]

    lines = header + [f"*Job Date:* {_long_date(job.scheduled_date)}"]
    if job.scheduled_time:
        lines.append(f"*Time:* {job.scheduled_time}")
    if photo_type == PhotoType.AFTER:
        lines += ["", "✅ Job completed successfully!"]

    relevant = [p for p in photos if photo_type is None or p.photo_type == photo_type]
    if relevant:
        lines += ["", "*Photos:*"]
        lines += [f"{index}. {photo.image_url}" for index, photo in enumerate(relevant, 1)]

    lines += ["", f"Thank you for choosing {business.name}!"]
    message = "\n".join(lines)
    if business.phone:
        message += f"\n📞 {business.phone}"
    return message


def job_completion_message(
    job: Job,
    business: Business,
    client: Client,
    checklist: Iterable[JobChecklistItem],
    photos: Iterable[JobPhoto],
) -> str:
    lines = [
        "✨ *Job Completed*",
        "",
        f"Hello {client.name},",
        "",
        "Your cleaning job has been completed!",
        "",
        "*Job Details:*",
        f"• Date: {_long_date(job.scheduled_date)}",
    ]
    if job.scheduled_time:
        lines.append(f"• Time: {job.scheduled_time}")
    lines += [f"• Type: {job.type.value.replace('_', ' ')}", "• Status: ✅ Completed", ""]

    checklist = list(checklist)
    if checklist:
        done = sum(1 for item in checklist if item.completed)
        lines += [f"*Checklist:* {done}/{len(checklist)} items completed", ""]

    photos = list(photos)
    before = sum(1 for p in photos if p.photo_type == PhotoType.BEFORE)
    after = sum(1 for p in photos if p.photo_type == PhotoType.AFTER)
    if before:
        lines.append(f"📸 Before photos: {before}")
    if after:
        lines.append(f"✨ After photos: {after}")
    if photos:
        lines.append("")

    lines.append(f"Thank you for choosing {business.name}!")
    message = "\n".join(lines)
    if business.phone:
        message += f"\n📞 {business.phone}"
    return message

from io import BytesIO
from typing import Optional

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from src.app.services.invoice_renderer import IInvoiceRenderer
from src.domain.entities import Business, Client, Invoice, InvoiceStatus, Job


def _date(value) -> str:
    return value.strftime("%d/%m/%Y") if value else ""


class ReportLabInvoiceRenderer(IInvoiceRenderer):
    """A4 invoice laid out with the reportlab canvas"""

    def render(
        self, invoice: Invoice, business: Business, client: Client, job: Optional[Job] = None
    ) -> bytes:
        buf = BytesIO()
        c = canvas.Canvas(buf, pagesize=A4)
        width, height = A4
        right = width - 50

        # Header
        y = height - 60
        c.setFont("Helvetica-Bold", 22)
        c.drawString(50, y, business.name)
        c.setFont("Helvetica-Bold", 16)
        c.drawRightString(right, y, invoice.invoice_number)
        y -= 20
        c.setFont("Helvetica", 10)
        c.drawString(50, y, "INVOICE")
        c.drawRightString(right, y, f"Invoice Date: {_date(invoice.created_at)}")
        y -= 14
        c.drawRightString(right, y, f"Due Date: {_date(invoice.due_date)}")

        # Parties
        y -= 40
        c.setFont("Helvetica-Bold", 11)
        c.drawString(50, y, "From:")
        c.drawString(300, y, "Bill To:")
        c.setFont("Helvetica", 10)
        from_lines = [business.name, business.address or "", business.phone or ""]
        if business.vat_enabled and business.vat_number:
            from_lines.append(f"VAT No: {business.vat_number}")
        to_lines = [client.name, client.address or "", client.phone or ""]
        for index in range(max(len(from_lines), len(to_lines))):
            y -= 14
            if index < len(from_lines) and from_lines[index]:
                c.drawString(50, y, from_lines[index])
            if index < len(to_lines) and to_lines[index]:
                c.drawString(300, y, to_lines[index])

        # Service line
        y -= 36
        c.setFont("Helvetica-Bold", 11)
        c.drawString(50, y, "Description")
        c.drawRightString(right, y, "Amount")
        c.line(50, y - 4, right, y - 4)
        y -= 20
        c.setFont("Helvetica", 10)
        description = "Cleaning service"
        if job is not None:
            description = (
                f"{job.type.value.replace('_', ' ').title()} cleaning - {_date(job.scheduled_date)}"
            )
            if job.scheduled_time:
                description += f" {job.scheduled_time}"
        c.drawString(50, y, description)
        c.drawRightString(right, y, f"£{invoice.amount:.2f}")

        # Totals
        y -= 30
        c.drawRightString(right - 90, y, "Subtotal:")
        c.drawRightString(right, y, f"£{invoice.amount:.2f}")
        if invoice.vat_amount > 0:
            y -= 14
            c.drawRightString(right - 90, y, "VAT (20%):")
            c.drawRightString(right, y, f"£{invoice.vat_amount:.2f}")
        y -= 18
        c.setFont("Helvetica-Bold", 12)
        c.drawRightString(right - 90, y, "Total:")
        c.drawRightString(right, y, f"£{invoice.total_amount:.2f}")

        # Payment status
        y -= 40
        c.setFont("Helvetica", 10)
        if invoice.status == InvoiceStatus.PAID:
            method = invoice.payment_method.value.replace("_", " ") if invoice.payment_method else ""
            c.drawString(50, y, f"PAID {_date(invoice.paid_at)} {method}".strip())
        else:
            c.drawString(50, y, "Payment due within 30 days of the invoice date.")

        c.setFont("Helvetica", 9)
        c.drawString(50, 50, "Thank you for your business!")

        c.showPage()
        c.save()
        return buf.getvalue()

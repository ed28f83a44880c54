from datetime import datetime
from urllib.parse import unquote
from uuid import uuid4

from src.domain.entities import (
    Business,
    Client,
    Invoice,
    InvoiceStatus,
    Job,
    JobPhoto,
    PhotoType,
)
from src.domain.whatsapp import (
    build_link,
    format_phone,
    invoice_message,
    job_photos_message,
)


def _business():
    return Business(user_id=uuid4(), name="Sparkle Cleaning", phone="07700 900123")


def _client(business):
    return Client(business_id=business.id, name="Jane Smith", phone="07700 900456")


def test_uk_numbers_get_country_code():
    assert format_phone("07700 900123") == "447700900123"
    assert format_phone("+44 7700-900123") == "447700900123"
    assert format_phone("(555) 123 4567") == "5551234567"


def test_build_link_encodes_message():
    link = build_link("07700900123", "Hello there & welcome")

    assert link.startswith("https://wa.me/447700900123?text=")
    assert unquote(link.split("text=")[1]) == "Hello there & welcome"


def test_invoice_message_lists_totals_and_status():
    business = _business()
    client = _client(business)
    invoice = Invoice(
        business_id=business.id,
        client_id=client.id,
        invoice_number="INV-000001",
        amount=100.0,
        vat_amount=20.0,
        total_amount=120.0,
        status=InvoiceStatus.UNPAID,
        due_date=datetime(2024, 3, 5),
    )

    message = invoice_message(invoice, business, client)

    assert "*Invoice INV-000001*" in message
    assert "*VAT:* £20.00" in message
    assert "*Total:* £120.00" in message
    assert "*Due Date:* 5 March 2024" in message
    assert "Please arrange payment" in message
    assert message.endswith("Sparkle Cleaning\n📞 07700 900123")


def test_photo_message_filters_by_type():
    business = _business()
    client = _client(business)
    job = Job(
        business_id=business.id,
        client_id=client.id,
        scheduled_date=datetime(2024, 3, 5, 9, 0),
        scheduled_time="09:00",
    )
    photos = [
        JobPhoto(job_id=job.id, image_url="https://img/before.jpg", photo_type=PhotoType.BEFORE),
        JobPhoto(job_id=job.id, image_url="https://img/after.jpg", photo_type=PhotoType.AFTER),
    ]

    message = job_photos_message(job, business, client, photos, PhotoType.AFTER)

    assert "After Photos" in message
    assert "1. https://img/after.jpg" in message
    assert "before.jpg" not in message
    assert "*Time:* 09:00" in message

from pydantic import BaseModel


class CheckoutSessionResponse(BaseModel):
    session_id: str
    url: str


class WebhookAck(BaseModel):
    received: bool
    event_type: str

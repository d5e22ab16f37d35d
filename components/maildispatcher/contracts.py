from __future__ import annotations
from typing import Optional, Protocol
from pydantic import BaseModel, ConfigDict, Field

from components.configstore.contracts import TransmissionConfig

class SendMessageRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    to: Optional[str] = None
    subject: Optional[str] = None
    body: Optional[str] = None
    reply_to: Optional[str] = Field(default=None, alias="replyTo")

class OutboundMessage(BaseModel):
    """A fully resolved message, ready for the transport."""
    sender: str
    to: str
    subject: str
    html: str
    reply_to: str

class MailTransportPort(Protocol):
    """
    Network delivery. Implementations raise on any failure; the exception
    text is surfaced to the operator, so it should be the transport's own
    diagnostic.
    """
    async def send(self, settings: TransmissionConfig, message: OutboundMessage) -> None: ...
    async def verify(self, settings: TransmissionConfig) -> None: ...

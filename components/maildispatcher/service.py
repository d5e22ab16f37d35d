from __future__ import annotations

import logging
from typing import Optional

from components.common.errors import ConfigMissingError, TransportError, ValidationError
from components.configstore.contracts import TransmissionConfig
from components.configstore.service import ConfigService
from .contracts import MailTransportPort, OutboundMessage, SendMessageRequest

logger = logging.getLogger("maildispatcher")


def format_sender(settings: TransmissionConfig) -> str:
    if settings.from_name:
        return f'"{settings.from_name}" <{settings.from_email}>'
    return settings.from_email


class MailDispatcher:
    """
    Drives the mail transport with the stored SMTP settings. The settings are
    copied out of the store before any network I/O, so no store lock is held
    while the transport runs. Failures are reported once, never retried.
    """

    def __init__(self, config: ConfigService, transport: MailTransportPort):
        self.config = config
        self.transport = transport

    def _settings(self, missing_message: str) -> TransmissionConfig:
        settings: Optional[TransmissionConfig] = self.config.get_raw_transmission_config()
        if settings is None:
            raise ConfigMissingError(missing_message)
        return settings

    def compose(self, req: SendMessageRequest, settings: TransmissionConfig) -> OutboundMessage:
        return OutboundMessage(
            sender=format_sender(settings),
            to=req.to,
            subject=req.subject,
            html=req.body,
            reply_to=req.reply_to or settings.from_email,
        )

    async def send_message(self, req: SendMessageRequest) -> None:
        if not req.to or not req.subject or not req.body:
            raise ValidationError("Missing required fields: to, subject, body", code="missing_fields")
        settings = self._settings(
            "SMTP configuration not found. Please configure SMTP settings first."
        )
        message = self.compose(req, settings)
        try:
            await self.transport.send(settings, message)
        except Exception as ex:
            logger.exception("mail.send_failed", extra={"host": settings.host})
            raise TransportError(f"Failed to send email: {ex}") from ex
        logger.info("mail.sent")

    async def test_connection(self) -> None:
        settings = self._settings("SMTP configuration not found")
        try:
            await self.transport.verify(settings)
        except Exception as ex:
            logger.exception("mail.verify_failed", extra={"host": settings.host})
            raise TransportError(f"SMTP connection failed: {ex}") from ex

from __future__ import annotations

import logging
from email.message import EmailMessage

import aiosmtplib

from components.configstore.contracts import TransmissionConfig
from .contracts import MailTransportPort, OutboundMessage

logger = logging.getLogger("maildispatcher.smtp")


def build_email(message: OutboundMessage) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = message.sender
    msg["To"] = message.to
    msg["Subject"] = message.subject
    msg["Reply-To"] = message.reply_to
    msg.set_content(message.html, subtype="html")
    return msg


class SmtpMailTransport(MailTransportPort):
    """
    aiosmtplib-backed transport. `secure` selects implicit TLS; otherwise
    STARTTLS is negotiated when the server offers it. Credentials are only
    presented when a user name is configured.
    """

    def __init__(self, timeout: float = 30.0):
        self.timeout = timeout

    def _client(self, settings: TransmissionConfig) -> aiosmtplib.SMTP:
        return aiosmtplib.SMTP(
            hostname=settings.host,
            port=settings.port,
            use_tls=settings.secure,
            timeout=self.timeout,
        )

    async def send(self, settings: TransmissionConfig, message: OutboundMessage) -> None:
        smtp = self._client(settings)
        async with smtp:
            if settings.user:
                await smtp.login(settings.user, settings.password)
            await smtp.send_message(build_email(message))
        logger.info("smtp.sent", extra={"host": settings.host, "port": settings.port})

    async def verify(self, settings: TransmissionConfig) -> None:
        smtp = self._client(settings)
        async with smtp:
            if settings.user:
                await smtp.login(settings.user, settings.password)
        logger.info("smtp.verified", extra={"host": settings.host, "port": settings.port})

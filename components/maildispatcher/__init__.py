from .contracts import MailTransportPort, OutboundMessage, SendMessageRequest
from .service import MailDispatcher, format_sender
from .transport import SmtpMailTransport
from .routes import router as mail_router

__all__ = [
    "MailTransportPort",
    "OutboundMessage",
    "SendMessageRequest",
    "MailDispatcher",
    "format_sender",
    "SmtpMailTransport",
    "mail_router",
]

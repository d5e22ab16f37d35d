from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from components.authservice.deps import require_operator
from components.common.contracts import MessageResponse
from .contracts import SendMessageRequest
from .service import MailDispatcher

router = APIRouter(prefix="/api", tags=["mail"], dependencies=[Depends(require_operator)])


def get_dispatcher(request: Request) -> MailDispatcher:
    return request.app.state.mail_dispatcher


@router.post("/send", response_model=MessageResponse)
async def send(req: SendMessageRequest, dispatcher: MailDispatcher = Depends(get_dispatcher)):
    await dispatcher.send_message(req)
    return MessageResponse(message="Email sent successfully")


@router.post("/smtp/test", response_model=MessageResponse)
async def test_connection(dispatcher: MailDispatcher = Depends(get_dispatcher)):
    await dispatcher.test_connection()
    return MessageResponse(message="SMTP connection successful")

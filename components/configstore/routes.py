from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from components.authservice.deps import require_operator
from components.common.contracts import MessageResponse
from .contracts import (
    CreateTemplateRequest, SaveTransmissionRequest,
    TemplateListResponse, TemplateResponse, TransmissionConfigResponse,
)
from .service import ConfigService

router = APIRouter(prefix="/api", tags=["config"], dependencies=[Depends(require_operator)])


def get_config_service(request: Request) -> ConfigService:
    return request.app.state.config_service


@router.get("/smtp", response_model=TransmissionConfigResponse)
def get_smtp(svc: ConfigService = Depends(get_config_service)):
    return TransmissionConfigResponse(smtp=svc.get_transmission_config())


@router.post("/smtp", response_model=MessageResponse)
def save_smtp(req: SaveTransmissionRequest, svc: ConfigService = Depends(get_config_service)):
    svc.save_transmission_config(req)
    return MessageResponse(message="SMTP configuration saved successfully")


@router.get("/templates", response_model=TemplateListResponse)
def list_templates(svc: ConfigService = Depends(get_config_service)):
    return TemplateListResponse(templates=svc.list_templates())


@router.post("/templates", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
def create_template(req: CreateTemplateRequest, svc: ConfigService = Depends(get_config_service)):
    return TemplateResponse(template=svc.create_template(req))


@router.delete("/templates", response_model=MessageResponse)
def delete_template(id: Optional[str] = Query(default=None), svc: ConfigService = Depends(get_config_service)):
    svc.delete_template(id)
    return MessageResponse(message="Template deleted successfully")

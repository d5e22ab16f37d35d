from __future__ import annotations
from fastapi import APIRouter, Depends
from components.common.contracts import MessageResponse
from .contracts import ChangePasswordRequest, Identity, LoginRequest, LoginResponse
from .deps import get_auth_service, require_operator
from .service import AuthService

router = APIRouter(prefix="/api", tags=["auth"])

@router.post("/login", response_model=LoginResponse)
def login(req: LoginRequest, svc: AuthService = Depends(get_auth_service)):
    return svc.login(req)

@router.post("/admin/change-password", response_model=MessageResponse)
def change_password(
    req: ChangePasswordRequest,
    svc: AuthService = Depends(get_auth_service),
    operator: Identity = Depends(require_operator),
):
    svc.change_password(req)
    return MessageResponse(message="Password changed successfully")

@router.get("/auth/me", response_model=Identity)
def me(operator: Identity = Depends(require_operator)):
    return operator

from __future__ import annotations
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from components.authservice.contracts import OperatorCredential

SECRET_PLACEHOLDER = "********"

# ---------- Domain Models ----------
class TransmissionConfig(BaseModel):
    """SMTP settings. `secure` means implicit TLS on connect."""
    model_config = ConfigDict(populate_by_name=True)

    host: str
    port: int = Field(ge=1, le=65535)
    secure: bool = False
    user: str = ""
    password: str = ""
    from_name: str = Field(default="", alias="fromName")
    from_email: str = Field(alias="fromEmail")

    def masked(self) -> "TransmissionConfig":
        return self.model_copy(update={"password": SECRET_PLACEHOLDER if self.password else ""})

class Template(BaseModel):
    id: str
    name: str
    subject: str
    body: str

class StoreState(BaseModel):
    """The persisted aggregate: operator credential, SMTP config, templates."""
    user: OperatorCredential
    smtp: Optional[TransmissionConfig] = None
    templates: List[Template] = Field(default_factory=list)

# ---------- Service I/O ----------
class SaveTransmissionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    host: Optional[str] = None
    port: Any = None
    secure: Any = None
    user: Optional[str] = None
    password: Optional[str] = None
    from_name: Optional[str] = Field(default=None, alias="fromName")
    from_email: Optional[str] = Field(default=None, alias="fromEmail")

class CreateTemplateRequest(BaseModel):
    name: Optional[str] = None
    subject: Optional[str] = None
    body: Optional[str] = None

class TransmissionConfigResponse(BaseModel):
    smtp: Optional[TransmissionConfig] = None

class TemplateListResponse(BaseModel):
    templates: List[Template]

class TemplateResponse(BaseModel):
    template: Template

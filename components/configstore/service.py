from __future__ import annotations

import logging
import uuid
from typing import Any, List, Optional

from components.common.errors import NotFoundError, ValidationError
from .contracts import CreateTemplateRequest, SaveTransmissionRequest, Template, TransmissionConfig
from .store import OperatorStore

logger = logging.getLogger("configstore")

_FALSE_STRINGS = {"", "0", "false", "no", "off"}


def _coerce_port(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError("SMTP port must be an integer", code="invalid_port")
    try:
        number = float(value.strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError("SMTP port must be an integer", code="invalid_port")
    # "587" and "587.0" are both accepted; "587.5" is not.
    if not number.is_integer():
        raise ValidationError("SMTP port must be an integer", code="invalid_port")
    port = int(number)
    if not 1 <= port <= 65535:
        raise ValidationError("SMTP port must be between 1 and 65535", code="invalid_port")
    return port


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


class ConfigService:
    """SMTP settings and template collection, backed by the operator store."""

    def __init__(self, store: OperatorStore):
        self.store = store

    # ---------- SMTP settings ----------
    def get_transmission_config(self) -> Optional[TransmissionConfig]:
        smtp = self.store.snapshot().smtp
        return smtp.masked() if smtp else None

    def get_raw_transmission_config(self) -> Optional[TransmissionConfig]:
        """Unmasked settings for internal consumers (the mail dispatcher)."""
        return self.store.snapshot().smtp

    def save_transmission_config(self, req: SaveTransmissionRequest) -> TransmissionConfig:
        missing = [
            name for name, present in (
                ("host", bool(req.host)),
                ("port", req.port not in (None, "")),
                ("user", req.user is not None),
                ("fromEmail", bool(req.from_email)),
            ) if not present
        ]
        if missing:
            raise ValidationError(f"Missing required SMTP fields: {', '.join(missing)}", code="missing_fields")

        config = TransmissionConfig(
            host=req.host,
            port=_coerce_port(req.port),
            secure=_coerce_bool(req.secure),
            user=req.user,
            password=req.password or "",
            from_name=req.from_name or "",
            from_email=req.from_email,
        )

        def apply(state):
            state.smtp = config

        self.store.update(apply)
        logger.info("smtp.saved", extra={"host": config.host, "port": config.port, "secure": config.secure})
        return config.masked()

    # ---------- Templates ----------
    def list_templates(self) -> List[Template]:
        return self.store.snapshot().templates

    def create_template(self, req: CreateTemplateRequest) -> Template:
        if not req.name or not req.subject or not req.body:
            raise ValidationError("Missing required fields: name, subject, body", code="missing_fields")

        def apply(state):
            taken = {t.id for t in state.templates}
            template_id = uuid.uuid4().hex
            while template_id in taken:
                template_id = uuid.uuid4().hex
            template = Template(id=template_id, name=req.name, subject=req.subject, body=req.body)
            state.templates.append(template)
            return template

        template = self.store.update(apply)
        logger.info("template.created", extra={"template_id": template.id})
        return template

    def delete_template(self, template_id: Optional[str]) -> None:
        if not template_id:
            raise ValidationError("Template ID is required", code="missing_id")

        def apply(state):
            remaining = [t for t in state.templates if t.id != template_id]
            if len(remaining) == len(state.templates):
                raise NotFoundError("Template not found", code="template_not_found")
            state.templates = remaining

        self.store.update(apply)
        logger.info("template.deleted", extra={"template_id": template_id})

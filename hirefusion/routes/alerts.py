from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from ..emails import Mailer, get_mailer
from ..errors import BadRequest, ServerError
from ..schemas import JobAlertIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["alerts"])


@router.post("/jobAlert")
def send_job_alert(payload: JobAlertIn, mailer: Mailer = Depends(get_mailer)):
    if not payload.to or not payload.subject or not payload.message:
        raise BadRequest("Missing fields")
    try:
        mailer.send(payload.to, payload.subject, payload.message, sender_name="Job Alerts")
    except Exception:
        logger.exception("Job alert to %s failed", payload.to)
        raise ServerError("Failed to send email")
    return {"success": True}

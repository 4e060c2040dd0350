from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from .. import crud
from ..database import get_db
from ..errors import BadRequest, NotFound
from ..models import NotificationType
from ..schemas import (
    MessageOut,
    NotificationDeleteIn,
    NotificationEnvelope,
    NotificationIn,
    NotificationsOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])

NOTIFICATION_TYPES = {t.value for t in NotificationType}


@router.post("/addNotification", response_model=NotificationEnvelope, status_code=status.HTTP_201_CREATED)
def add_notification(payload: NotificationIn, db: Session = Depends(get_db)):
    if not payload.email or not payload.message or not payload.type:
        raise BadRequest("Email, message, and type are required")
    if payload.type not in NOTIFICATION_TYPES:
        raise BadRequest("Invalid notification type")
    notification = crud.create_notification(db, payload.email, payload.message, payload.type)
    return {"notification": notification}


@router.get("/getAllnotifications", response_model=NotificationsOut)
def get_all_notifications(email: str | None = Query(None), db: Session = Depends(get_db)):
    if not email:
        raise BadRequest("Email is required")
    return {"notifications": crud.list_notifications(db, email)}


@router.delete("/deletenotification", response_model=MessageOut)
def delete_notification(payload: NotificationDeleteIn, db: Session = Depends(get_db)):
    if not payload.email:
        raise BadRequest("Email is required")
    if not payload.id:
        raise BadRequest("Notification ID is required")
    if not crud.delete_notification(db, payload.email, payload.id):
        logger.warning("Refused delete of notification %s for %s", payload.id, payload.email)
        raise NotFound("Notification not found or not authorized")
    return {"success": True, "message": "Notification deleted successfully"}

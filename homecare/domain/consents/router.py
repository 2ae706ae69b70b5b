"""Consent router - FastAPI endpoints for consent tracking"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import (
    ConsentCreate,
    ConsentListResponse,
    ConsentNotificationResponse,
    ConsentResponse,
    ConsentUpdate,
)
from .service import ConsentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/consents", tags=["Consents"])


def get_consent_service(db: Session = Depends(get_db)) -> ConsentService:
    """Dependency injection for ConsentService"""
    return ConsentService(db)


@router.get("", response_model=ConsentListResponse)
async def get_consents(service: ConsentService = Depends(get_consent_service)):
    """Get all consents with refreshed statuses, plus expiry notifications"""
    consents = service.refresh_statuses()
    return ConsentListResponse(
        consents=[ConsentResponse.from_consent(c) for c in consents],
        notifications=[
            ConsentNotificationResponse.from_notification(n) for n in service.get_notifications()
        ],
    )


@router.get("/{consent_id}", response_model=ConsentResponse)
async def get_consent(consent_id: int, service: ConsentService = Depends(get_consent_service)):
    return ConsentResponse.from_consent(service.get_consent(consent_id))


@router.post("", response_model=ConsentResponse, status_code=201)
async def create_consent(
    data: ConsentCreate, service: ConsentService = Depends(get_consent_service)
):
    """Register a physician consent"""
    return ConsentResponse.from_consent(service.create_consent(data))


@router.put("/{consent_id}", response_model=ConsentResponse)
async def update_consent(
    consent_id: int, data: ConsentUpdate, service: ConsentService = Depends(get_consent_service)
):
    """Update a consent; its status is recomputed from the expiration date"""
    return ConsentResponse.from_consent(service.update_consent(consent_id, data))


@router.patch("/notifications/{notification_id}/read", response_model=ConsentNotificationResponse)
async def mark_notification_read(
    notification_id: int, service: ConsentService = Depends(get_consent_service)
):
    """Mark an expiry notification as read"""
    return ConsentNotificationResponse.from_notification(
        service.mark_notification_read(notification_id)
    )

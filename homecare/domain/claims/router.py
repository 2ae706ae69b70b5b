"""Insurance claim router - FastAPI endpoints for claim tracking"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import (
    ClaimCreate,
    ClaimResponse,
    ClaimStatusUpdate,
    ClaimSummaryResponse,
    ClaimUpdate,
)
from .service import ClaimService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/claims", tags=["Insurance Claims"])


def get_claim_service(db: Session = Depends(get_db)) -> ClaimService:
    """Dependency injection for ClaimService"""
    return ClaimService(db)


@router.get("", response_model=list[ClaimResponse])
async def get_claims(
    service: ClaimService = Depends(get_claim_service),
    status: Optional[str] = Query(None),
    patientId: Optional[int] = Query(None),
):
    """Get insurance claims"""
    return [ClaimResponse.from_claim(c) for c in service.get_claims(status, patientId)]


@router.get("/summary", response_model=ClaimSummaryResponse)
async def get_claim_summary(service: ClaimService = Depends(get_claim_service)):
    """Claim counts and insurance totals per status"""
    return service.get_summary()


@router.get("/{claim_id}", response_model=ClaimResponse)
async def get_claim(claim_id: int, service: ClaimService = Depends(get_claim_service)):
    return ClaimResponse.from_claim(service.get_claim(claim_id))


@router.post("", response_model=ClaimResponse, status_code=201)
async def create_claim(data: ClaimCreate, service: ClaimService = Depends(get_claim_service)):
    """Open a claim for a treatment record"""
    return ClaimResponse.from_claim(service.create_claim(data))


@router.put("/{claim_id}", response_model=ClaimResponse)
async def update_claim(
    claim_id: int, data: ClaimUpdate, service: ClaimService = Depends(get_claim_service)
):
    """Update claim number or notes"""
    return ClaimResponse.from_claim(service.update_claim(claim_id, data))


@router.patch("/{claim_id}/status", response_model=ClaimResponse)
async def change_claim_status(
    claim_id: int, data: ClaimStatusUpdate, service: ClaimService = Depends(get_claim_service)
):
    """Move a claim to its next status"""
    return ClaimResponse.from_claim(service.change_status(claim_id, data.status))

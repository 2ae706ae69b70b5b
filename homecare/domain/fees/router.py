"""Fee router - FastAPI endpoints for fee calculation and estimates"""

import logging

from fastapi import APIRouter

from .calculator import calculate_fee
from .copayment import ESTIMATOR_RATE, CopaymentProfile
from .schemas import (
    FeeBreakdownResponse,
    FeeCalculationRequest,
    FeeEstimateRequest,
    FeeEstimateResponse,
    FeeLineItemResponse,
)
from .tariff import TARIFF

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/fees", tags=["Fees"])


@router.get("/tariff")
async def get_tariff():
    """Get the statutory tariff table used for every fee calculation"""
    return TARIFF.as_dict()


@router.post("/calculate", response_model=FeeBreakdownResponse)
async def calculate(data: FeeCalculationRequest):
    """Calculate a fee breakdown for a selection and an explicit co-payment rate"""
    breakdown = calculate_fee(data.to_selection(), data.copaymentRate)
    return FeeBreakdownResponse.from_breakdown(breakdown)


@router.post("/estimate", response_model=FeeEstimateResponse)
async def estimate(data: FeeEstimateRequest):
    """Quick price estimate; the rate follows the age/income rule unless given"""
    if data.copaymentRate is not None:
        rate = data.copaymentRate
        rule = "explicit"
    else:
        rate = ESTIMATOR_RATE.rate_for(
            CopaymentProfile(age=data.age, income_category=data.incomeCategory)
        )
        rule = ESTIMATOR_RATE.name

    breakdown = calculate_fee(data.to_selection(), rate)
    logger.info(
        f"🧮 Estimate: areas={data.areaCount}, procedures={data.procedureCount}, "
        f"rate={rate} ({rule}) → total={breakdown.total_fee}"
    )

    return FeeEstimateResponse(
        totalFee=breakdown.total_fee,
        patientCopayment=breakdown.patient_copayment,
        insuranceAmount=breakdown.insurance_amount,
        copaymentRate=float(rate),
        rateRule=rule,
        lineItems=[
            FeeLineItemResponse(code=item.code, amount=item.amount)
            for item in breakdown.line_items
        ],
    )

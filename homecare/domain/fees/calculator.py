"""
Fee calculator: turns a treatment selection and a co-payment rate into a fee
breakdown (total fee, patient co-payment, insurance portion).

The calculation is a pure function over the static TARIFF table. The treatment
endpoint, the estimate endpoint and the claim builder all go through
calculate_fee so that the amounts they show and store can never drift apart.
"""

from dataclasses import dataclass, field
from decimal import ROUND_FLOOR, Decimal, InvalidOperation
from typing import Optional, Union

from .errors import InvalidInputError
from .tariff import (
    ELECTROTHERAPY,
    HOT_AND_ELECTRIC,
    HOT_COMPRESS,
    MANUAL_THERAPY,
    MAX_AREA_COUNT,
    MIN_AREA_COUNT,
    MODALITIES,
    PROCEDURE_COUNTS,
    TARIFF,
    TariffTable,
)

RateLike = Union[Decimal, float, int, str]


@dataclass(frozen=True)
class TreatmentSelection:
    """What was done in one visit, as far as the tariff is concerned"""

    area_count: int
    procedure_count: int = 1
    modalities: frozenset = field(default_factory=frozenset)
    is_first_visit: bool = False

    @classmethod
    def from_flags(
        cls,
        area_count: int,
        procedure_count: int = 1,
        hot_compress: bool = False,
        hot_and_electric: bool = False,
        manual_therapy: bool = False,
        electrotherapy: bool = False,
        is_first_visit: bool = False,
    ) -> "TreatmentSelection":
        flags = {
            HOT_COMPRESS: hot_compress,
            HOT_AND_ELECTRIC: hot_and_electric,
            MANUAL_THERAPY: manual_therapy,
            ELECTROTHERAPY: electrotherapy,
        }
        return cls(
            area_count=area_count,
            procedure_count=procedure_count,
            modalities=frozenset(name for name, on in flags.items() if on),
            is_first_visit=is_first_visit,
        )

    def has(self, modality: str) -> bool:
        return modality in self.modalities


@dataclass(frozen=True)
class FeeLineItem:
    code: str
    amount: int


@dataclass(frozen=True)
class FeeBreakdown:
    total_fee: int
    patient_copayment: int
    insurance_amount: int
    line_items: tuple = ()

    def to_response(self) -> dict:
        return {
            "totalFee": self.total_fee,
            "patientCopayment": self.patient_copayment,
            "insuranceAmount": self.insurance_amount,
        }


def _is_int(value) -> bool:
    # bool is an int subclass; True must not pass as one area
    return isinstance(value, int) and not isinstance(value, bool)


def validate_selection(selection: TreatmentSelection) -> None:
    if not _is_int(selection.area_count) or not (
        MIN_AREA_COUNT <= selection.area_count <= MAX_AREA_COUNT
    ):
        raise InvalidInputError(
            f"areaCount must be an integer between {MIN_AREA_COUNT} and {MAX_AREA_COUNT}, "
            f"got {selection.area_count!r}"
        )
    if not _is_int(selection.procedure_count) or selection.procedure_count not in PROCEDURE_COUNTS:
        raise InvalidInputError(
            f"procedureCount must be 1 or 2, got {selection.procedure_count!r}"
        )
    unknown = set(selection.modalities) - set(MODALITIES)
    if unknown:
        raise InvalidInputError(f"Unknown modalities: {', '.join(sorted(unknown))}")


def to_rate(copayment_rate: RateLike) -> Decimal:
    """Normalise a co-payment rate to an exact Decimal in [0, 1]"""
    if isinstance(copayment_rate, bool):
        raise InvalidInputError("copaymentRate must be a number")
    try:
        # str() first so 0.3 becomes Decimal("0.3"), not its binary approximation
        rate = (
            copayment_rate
            if isinstance(copayment_rate, Decimal)
            else Decimal(str(copayment_rate))
        )
    except (InvalidOperation, ValueError, TypeError) as e:
        raise InvalidInputError(f"copaymentRate is not a number: {copayment_rate!r}") from e
    if not rate.is_finite() or rate < 0 or rate > 1:
        raise InvalidInputError(f"copaymentRate must be between 0 and 1, got {copayment_rate!r}")
    return rate


def split_copayment(total_fee: int, copayment_rate: RateLike) -> tuple[int, int]:
    """
    Split a total into (patient_copayment, insurance_amount).

    The co-payment is truncated; the insurance amount is the remainder so the two
    always add back up to the total.
    """
    rate = to_rate(copayment_rate)
    copayment = int((Decimal(total_fee) * rate).to_integral_value(rounding=ROUND_FLOOR))
    return copayment, total_fee - copayment


def calculate_fee(
    selection: TreatmentSelection,
    copayment_rate: RateLike,
    is_first_visit: Optional[bool] = None,
    tariff: TariffTable = TARIFF,
) -> FeeBreakdown:
    """
    Calculate the fee breakdown for one treatment.

    Args:
        selection: Area count, procedure count and modalities of the treatment
        copayment_rate: Fraction of the total the patient pays (0.1 / 0.2 / 0.3)
        is_first_visit: Overrides selection.is_first_visit when given. The caller
            decides this from the patient's history; it is trusted as-is.
        tariff: Tariff table, the statutory one unless a test supplies another

    Returns:
        FeeBreakdown with itemised lines in tariff order

    Raises:
        InvalidInputError: areaCount outside 1-5, procedureCount not 1 or 2,
            unknown modality, or a rate outside [0, 1]
    """
    validate_selection(selection)
    rate = to_rate(copayment_rate)
    first_visit = selection.is_first_visit if is_first_visit is None else is_first_visit

    items = [FeeLineItem("area", tariff.area_fee(selection.area_count))]

    if selection.has(HOT_COMPRESS):
        items.append(FeeLineItem(HOT_COMPRESS, tariff.modality_fees[HOT_COMPRESS]))
    # Not mutually exclusive with hot compress; both fees stack
    if selection.has(HOT_AND_ELECTRIC):
        items.append(FeeLineItem(HOT_AND_ELECTRIC, tariff.modality_fees[HOT_AND_ELECTRIC]))
    if selection.has(MANUAL_THERAPY):
        items.append(FeeLineItem(MANUAL_THERAPY, tariff.manual_therapy(selection.area_count)))
    if selection.procedure_count == 2:
        items.append(FeeLineItem("secondProcedure", tariff.second_procedure_surcharge))
    if selection.has(ELECTROTHERAPY):
        items.append(FeeLineItem(ELECTROTHERAPY, tariff.modality_fees[ELECTROTHERAPY]))

    items.append(FeeLineItem("visit", tariff.visit_fee))

    if first_visit:
        items.append(
            FeeLineItem("firstVisit", tariff.first_visit_fee.for_procedures(selection.procedure_count))
        )

    total = sum(item.amount for item in items)
    copayment, insurance = split_copayment(total, rate)

    return FeeBreakdown(
        total_fee=total,
        patient_copayment=copayment,
        insurance_amount=insurance,
        line_items=tuple(items),
    )


def first_visit_fee_for(selection: TreatmentSelection, tariff: TariffTable = TARIFF) -> int:
    """The first-visit surcharge this selection would carry on a first visit"""
    validate_selection(selection)
    return tariff.first_visit_fee.for_procedures(selection.procedure_count)


def is_first_visit(patient) -> bool:
    """True if the patient has no recorded first visit yet"""
    return getattr(patient, "first_visit_date", None) is None

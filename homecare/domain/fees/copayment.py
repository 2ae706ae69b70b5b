"""
Co-payment rate derivation.

Two rules exist and they are deliberately kept apart:

* rate_from_insurance_category - applied when a patient is registered or their
  insurance category changes; the result is stored on the patient record and
  used for real treatment records.
* rate_from_age_and_income - applied by the price estimator, following the
  age band / income category rules for elderly patients.

Which of the two is authoritative for billing has not been settled, so callers
pick one explicitly through a CopaymentRateStrategy.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .errors import InvalidInputError

RATE_10 = Decimal("0.1")
RATE_20 = Decimal("0.2")
RATE_30 = Decimal("0.3")

VALID_RATES = (RATE_10, RATE_20, RATE_30)

# Insurance categories
HEALTH_INSURANCE = "health"  # 医療保険
LONG_TERM_CARE_INSURANCE = "long_term_care"  # 介護保険

INSURANCE_CATEGORY_RATES = {
    HEALTH_INSURANCE: RATE_30,
    LONG_TERM_CARE_INSURANCE: RATE_10,
}

# Income categories
INCOME_GENERAL = "general"  # 一般
INCOME_CERTAIN = "certain"  # 一定以上所得
INCOME_WORKING = "working"  # 現役並み所得

INCOME_CATEGORIES = (INCOME_GENERAL, INCOME_CERTAIN, INCOME_WORKING)


def rate_from_insurance_category(category: str) -> Decimal:
    """Health insurance pays 70%, long-term-care insurance pays 90%"""
    try:
        return INSURANCE_CATEGORY_RATES[category]
    except (KeyError, TypeError) as e:
        raise InvalidInputError(f"Unknown insurance category: {category!r}") from e


def rate_from_age_and_income(age: int, income_category: str) -> Decimal:
    """
    Rate by age band and income category.

    75 and over: working-level income 30%, certain income 20%, otherwise 10%.
    70 to 74: working-level income 30%, otherwise 20%.
    Under 70: 30% regardless of income.
    """
    if isinstance(age, bool) or not isinstance(age, int):
        raise InvalidInputError(f"Age must be an integer, got {age!r}")
    if age < 0:
        raise InvalidInputError(f"Age cannot be negative, got {age}")
    if income_category not in INCOME_CATEGORIES:
        raise InvalidInputError(f"Unknown income category: {income_category!r}")

    if age >= 75:
        if income_category == INCOME_WORKING:
            return RATE_30
        if income_category == INCOME_CERTAIN:
            return RATE_20
        return RATE_10
    if age >= 70:
        return RATE_30 if income_category == INCOME_WORKING else RATE_20
    return RATE_30


@dataclass(frozen=True)
class CopaymentProfile:
    """The patient attributes either rule may need"""

    insurance_category: Optional[str] = None
    age: Optional[int] = None
    income_category: Optional[str] = None


class CopaymentRateStrategy(ABC):
    name: str

    @abstractmethod
    def rate_for(self, profile: CopaymentProfile) -> Decimal:
        """Return the co-payment rate for the given profile"""


class InsuranceCategoryRate(CopaymentRateStrategy):
    name = "insurance_category"

    def rate_for(self, profile: CopaymentProfile) -> Decimal:
        return rate_from_insurance_category(profile.insurance_category)


class AgeAndIncomeRate(CopaymentRateStrategy):
    name = "age_and_income"

    def rate_for(self, profile: CopaymentProfile) -> Decimal:
        if profile.age is None:
            raise InvalidInputError("Age is required for the age/income rule")
        return rate_from_age_and_income(profile.age, profile.income_category or INCOME_GENERAL)


# Registration uses the insurance rule, the estimator the age/income rule
REGISTRATION_RATE = InsuranceCategoryRate()
ESTIMATOR_RATE = AgeAndIncomeRate()

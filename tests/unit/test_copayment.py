"""Tests for co-payment rate derivation."""
from decimal import Decimal

import pytest

from homecare.domain.fees.copayment import (
    ESTIMATOR_RATE,
    REGISTRATION_RATE,
    AgeAndIncomeRate,
    CopaymentProfile,
    CopaymentRateStrategy,
    InsuranceCategoryRate,
    rate_from_age_and_income,
    rate_from_insurance_category,
)
from homecare.domain.fees.errors import InvalidInputError


def test_elderly_with_certain_income_pays_twenty_percent():
    assert rate_from_age_and_income(76, "certain") == Decimal("0.2")


def test_under_seventy_ignores_income():
    assert rate_from_age_and_income(68, "working") == Decimal("0.3")
    assert rate_from_age_and_income(68, "general") == Decimal("0.3")


@pytest.mark.parametrize(
    "age,income,expected",
    [
        (75, "working", "0.3"),
        (75, "certain", "0.2"),
        (75, "general", "0.1"),
        (90, "general", "0.1"),
        (74, "working", "0.3"),
        (74, "certain", "0.2"),
        (70, "general", "0.2"),
        (69, "certain", "0.3"),
        (0, "general", "0.3"),
    ],
)
def test_age_and_income_bands(age, income, expected):
    assert rate_from_age_and_income(age, income) == Decimal(expected)


def test_negative_age_is_rejected():
    with pytest.raises(InvalidInputError, match="negative"):
        rate_from_age_and_income(-1, "general")


@pytest.mark.parametrize("age", [70.5, "75", None, True])
def test_non_integer_age_is_rejected(age):
    with pytest.raises(InvalidInputError):
        rate_from_age_and_income(age, "general")


def test_unknown_income_category_is_rejected():
    with pytest.raises(InvalidInputError, match="income"):
        rate_from_age_and_income(80, "wealthy")


def test_insurance_category_rates():
    assert rate_from_insurance_category("health") == Decimal("0.3")
    assert rate_from_insurance_category("long_term_care") == Decimal("0.1")


@pytest.mark.parametrize("category", ["none", "medical", "", None])
def test_unknown_insurance_category_is_rejected(category):
    with pytest.raises(InvalidInputError):
        rate_from_insurance_category(category)


def test_strategies_share_one_interface():
    assert isinstance(REGISTRATION_RATE, CopaymentRateStrategy)
    assert isinstance(ESTIMATOR_RATE, CopaymentRateStrategy)
    assert REGISTRATION_RATE.name != ESTIMATOR_RATE.name


def test_strategies_can_disagree_for_the_same_patient():
    """A 80-year-old on health insurance: registration says 30%, estimator says 10%."""
    profile = CopaymentProfile(insurance_category="health", age=80, income_category="general")

    assert InsuranceCategoryRate().rate_for(profile) == Decimal("0.3")
    assert AgeAndIncomeRate().rate_for(profile) == Decimal("0.1")


def test_age_strategy_requires_age():
    with pytest.raises(InvalidInputError, match="Age is required"):
        AgeAndIncomeRate().rate_for(CopaymentProfile(insurance_category="health"))


def test_age_strategy_defaults_to_general_income():
    assert AgeAndIncomeRate().rate_for(CopaymentProfile(age=72)) == Decimal("0.2")


def test_strategy_base_cannot_be_instantiated():
    with pytest.raises(TypeError):
        CopaymentRateStrategy()

"""Tests for the fee calculator."""
import itertools
from dataclasses import FrozenInstanceError
from decimal import Decimal
from types import SimpleNamespace

import pytest

from homecare.domain.fees.calculator import (
    FeeBreakdown,
    TreatmentSelection,
    calculate_fee,
    first_visit_fee_for,
    is_first_visit,
    split_copayment,
)
from homecare.domain.fees.errors import InvalidInputError
from homecare.domain.fees.tariff import (
    ELECTROTHERAPY,
    HOT_AND_ELECTRIC,
    HOT_COMPRESS,
    MANUAL_THERAPY,
    MODALITIES,
    TARIFF,
)


@pytest.mark.parametrize("areas", [1, 2, 3, 4, 5])
def test_per_area_fee_is_450_per_area(areas):
    assert TARIFF.per_area_fee[areas] == 450 * areas


def test_single_area_revisit_at_thirty_percent():
    """1 area, 1 procedure, no add-ons, not a first visit."""
    result = calculate_fee(TreatmentSelection(area_count=1), 0.3, is_first_visit=False)

    assert result.total_fee == 2750
    assert result.patient_copayment == 825
    assert result.insurance_amount == 1925


def test_combined_first_visit_with_add_ons_at_ten_percent():
    selection = TreatmentSelection.from_flags(
        area_count=2,
        procedure_count=2,
        hot_compress=True,
        manual_therapy=True,
        electrotherapy=True,
    )

    result = calculate_fee(selection, 0.1, is_first_visit=True)

    # 900 + 180 + 940 + 1770 + 100 + 2300 + 2230
    assert result.total_fee == 8420
    assert result.patient_copayment == 842
    assert result.insurance_amount == 7578


def test_line_items_follow_tariff_order_and_sum_to_total():
    selection = TreatmentSelection.from_flags(
        area_count=2,
        procedure_count=2,
        hot_compress=True,
        manual_therapy=True,
        electrotherapy=True,
        is_first_visit=True,
    )

    result = calculate_fee(selection, 0.1)

    assert [item.code for item in result.line_items] == [
        "area",
        HOT_COMPRESS,
        MANUAL_THERAPY,
        "secondProcedure",
        ELECTROTHERAPY,
        "visit",
        "firstVisit",
    ]
    assert sum(item.amount for item in result.line_items) == result.total_fee


def test_manual_therapy_on_five_areas_adds_nothing():
    without = calculate_fee(TreatmentSelection(area_count=5), 0.3)
    with_manual = calculate_fee(
        TreatmentSelection(area_count=5, modalities=frozenset({MANUAL_THERAPY})), 0.3
    )

    assert with_manual.total_fee == without.total_fee == 2250 + 2300
    # Not a fallback to the four-area price
    assert with_manual.total_fee != without.total_fee + TARIFF.manual_therapy_fee[4]
    manual_items = [i for i in with_manual.line_items if i.code == MANUAL_THERAPY]
    assert manual_items[0].amount == 0


@pytest.mark.parametrize("areas,fee", [(1, 470), (2, 940), (3, 1410), (4, 1880)])
def test_manual_therapy_scales_with_areas(areas, fee):
    base = calculate_fee(TreatmentSelection(area_count=areas), 0.3)
    manual = calculate_fee(
        TreatmentSelection(area_count=areas, modalities=frozenset({MANUAL_THERAPY})), 0.3
    )
    assert manual.total_fee - base.total_fee == fee


def test_hot_compress_and_hot_electric_fees_stack():
    both = calculate_fee(
        TreatmentSelection.from_flags(area_count=1, hot_compress=True, hot_and_electric=True), 0.3
    )
    assert both.total_fee == 450 + 180 + 300 + 2300


def test_second_procedure_surcharge_only_for_two_procedures():
    one = calculate_fee(TreatmentSelection(area_count=3, procedure_count=1), 0.3)
    two = calculate_fee(TreatmentSelection(area_count=3, procedure_count=2), 0.3)
    assert two.total_fee - one.total_fee == 1770


def test_first_visit_fee_depends_on_procedure_count():
    single = TreatmentSelection(area_count=1, procedure_count=1)
    combined = TreatmentSelection(area_count=1, procedure_count=2)

    assert (
        calculate_fee(single, 0.3, is_first_visit=True).total_fee
        - calculate_fee(single, 0.3, is_first_visit=False).total_fee
        == 1950
    )
    assert (
        calculate_fee(combined, 0.3, is_first_visit=True).total_fee
        - calculate_fee(combined, 0.3, is_first_visit=False).total_fee
        == 2230
    )
    assert first_visit_fee_for(single) == 1950
    assert first_visit_fee_for(combined) == 2230


def test_explicit_first_visit_flag_overrides_selection():
    selection = TreatmentSelection(area_count=1, is_first_visit=True)

    assert calculate_fee(selection, 0.3).total_fee == 2750 + 1950
    assert calculate_fee(selection, 0.3, is_first_visit=False).total_fee == 2750


def _all_modality_sets():
    for size in range(len(MODALITIES) + 1):
        for combo in itertools.combinations(MODALITIES, size):
            yield frozenset(combo)


def test_copayment_and_insurance_always_add_up_to_total():
    for areas, procedures, modalities, first, rate in itertools.product(
        range(1, 6), (1, 2), _all_modality_sets(), (False, True), ("0.1", "0.2", "0.3")
    ):
        selection = TreatmentSelection(areas, procedures, modalities)
        result = calculate_fee(selection, Decimal(rate), is_first_visit=first)

        assert result.insurance_amount + result.patient_copayment == result.total_fee
        assert result.patient_copayment == result.total_fee * int(rate[-1]) // 10
        assert result.total_fee > 0
        assert result.insurance_amount >= 0


def test_same_inputs_give_same_breakdown():
    selection = TreatmentSelection.from_flags(area_count=4, procedure_count=2, hot_and_electric=True)

    first = calculate_fee(selection, 0.2, is_first_visit=True)
    second = calculate_fee(selection, 0.2, is_first_visit=True)

    assert first == second


def test_float_rates_do_not_lose_a_yen():
    # 2750 * 0.3 is 824.999... in binary floating point
    assert split_copayment(2750, 0.3) == (825, 1925)
    assert split_copayment(2750, "0.3") == (825, 1925)


def test_copayment_is_truncated():
    assert split_copayment(2755, 0.3) == (826, 1929)
    assert split_copayment(2759, 0.1) == (275, 2484)


@pytest.mark.parametrize("areas", [0, 6, -1, 2.0, True, None])
def test_area_count_outside_tariff_is_rejected(areas):
    with pytest.raises(InvalidInputError):
        calculate_fee(TreatmentSelection(area_count=areas), 0.3)


@pytest.mark.parametrize("procedures", [0, 3, 1.0, False])
def test_procedure_count_outside_tariff_is_rejected(procedures):
    with pytest.raises(InvalidInputError):
        calculate_fee(TreatmentSelection(area_count=1, procedure_count=procedures), 0.3)


def test_unknown_modality_is_rejected():
    with pytest.raises(InvalidInputError, match="cupping"):
        calculate_fee(TreatmentSelection(area_count=1, modalities=frozenset({"cupping"})), 0.3)


@pytest.mark.parametrize("rate", [-0.1, 1.5, "abc", True, float("nan")])
def test_rate_outside_zero_to_one_is_rejected(rate):
    with pytest.raises(InvalidInputError):
        calculate_fee(TreatmentSelection(area_count=1), rate)


def test_rate_is_not_restricted_to_statutory_values():
    result = calculate_fee(TreatmentSelection(area_count=1), 0.25)
    assert result.patient_copayment == 687
    assert result.insurance_amount == 2063


def test_zero_rate_means_insurance_pays_everything():
    result = calculate_fee(TreatmentSelection(area_count=1), 0)
    assert result.patient_copayment == 0
    assert result.insurance_amount == result.total_fee


def test_invalid_input_error_is_a_value_error():
    assert issubclass(InvalidInputError, ValueError)


def test_to_response_has_the_three_amounts():
    breakdown = FeeBreakdown(total_fee=2750, patient_copayment=825, insurance_amount=1925)
    assert breakdown.to_response() == {
        "totalFee": 2750,
        "patientCopayment": 825,
        "insuranceAmount": 1925,
    }


def test_tariff_cannot_be_modified():
    with pytest.raises(TypeError):
        TARIFF.per_area_fee[1] = 0
    with pytest.raises(FrozenInstanceError):
        TARIFF.visit_fee = 0


def test_from_flags_collects_enabled_modalities():
    selection = TreatmentSelection.from_flags(
        area_count=1, hot_and_electric=True, electrotherapy=True
    )
    assert selection.modalities == frozenset({HOT_AND_ELECTRIC, ELECTROTHERAPY})


def test_is_first_visit_checks_recorded_date():
    assert is_first_visit(SimpleNamespace(first_visit_date=None)) is True
    assert is_first_visit(SimpleNamespace(first_visit_date="2024-05-01")) is False

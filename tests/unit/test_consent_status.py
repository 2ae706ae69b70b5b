"""Tests for consent expiry status"""
from datetime import date, timedelta

import pytest

from homecare.domain.consents.service import (
    ACTIVE,
    EXPIRED,
    EXPIRING_SOON,
    consent_status,
)

TODAY = date(2024, 6, 1)


@pytest.mark.parametrize(
    "days_left,expected",
    [
        (-1, EXPIRED),
        (0, EXPIRING_SOON),
        (1, EXPIRING_SOON),
        (30, EXPIRING_SOON),
        (31, ACTIVE),
        (180, ACTIVE),
    ],
)
def test_status_from_days_left(days_left, expected):
    assert consent_status(TODAY + timedelta(days=days_left), TODAY, warning_days=30) == expected


def test_warning_window_is_configurable():
    expiration = TODAY + timedelta(days=10)
    assert consent_status(expiration, TODAY, warning_days=7) == ACTIVE
    assert consent_status(expiration, TODAY, warning_days=10) == EXPIRING_SOON

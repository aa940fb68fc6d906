"""Tests for freshness classification."""

from datetime import date, timedelta

import pytest

from cookly.fridge.freshness import classify_freshness, days_until_expiration, local_today
from cookly.fridge.models import FreshStatus

TODAY = date(2026, 3, 10)


@pytest.mark.parametrize(
    "offset, expected",
    [
        (-30, FreshStatus.EXPIRED),
        (-1, FreshStatus.EXPIRED),
        (0, FreshStatus.URGENT),
        (2, FreshStatus.URGENT),
        (3, FreshStatus.GOOD),
        (5, FreshStatus.GOOD),
        (6, FreshStatus.FRESH),
        (90, FreshStatus.FRESH),
    ],
)
def test_tier_boundaries(offset, expected):
    assert classify_freshness(TODAY + timedelta(days=offset), TODAY) == expected


def test_missing_date_is_good():
    assert classify_freshness(None, TODAY) == FreshStatus.GOOD
    assert classify_freshness(None) == FreshStatus.GOOD


def test_default_today_is_local_date():
    """Without an explicit date the local calendar date is used."""
    tomorrow = local_today() + timedelta(days=1)
    assert classify_freshness(tomorrow) == FreshStatus.URGENT


def test_days_until_expiration_crosses_month():
    assert days_until_expiration(date(2026, 4, 2), date(2026, 3, 30)) == 3
    assert days_until_expiration(date(2026, 3, 29), date(2026, 3, 30)) == -1

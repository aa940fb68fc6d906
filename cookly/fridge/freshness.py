"""Freshness classification based on expiration dates.

"Today" is always the device-local calendar date. Every call site in the
package goes through :func:`local_today` so that the store, the vision parser and
the CLI agree on the date around midnight.
"""

from __future__ import annotations

from datetime import date, datetime

from .models import FreshStatus

URGENT_DAYS = 2
GOOD_DAYS = 5


def local_today() -> date:
    """Return the current local calendar date."""
    return datetime.now().date()


def days_until_expiration(expiration_date: date, today: date) -> int:
    return (expiration_date - today).days


def classify_freshness(
    expiration_date: date | None, today: date | None = None
) -> FreshStatus:
    """Map an expiration date to a freshness tier.

    Args:
        expiration_date: Date the item expires, or None if unknown.
        today: Reference date. Defaults to the local date.

    Returns:
        GOOD when the date is unknown, otherwise EXPIRED (< 0 days left),
        URGENT (0-2), GOOD (3-5) or FRESH (> 5).
    """
    if expiration_date is None:
        return FreshStatus.GOOD

    if today is None:
        today = local_today()

    days = days_until_expiration(expiration_date, today)
    if days < 0:
        return FreshStatus.EXPIRED
    if days <= URGENT_DAYS:
        return FreshStatus.URGENT
    if days <= GOOD_DAYS:
        return FreshStatus.GOOD
    return FreshStatus.FRESH

"""Aggregation period derivation.

Periods are calendar months taken from the local system clock; no timezone
normalization is applied, so deployments should run with the clock they
want months to roll over on.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable


def format_period(moment: datetime) -> str:
    """Return the ``YYYY-MM`` period containing ``moment``.

    Examples:
        >>> format_period(datetime(2025, 1, 31, 23, 59))
        '2025-01'
        >>> format_period(datetime(987, 12, 1))
        '0987-12'
    """
    return f"{moment.year:04d}-{moment.month:02d}"


def current_period(clock: Callable[[], datetime] = datetime.now) -> str:
    """Return the period for the current instant of ``clock``."""
    return format_period(clock())

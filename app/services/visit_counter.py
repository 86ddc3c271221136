"""Visit counting use case: read, increment, write."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from app.schemas.visit import VisitRecord
from app.services.period import format_period
from app.services.visit_store import VisitStore
from app.utils.timestamps import to_iso_z

logger = logging.getLogger(__name__)


class VisitCounterService:
    """Records one visit per call for an already-validated origin.

    The period and the visit timestamp come from the same clock reading, so
    a visit just before midnight on the last day of a month is counted in
    that month.
    """

    def __init__(
        self,
        store: VisitStore,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._clock = clock

    def record_visit(self, origin: str) -> VisitRecord:
        """Increment the counter for ``origin`` in the current period.

        Args:
            origin: Origin that passed validation.

        Returns:
            The record as written, with the incremented count.

        Raises:
            StoreAppError: If reading or writing the record fails.
        """
        now = self._clock()
        period = format_period(now)

        record = self._store.get(origin, period)
        updated = record.model_copy(
            update={
                "visit_count": record.visit_count + 1,
                "last_visit_date": to_iso_z(now),
            }
        )
        self._store.put(updated)

        logger.info(
            "visit.recorded",
            extra={"origin": origin, "period": period, "visit_count": updated.visit_count},
        )
        return updated

"""Domain service: Order Number Generator.

Order numbers look like ``ORD202507110001``: a fixed prefix, the order
date, and a four-digit sequence that restarts every day.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime

from commerce.domain.exceptions import ValidationError
from commerce.domain.model.entity import utc_now

PREFIX = "ORD"
MAX_DAILY_ORDERS = 9999


class OrderNumberGenerator:

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        start_date: str = "",
        start_sequence: int = 1,
    ) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._current_date = start_date
        self._sequence = start_sequence

    def next(self) -> str:
        """Return the next order number for today.

        Raises ValidationError once the daily limit is exhausted.
        """
        today = self._clock().strftime("%Y%m%d")
        with self._lock:
            if today != self._current_date:
                self._current_date = today
                self._sequence = 1
            if self._sequence > MAX_DAILY_ORDERS:
                raise ValidationError(
                    f"Daily order limit exceeded ({MAX_DAILY_ORDERS})"
                )
            sequence = self._sequence
            self._sequence += 1
        return f"{PREFIX}{today}{sequence:04d}"

    @staticmethod
    def resume_from(
        existing: list[str], clock: Callable[[], datetime] = utc_now
    ) -> OrderNumberGenerator:
        """Build a generator that continues after already-issued numbers.

        Used by the composition root so a restarted process does not
        hand out a number twice on the same day.
        """
        today = clock().strftime("%Y%m%d")
        prefix = f"{PREFIX}{today}"
        issued = [
            int(number[len(prefix):])
            for number in existing
            if number.startswith(prefix) and number[len(prefix):].isdigit()
        ]
        return OrderNumberGenerator(
            clock=clock,
            start_date=today,
            start_sequence=max(issued, default=0) + 1,
        )

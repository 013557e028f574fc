from __future__ import annotations

import time
from collections.abc import Callable
from typing import NewType

TableId = NewType("TableId", int)
ProductId = NewType("ProductId", int)
CartItemId = NewType("CartItemId", int)
CallId = NewType("CallId", int)
OrderId = NewType("OrderId", int)
BillId = NewType("BillId", int)


class IdSequence:
    """Hands out time-derived integer ids (epoch milliseconds).

    Two ids requested within the same millisecond would collide, so every id is
    forced to be strictly greater than the previous one.
    """

    def __init__(self, clock_ms: Callable[[], int] | None = None) -> None:
        self._clock_ms = clock_ms or (lambda: int(time.time() * 1000))
        self._last = 0

    def next(self) -> int:
        candidate = int(self._clock_ms())
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return candidate

    def advance_past(self, value: int) -> None:
        if value > self._last:
            self._last = value

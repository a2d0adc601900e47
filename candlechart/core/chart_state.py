from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np

from .models import Candle


class ChartState:
    """
    Candles shown by the chart plus the highest observed price.

    `set_candles` replaces the data wholesale:
    - dates are made unique (the first occurrence of a date wins) and sorted ascending;
    - `max_price_in_data_set` is taken from the *incoming* list, before dedup;
    - an empty list clears the candles but leaves the previous max in place.
    """

    def __init__(self) -> None:
        self.candles: Tuple[Candle, ...] = ()
        self.max_price_in_data_set: float = 0.0
        self._open: Optional[np.ndarray] = None
        self._close: Optional[np.ndarray] = None
        self._high: Optional[np.ndarray] = None
        self._low: Optional[np.ndarray] = None
        self._columns(())

    def __len__(self) -> int:
        return len(self.candles)

    def is_empty(self) -> bool:
        return not self.candles

    def set_candles(self, candles: Iterable[Candle]) -> None:
        incoming = list(candles)
        by_date = {}
        for candle in incoming:
            by_date.setdefault(candle.trade_date, candle)
        self.candles = tuple(sorted(by_date.values(), key=lambda c: c.trade_date))
        if incoming:
            self.max_price_in_data_set = max(c.max_price for c in incoming)
        self._columns(self.candles)

    def _columns(self, candles: Tuple[Candle, ...]) -> None:
        arr = np.asarray(
            [(c.open_price, c.close_price, c.max_price, c.min_price) for c in candles],
            dtype=np.float64,
        ).reshape(-1, 4)
        self._open = arr[:, 0]
        self._close = arr[:, 1]
        self._high = arr[:, 2]
        self._low = arr[:, 3]

    @property
    def open_prices(self) -> np.ndarray:
        return self._open

    @property
    def close_prices(self) -> np.ndarray:
        return self._close

    @property
    def high_prices(self) -> np.ndarray:
        return self._high

    @property
    def low_prices(self) -> np.ndarray:
        return self._low

    def max_visible_high(self) -> float:
        """Highest high among the stored (deduplicated) candles; 0.0 when empty."""
        if self._high is None or self._high.size == 0:
            return 0.0
        return float(np.nanmax(self._high))

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class Candle:
    trade_date: date
    open_price: float
    close_price: float
    max_price: float
    min_price: float

    def __post_init__(self) -> None:
        if not isinstance(self.trade_date, date):
            raise TypeError(f"trade_date must be a date, got {type(self.trade_date).__name__}")
        # Sorting mixes date and datetime otherwise; keep calendar days only.
        if isinstance(self.trade_date, datetime):
            object.__setattr__(self, "trade_date", self.trade_date.date())
        for name in ("open_price", "close_price", "max_price", "min_price"):
            object.__setattr__(self, name, float(getattr(self, name)))

    @property
    def is_up(self) -> bool:
        # Ties render as "down".
        return self.close_price > self.open_price


@dataclass
class PointerState:
    last_touch_x: float = 0.0
    last_touch_y: float = 0.0

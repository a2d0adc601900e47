from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

import numpy as np

from .style import ChartStyle

PriceLike = Union[float, np.ndarray]


@dataclass(frozen=True)
class ChartGeometry:
    """
    Maps (index, price) pairs to pixels for a view of `width` x `height`.

    Coordinates are in the plot frame: the view translated by (+offset, -offset).
    Prices map linearly from 0, not from the lowest low, so the axis origin is price 0.
    """

    width: float
    height: float
    candle_count: int
    max_price: float
    style: ChartStyle = field(default_factory=ChartStyle)

    @property
    def offset(self) -> float:
        return self.style.offset

    @property
    def line_width(self) -> float:
        return self.style.axis_line_width

    def slot_width(self) -> Optional[float]:
        if self.candle_count <= 0:
            return None
        return (self.width - self.offset) / self.candle_count

    def candle_body_width(self) -> float:
        width = self.style.candle_body_width
        slot = self.slot_width()
        if slot is None:
            return width
        if slot <= 0:
            return 0.0
        while slot <= width:
            width *= self.style.candle_body_width_scale
        return width

    def candle_center_x(self, index: int) -> float:
        slot = self.slot_width()
        if slot is None:
            raise ValueError("no candles to place")
        return slot * (index + 1) - self.candle_body_width() / 2.0 - self.line_width / 2.0

    def _plot_height(self) -> float:
        return self.height - self.line_width - self.offset

    def price_to_y(self, price: PriceLike) -> PriceLike:
        if self.max_price <= 0:
            if isinstance(price, np.ndarray):
                return np.full(price.shape, float(self.height))
            return float(self.height)
        y = self.height - (price / self.max_price) * self._plot_height()
        if isinstance(y, np.ndarray):
            return y
        return float(y)

    def y_to_price(self, y: float) -> float:
        """Price under a view-frame y, as read by the crosshair."""
        y_height = self.height - self.offset
        if y_height <= 0:
            return 0.0
        return self.max_price * (y_height - y + self.line_width) / y_height

    def price_gridline_count(self, zoomed: bool) -> int:
        if zoomed:
            return self.candle_count * 4
        return self.candle_count

    def price_gridline_y(self, index: int, count: int) -> float:
        step = (self.height - self.offset) / count
        return self.height - step * (index + 1) + self.line_width

    def x_axis_end(self) -> float:
        return self.width - self.offset - self.candle_body_width() / 2.0

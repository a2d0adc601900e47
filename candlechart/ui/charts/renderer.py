from __future__ import annotations

from datetime import date
from typing import Optional, Tuple

from ...core.chart_state import ChartState
from ...core.mapper import ChartGeometry
from ...core.models import Candle, PointerState
from ...core.style import ChartStyle, Color
from .canvas import Canvas


def format_date(value: date) -> str:
    return value.strftime('%d.%m')


def format_price_value(price: float) -> str:
    if price >= 100:
        return f'{price:,.2f}'
    if price >= 1:
        return f'{price:,.4f}'
    if price >= 0.01:
        return f'{price:,.6f}'
    return f'{price:,.8f}'


class CandlestickRenderer:
    """
    Draws the chart onto a Canvas.

    Paint order: crosshair, Y axis, X axis, date/price ticks with labels, candles.
    Everything after the crosshair is drawn in the plot frame (view translated by
    +offset on x and -offset on y).
    """

    def __init__(self, style: Optional[ChartStyle] = None) -> None:
        self.style = style or ChartStyle()

    def geometry(self, state: ChartState, width: float, height: float) -> ChartGeometry:
        return ChartGeometry(
            width=float(width),
            height=float(height),
            candle_count=len(state),
            max_price=state.max_price_in_data_set,
            style=self.style,
        )

    def body_color(self, candle: Candle) -> Color:
        return self.style.up_color if candle.is_up else self.style.down_color

    def draw(
        self,
        canvas: Canvas,
        state: ChartState,
        width: float,
        height: float,
        pointer: Optional[PointerState] = None,
        zoomed: bool = False,
    ) -> ChartGeometry:
        geo = self.geometry(state, width, height)
        if pointer is not None:
            self.draw_crosshair(canvas, geo, pointer)
        canvas.save()
        try:
            canvas.translate(geo.offset, -geo.offset)
            self.draw_ordinate_line(canvas, geo)
            self.draw_abscissa_line(canvas, geo)
            if not state.is_empty():
                self.draw_date_segments(canvas, geo, state)
                self.draw_price_segments(canvas, geo, state, zoomed)
                self.draw_candles(canvas, geo, state)
        finally:
            canvas.restore()
        return geo

    def draw_crosshair(self, canvas: Canvas, geo: ChartGeometry, pointer: PointerState) -> None:
        s = self.style
        x = pointer.last_touch_x
        y = pointer.last_touch_y
        canvas.draw_line(x, geo.height - geo.offset - s.half_line_width, x, y, s.axis_color, s.axis_line_width)
        canvas.draw_line(geo.offset, y, x, y, s.axis_color, s.axis_line_width)
        text = format_price_value(geo.y_to_price(y))
        canvas.draw_text(x, y - s.axis_line_width, text, s.text_color, s.text_size)

    def draw_ordinate_line(self, canvas: Canvas, geo: ChartGeometry) -> None:
        s = self.style
        canvas.draw_line(
            0.0,
            geo.offset + s.half_line_width,
            0.0,
            geo.height + s.half_line_width,
            s.axis_color,
            s.axis_line_width,
        )

    def draw_abscissa_line(self, canvas: Canvas, geo: ChartGeometry) -> None:
        s = self.style
        canvas.draw_line(0.0, geo.height, geo.x_axis_end(), geo.height, s.axis_color, s.axis_line_width)

    def draw_date_segments(self, canvas: Canvas, geo: ChartGeometry, state: ChartState) -> None:
        s = self.style
        for index, candle in enumerate(state.candles):
            x = geo.candle_center_x(index)
            canvas.draw_line(x, geo.height, x, geo.height + s.segment_size, s.axis_color, s.axis_line_width)
            label_y = geo.height + s.text_size + s.axis_line_width
            canvas.draw_text(x, label_y, format_date(candle.trade_date), s.text_color, s.text_size)

    def draw_price_segments(self, canvas: Canvas, geo: ChartGeometry, state: ChartState, zoomed: bool) -> None:
        s = self.style
        count = geo.price_gridline_count(zoomed)
        if count <= 0:
            return
        price_step = state.max_visible_high() / count
        # 0..count inclusive, so count + 1 ticks.
        for index in range(count + 1):
            y = geo.price_gridline_y(index, count)
            canvas.draw_line(-s.segment_size, y, 0.0, y, s.axis_color, s.axis_line_width)
            label = str(int((index + 1) * price_step))
            canvas.draw_text(-geo.offset / 2.0, y + s.text_size / 2.0, label, s.text_color, s.text_size)

    def draw_candles(self, canvas: Canvas, geo: ChartGeometry, state: ChartState) -> None:
        # One mapping per price column; rows line up with state.candles.
        open_ys = geo.price_to_y(state.open_prices)
        close_ys = geo.price_to_y(state.close_prices)
        high_ys = geo.price_to_y(state.high_prices)
        low_ys = geo.price_to_y(state.low_prices)
        for index, candle in enumerate(state.candles):
            self.draw_candle(
                canvas,
                geo,
                index,
                candle,
                (float(open_ys[index]), float(close_ys[index]), float(high_ys[index]), float(low_ys[index])),
            )

    def draw_candle(
        self,
        canvas: Canvas,
        geo: ChartGeometry,
        index: int,
        candle: Candle,
        ys: Tuple[float, float, float, float],
    ) -> None:
        s = self.style
        x = geo.candle_center_x(index)
        half_body = geo.candle_body_width() / 2.0
        open_y, close_y, high_y, low_y = ys
        canvas.draw_line(x, low_y, x, high_y, s.wick_color, s.price_line_width)
        canvas.draw_rect(x - half_body, open_y, x + half_body, close_y, self.body_color(candle), fill=True)
        canvas.draw_rect(
            x - half_body,
            open_y,
            x + half_body,
            close_y,
            s.border_color,
            width=s.half_line_width,
            fill=False,
        )

import unittest
from datetime import date

from candlechart.core.chart_state import ChartState
from candlechart.core.models import Candle, PointerState
from candlechart.core.style import ChartStyle
from candlechart.ui.charts.canvas import RecordingCanvas
from candlechart.ui.charts.renderer import CandlestickRenderer, format_date, format_price_value


def _two_candles():
    state = ChartState()
    state.set_candles(
        [
            Candle(date(2021, 6, 23), 100.0, 50.0, 200.0, 30.0),
            Candle(date(2021, 6, 10), 100.0, 150.0, 188.0, 100.0),
        ]
    )
    return state


class CandlestickRendererTests(unittest.TestCase):
    def setUp(self):
        self.style = ChartStyle()
        self.renderer = CandlestickRenderer(self.style)
        self.canvas = RecordingCanvas()

    def _lines(self, width):
        return [p for p in self.canvas.of_kind('line') if p.width == width]

    def test_scenario_colors_and_spacing(self):
        state = _two_candles()
        self.assertEqual(state.max_price_in_data_set, 200.0)
        geo = self.renderer.draw(self.canvas, state, 1000, 1000)
        self.assertAlmostEqual(geo.candle_center_x(1), geo.candle_center_x(0) + geo.slot_width())

        fills = [p for p in self.canvas.of_kind('rect') if p.fill]
        self.assertEqual([p.color for p in fills], [self.style.up_color, self.style.down_color])
        borders = [p for p in self.canvas.of_kind('rect') if not p.fill]
        self.assertEqual(len(borders), 2)
        self.assertTrue(all(p.width == self.style.half_line_width for p in borders))

        wicks = self._lines(self.style.price_line_width)
        self.assertEqual(len(wicks), 2)
        # Plot frame is shifted by (+60, -60) in view coordinates.
        self.assertAlmostEqual(wicks[0].coords[0], 442.5 + 60.0)
        self.assertAlmostEqual(wicks[1].coords[0] - wicks[0].coords[0], 470.0)
        # day 2 high of 200 sits at the top of the plot area.
        self.assertAlmostEqual(wicks[1].coords[3], 1000.0 - 935.0 - 60.0)

    def test_candles_use_mapped_price_columns(self):
        state = _two_candles()
        geo = self.renderer.draw(self.canvas, state, 1000, 1000)
        wicks = self._lines(self.style.price_line_width)
        lows = geo.price_to_y(state.low_prices)
        highs = geo.price_to_y(state.high_prices)
        for wick, low_y, high_y in zip(wicks, lows, highs):
            self.assertAlmostEqual(wick.coords[1], float(low_y) - 60.0)
            self.assertAlmostEqual(wick.coords[3], float(high_y) - 60.0)
        opens = geo.price_to_y(state.open_prices)
        closes = geo.price_to_y(state.close_prices)
        fills = [p for p in self.canvas.of_kind('rect') if p.fill]
        for fill, open_y, close_y in zip(fills, opens, closes):
            self.assertAlmostEqual(fill.coords[1], float(open_y) - 60.0)
            self.assertAlmostEqual(fill.coords[3], float(close_y) - 60.0)

    def test_tie_renders_down(self):
        state = ChartState()
        state.set_candles([Candle(date(2021, 1, 1), 10.0, 10.0, 12.0, 8.0)])
        self.renderer.draw(self.canvas, state, 500, 500)
        fills = [p for p in self.canvas.of_kind('rect') if p.fill]
        self.assertEqual(fills[0].color, self.style.down_color)

    def test_labels(self):
        self.renderer.draw(self.canvas, _two_candles(), 1000, 1000)
        texts = [p.text for p in self.canvas.of_kind('text')]
        self.assertEqual(texts[:2], ['10.06', '23.06'])
        # Labels step by max high / count, counting from the first step.
        self.assertEqual(texts[2:], ['100', '200', '300'])

    def test_axes_in_view_coordinates(self):
        self.renderer.draw(self.canvas, _two_candles(), 1000, 1000)
        axis_lines = self._lines(self.style.axis_line_width)
        y_axis, x_axis = axis_lines[0], axis_lines[1]
        self.assertEqual(y_axis.coords, (60.0, 2.5, 60.0, 942.5))
        self.assertEqual(x_axis.coords, (60.0, 940.0, 1000.0 - 25.0, 940.0))

    def test_zoom_only_changes_price_ticks(self):
        state = _two_candles()
        self.renderer.draw(self.canvas, state, 1000, 1000, zoomed=False)
        normal = list(self.canvas.primitives)
        self.canvas.clear()
        self.renderer.draw(self.canvas, state, 1000, 1000, zoomed=True)
        zoomed = list(self.canvas.primitives)
        self.canvas.clear()
        self.renderer.draw(self.canvas, state, 1000, 1000, zoomed=False)
        self.assertEqual(self.canvas.primitives, normal)

        def price_ticks(prims):
            return [p for p in prims if p.kind == 'line' and p.coords[0] == 45.0 and p.coords[2] == 60.0]

        self.assertEqual(len(price_ticks(normal)), 3)
        self.assertEqual(len(price_ticks(zoomed)), 9)
        rects = lambda prims: [p for p in prims if p.kind == 'rect']
        self.assertEqual(rects(normal), rects(zoomed))

    def test_empty_draws_axes_only(self):
        state = ChartState()
        state.set_candles([])
        self.renderer.draw(self.canvas, state, 1000, 1000)
        self.assertEqual(len(self.canvas.of_kind('line')), 2)
        self.assertEqual(self.canvas.of_kind('rect'), [])
        self.assertEqual(self.canvas.of_kind('text'), [])

    def test_crosshair_only_with_pointer(self):
        state = _two_candles()
        self.renderer.draw(self.canvas, state, 1000, 1000)
        without = len(self.canvas.primitives)
        self.canvas.clear()
        self.renderer.draw(self.canvas, state, 1000, 1000, pointer=PointerState(300.0, 5.0))
        self.assertEqual(len(self.canvas.primitives), without + 3)
        vertical, horizontal, readout = self.canvas.primitives[:3]
        self.assertEqual(vertical.coords, (300.0, 1000.0 - 60.0 - 2.5, 300.0, 5.0))
        self.assertEqual(horizontal.coords, (60.0, 5.0, 300.0, 5.0))
        self.assertEqual(readout.text, '200.00')

    def test_formatters(self):
        self.assertEqual(format_date(date(2021, 3, 5)), '05.03')
        self.assertEqual(format_price_value(1234.5), '1,234.50')
        self.assertEqual(format_price_value(2.5), '2.5000')
        self.assertEqual(format_price_value(0.0), '0.00000000')


if __name__ == "__main__":
    unittest.main()

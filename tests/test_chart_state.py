import unittest
from datetime import date, datetime

from candlechart.core.chart_state import ChartState
from candlechart.core.models import Candle


def _candle(day, o=100.0, c=110.0, h=120.0, l=90.0):
    return Candle(date(2021, 6, day), o, c, h, l)


class ChartStateTests(unittest.TestCase):
    def test_sorted_and_unique_by_date(self):
        state = ChartState()
        state.set_candles([_candle(23), _candle(5), _candle(10), _candle(5, o=1.0), _candle(23, c=2.0)])
        dates = [c.trade_date for c in state.candles]
        self.assertEqual(dates, sorted(set(dates)))
        self.assertEqual(len(state), 3)

    def test_duplicate_date_keeps_exactly_one(self):
        # Which duplicate survives is unspecified; only the count is checked.
        state = ChartState()
        state.set_candles([_candle(1, o=10.0), _candle(1, o=20.0)])
        self.assertEqual(len(state), 1)
        self.assertIn(state.candles[0].open_price, (10.0, 20.0))

    def test_max_price_comes_from_input_list(self):
        state = ChartState()
        # The dropped duplicate carries the highest high.
        state.set_candles([_candle(1, h=150.0), _candle(1, h=500.0), _candle(2, h=180.0)])
        self.assertEqual(state.max_price_in_data_set, 500.0)
        self.assertLessEqual(state.max_visible_high(), 500.0)

    def test_empty_input_keeps_previous_max(self):
        # Specified quirk: an empty list does not reset the max price.
        state = ChartState()
        state.set_candles([_candle(1, h=200.0)])
        state.set_candles([])
        self.assertTrue(state.is_empty())
        self.assertEqual(state.max_price_in_data_set, 200.0)
        self.assertEqual(state.max_visible_high(), 0.0)

    def test_columns_follow_sorted_order(self):
        state = ChartState()
        state.set_candles([_candle(2, o=2.0, l=1.0), _candle(1, o=1.0, l=0.5)])
        self.assertEqual(list(state.open_prices), [1.0, 2.0])
        self.assertEqual(list(state.low_prices), [0.5, 1.0])

    def test_candle_coerces_values(self):
        candle = Candle(datetime(2021, 6, 1, 12, 30), 1, 2, 3, 0)
        self.assertEqual(candle.trade_date, date(2021, 6, 1))
        self.assertIsInstance(candle.open_price, float)
        self.assertTrue(candle.is_up)
        self.assertFalse(Candle(date(2021, 6, 1), 5, 5, 6, 4).is_up)

    def test_candle_rejects_non_date(self):
        with self.assertRaises(TypeError):
            Candle("2021-06-01", 1, 2, 3, 0)
        with self.assertRaises(ValueError):
            Candle(date(2021, 6, 1), "abc", 2, 3, 0)


if __name__ == "__main__":
    unittest.main()

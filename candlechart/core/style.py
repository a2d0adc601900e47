from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Tuple, Union

Color = Union[str, Tuple[int, int, int, int]]

DEFAULT_OFFSET = 60.0


@dataclass(frozen=True)
class ChartStyle:
    up_color: Color = "#00FF00"
    down_color: Color = "#FF0000"
    candle_body_width: float = 50.0
    candle_body_width_scale: float = 0.5
    axis_line_width: float = 5.0
    price_line_width: float = 4.0
    offset: float = DEFAULT_OFFSET
    segment_size: float = 15.0
    text_size: float = 30.0
    axis_color: Color = (136, 136, 136, 200)
    text_color: Color = (0, 0, 0, 200)
    border_color: Color = "#000000"
    wick_color: Color = "#000000"

    def __post_init__(self) -> None:
        # The body-width halving loop only ends for a shrinking scale.
        if not 0.0 < self.candle_body_width_scale < 1.0:
            raise ValueError(f"candle_body_width_scale must be in (0, 1), got {self.candle_body_width_scale}")

    @property
    def half_line_width(self) -> float:
        return self.axis_line_width / 2.0

    @classmethod
    def from_settings(cls, values: Mapping[str, Any]) -> "ChartStyle":
        """
        Build a style from stored overrides.

        QSettings hands back strings for everything, so numeric fields are coerced
        and color fields are taken verbatim. Unknown keys are ignored.
        """
        style = cls()
        known = {f.name: f for f in fields(cls)}
        updates = {}
        for key, raw in (values or {}).items():
            field = known.get(key)
            if field is None or raw is None or raw == "":
                continue
            if isinstance(getattr(style, key), float):
                updates[key] = float(raw)
            else:
                updates[key] = raw
        return replace(style, **updates)

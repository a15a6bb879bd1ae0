"""Badge colour as a piecewise-linear function of the coverage fraction."""

import math
from typing import NamedTuple


class Color(NamedTuple):
    r: int
    g: int
    b: int

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


# Ascending by threshold; interpolate_color depends on this order.
ANCHORS: tuple[tuple[float, Color], ...] = (
    (0.0, Color(0xE0, 0x5D, 0x44)),
    (0.5, Color(0xE0, 0x5D, 0x44)),
    (0.6, Color(0xDF, 0xB3, 0x17)),
    (0.9, Color(0x97, 0xCA, 0x00)),
    (1.0, Color(0x44, 0xCC, 0x11)),
)


def interpolate_color(fraction: float) -> Color:
    """Colour for a coverage fraction.

    The first anchor whose threshold is >= ``fraction`` is the upper bound
    and the anchor before it the lower bound; each channel is interpolated
    linearly and floored. Fractions outside the table get the colour of the
    nearest end anchor.

    Raises:
        ValueError: If ``fraction`` is NaN.
    """
    if math.isnan(fraction):
        raise ValueError("Coverage fraction is NaN")

    lower_at, lower = ANCHORS[0]
    upper_at, upper = ANCHORS[-1]
    for threshold, color in ANCHORS:
        if fraction <= threshold:
            upper_at, upper = threshold, color
            break
        lower_at, lower = threshold, color

    if upper_at <= lower_at:
        return upper if fraction <= upper_at else lower

    position = (fraction - lower_at) / (upper_at - lower_at)
    return Color(
        *(
            math.floor(lo * (1 - position) + hi * position)
            for lo, hi in zip(lower, upper)
        )
    )

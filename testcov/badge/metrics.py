"""Badge geometry chosen by the number of digits in the percentage."""

from dataclasses import dataclass

from ..report.calculator import floor_percentage

LEFT_WIDTH = 59


@dataclass(frozen=True)
class BadgeMetrics:
    """Total width plus position and length of the value text."""

    width: int
    right_x: int
    right_length: int

    @property
    def right_width(self) -> int:
        return self.width - LEFT_WIDTH

    @classmethod
    def for_fraction(cls, fraction: float) -> "BadgeMetrics":
        digits = len(str(floor_percentage(fraction)))
        if digits == 1:
            return cls(width=88, right_x=725, right_length=190)
        if digits == 2:
            return cls(width=94, right_x=755, right_length=250)
        return cls(width=102, right_x=795, right_length=330)

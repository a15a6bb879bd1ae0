"""Coverage badge: colour interpolation, geometry and SVG output."""

from .color import ANCHORS, Color, interpolate_color
from .metrics import LEFT_WIDTH, BadgeMetrics
from .renderer import BADGE_FILE, badge_path, render_badge, write_badge

__all__ = [
    "ANCHORS",
    "BADGE_FILE",
    "LEFT_WIDTH",
    "BadgeMetrics",
    "Color",
    "badge_path",
    "interpolate_color",
    "render_badge",
    "write_badge",
]

"""SVG rendering of the coverage badge."""

import logging
from pathlib import Path

from ..report.calculator import floor_percentage
from .color import interpolate_color
from .metrics import BadgeMetrics

logger = logging.getLogger(__name__)

BADGE_FILE = "coverage_badge.svg"

BADGE_TEMPLATE = """\
<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" width="{width}" height="20">
  <linearGradient id="b" x2="0" y2="100%">
    <stop offset="0" stop-color="#bbb" stop-opacity=".1"/>
    <stop offset="1" stop-opacity=".1"/>
  </linearGradient>
  <clipPath id="a">
    <rect width="{width}" height="20" rx="3" fill="#fff"/>
  </clipPath>
  <g clip-path="url(#a)">
    <path fill="#555" d="M0 0h59v20H0z"/>
    <path fill="{color}" d="M59 0h{right_width}v20H59z"/>
    <path fill="url(#b)" d="M0 0h{width}v20H0z"/>
  </g>
  <g fill="#fff" text-anchor="middle" font-family="DejaVu Sans,Verdana,Geneva,sans-serif" font-size="110">
    <text x="305" y="150" fill="#010101" fill-opacity=".3" transform="scale(.1)" textLength="490">coverage</text>
    <text x="305" y="140" transform="scale(.1)" textLength="490">coverage</text>
    <text x="{right_x}" y="150" fill="#010101" fill-opacity=".3" transform="scale(.1)" textLength="{right_length}">{value}</text>
    <text x="{right_x}" y="140" transform="scale(.1)" textLength="{right_length}">{value}</text>
  </g>
</svg>
"""


def render_badge(fraction: float) -> str:
    """Render the SVG badge for a coverage fraction."""
    metrics = BadgeMetrics.for_fraction(fraction)
    return BADGE_TEMPLATE.format(
        width=metrics.width,
        right_width=metrics.right_width,
        right_x=metrics.right_x,
        right_length=metrics.right_length,
        color=interpolate_color(fraction).hex,
        value=f"{floor_percentage(fraction)}%",
    )


def badge_path(package_root: str | Path) -> Path:
    return Path(package_root).absolute() / BADGE_FILE


def write_badge(package_root: str | Path, fraction: float) -> Path:
    """Write ``coverage_badge.svg`` to the package root, overwriting it."""
    path = badge_path(package_root)
    path.write_text(render_badge(fraction), encoding="utf-8")
    logger.info("Wrote badge to %s", path)
    return path

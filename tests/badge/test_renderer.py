"""Tests for badge.renderer."""

import xml.etree.ElementTree as ET

from testcov.badge.renderer import badge_path, render_badge, write_badge

SVG = "{http://www.w3.org/2000/svg}"


class TestRenderBadge:
    def test_is_valid_svg(self):
        root = ET.fromstring(render_badge(0.42))

        assert root.tag == f"{SVG}svg"
        assert root.get("width") == "94"
        assert root.get("height") == "20"

    def test_value_and_label(self):
        texts = [t.text for t in ET.fromstring(render_badge(2 / 3)).iter(f"{SVG}text")]
        assert texts == ["coverage", "coverage", "66%", "66%"]

    def test_right_block_geometry(self):
        svg = render_badge(0.05)

        assert 'd="M59 0h29v20H59z"' in svg
        assert 'x="725"' in svg
        assert 'textLength="190"' in svg
        assert ">5%<" in svg

    def test_full_coverage(self):
        svg = render_badge(1.0)

        assert 'fill="#44cc11"' in svg
        assert 'width="102"' in svg
        assert ">100%<" in svg

    def test_low_coverage_is_red(self):
        assert 'fill="#e05d44" d="M59' in render_badge(0.3)


class TestWriteBadge:
    def test_writes_to_package_root(self, tmp_path):
        path = write_badge(tmp_path, 0.42)

        assert path == badge_path(tmp_path) == tmp_path / "coverage_badge.svg"
        assert ">42%<" in path.read_text()

    def test_overwrites(self, tmp_path):
        write_badge(tmp_path, 0.42)
        path = write_badge(tmp_path, 1.0)

        assert ">100%<" in path.read_text()

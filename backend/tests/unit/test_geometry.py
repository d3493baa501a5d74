"""
几何解析单元测试

每个模块完成后必须运行：pytest tests/unit/test_geometry.py -v
"""

import pytest
from pydantic import ValidationError

from bewegtbild.interfaces import GeometryError
from bewegtbild.models import (
    AutoHeight,
    AutoWidth,
    FixedBoth,
    Rect,
    RelativeLength,
    RelativePosition,
)
from bewegtbild.slides import place_overlay, resolve_length, resolve_position, resolve_size


def pct(value: float) -> RelativeLength:
    return RelativeLength(percent=value)


class TestResolveLength:
    """百分比长度测试"""

    def test_bounds(self):
        """测试0%与100%"""
        assert resolve_length(pct(0), 640.0) == 0.0
        assert resolve_length(pct(100), 640.0) == 640.0

    def test_linear_and_monotonic(self):
        """测试线性与单调"""
        values = [resolve_length(pct(p), 500.0) for p in range(0, 101, 10)]
        assert values == sorted(values)
        assert resolve_length(pct(40), 500.0) == pytest.approx(2 * resolve_length(pct(20), 500.0))

    def test_out_of_range_rejected_at_construction(self):
        """测试越界百分比在构造时报错"""
        with pytest.raises(ValidationError):
            RelativeLength(percent=100.5)
        with pytest.raises(ValidationError):
            RelativeLength(percent=-1)

    def test_parse(self):
        """测试字符串解析"""
        assert RelativeLength.parse("12.5%").percent == 12.5
        assert str(RelativeLength.parse(" 30% ")) == "30%"
        with pytest.raises(ValueError):
            RelativeLength.parse("30")
        with pytest.raises(ValueError):
            RelativeLength.parse("abc%")


class TestResolvePosition:
    """位置解析测试"""

    def test_per_axis(self):
        """测试逐轴解析"""
        position = RelativePosition(x=pct(10), y=pct(50))
        assert resolve_position(position, (1000.0, 800.0)) == pytest.approx((100.0, 400.0))

    def test_default_is_origin(self):
        """测试默认左上角"""
        assert resolve_position(RelativePosition(), (1000.0, 800.0)) == (0.0, 0.0)


class TestResolveSize:
    """尺寸解析测试"""

    def test_auto_height_keeps_ratio(self):
        """测试宽度驱动保持宽高比"""
        width, height = resolve_size(AutoHeight(width=pct(30)), (1920.0, 1080.0), (1000.0, 800.0))
        assert width == pytest.approx(300.0)
        assert width / height == pytest.approx(1920.0 / 1080.0)

    def test_auto_width_height_driven(self):
        """测试高度驱动：高 0.30*800=240，宽 240*1920/1080"""
        width, height = resolve_size(AutoWidth(height=pct(30)), (1920.0, 1080.0), (1000.0, 800.0))
        assert height == pytest.approx(240.0)
        assert width == pytest.approx(426.6667, rel=1e-4)

    def test_fixed_both_ignores_ratio(self):
        """测试固定宽高忽略原始比例"""
        size = FixedBoth(width=pct(50), height=pct(10))
        assert resolve_size(size, (1920.0, 1080.0), (1000.0, 800.0)) == pytest.approx((500.0, 80.0))

    def test_zero_native_dimension(self):
        """测试原始尺寸为0时报错"""
        with pytest.raises(GeometryError):
            resolve_size(AutoHeight(width=pct(30)), (0.0, 1080.0), (1000.0, 800.0))


class TestPlaceOverlay:
    """放置矩形测试"""

    def test_offset_from_slide_top_left(self):
        """测试相对幻灯片左上角偏移"""
        slide = Rect.from_origin_size(100.0, 50.0, 1000.0, 800.0)
        rect = place_overlay(
            RelativePosition(x=pct(10), y=pct(25)),
            FixedBoth(width=pct(20), height=pct(10)),
            (640.0, 480.0),
            slide,
        )
        assert rect.top_left == pytest.approx((200.0, 250.0))
        assert rect.size == pytest.approx((200.0, 80.0))

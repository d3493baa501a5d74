"""
几何解析器 - 相对尺寸/位置 → 绝对像素（纯函数，无状态）

职责：
1. 百分比长度按参考尺寸解析
2. 位置按包围框逐轴解析
3. 尺寸按包围框及媒体原始宽高比解析
4. 计算叠加层在幻灯片上的放置矩形

测试要点：
- test_resolve_length_bounds: 0%→0, 100%→参考值
- test_auto_height_keeps_ratio: 宽度驱动保持宽高比
- test_fixed_both_ignores_ratio: 固定宽高忽略原始比例
- test_place_overlay_offset: 放置矩形相对幻灯片左上角偏移
"""

from __future__ import annotations

from ..interfaces import GeometryError
from ..models import (
    AutoHeight,
    AutoWidth,
    FixedBoth,
    Rect,
    RelativeLength,
    RelativePosition,
    RelativeSize,
)


def resolve_length(length: RelativeLength, reference: float) -> float:
    """reference * percent / 100"""
    return reference * length.percent / 100.0


def resolve_position(
    position: RelativePosition,
    bbox: tuple[float, float],
) -> tuple[float, float]:
    """逐轴解析偏移量"""
    bbox_w, bbox_h = bbox
    return (resolve_length(position.x, bbox_w), resolve_length(position.y, bbox_h))


def resolve_size(
    size: RelativeSize,
    native_dim: tuple[float, float],
    bbox: tuple[float, float],
) -> tuple[float, float]:
    """
    解析渲染尺寸

    Args:
        size: 相对尺寸
        native_dim: 媒体原始像素尺寸（宽, 高），需严格为正
        bbox: 包围框尺寸（宽, 高）

    Returns:
        (宽, 高)

    Raises:
        GeometryError: 原始尺寸非正
    """
    bbox_w, bbox_h = bbox

    if isinstance(size, FixedBoth):
        # 显式指定宽高，允许变形
        return (resolve_length(size.width, bbox_w), resolve_length(size.height, bbox_h))

    native_w, native_h = native_dim
    if native_w <= 0 or native_h <= 0:
        raise GeometryError(f"媒体原始尺寸无效: {native_dim}")

    if isinstance(size, AutoWidth):
        h_render = resolve_length(size.height, bbox_h)
        return (h_render * (native_w / native_h), h_render)

    if isinstance(size, AutoHeight):
        w_render = resolve_length(size.width, bbox_w)
        return (w_render, w_render * (native_h / native_w))

    raise GeometryError(f"未知尺寸类型: {size!r}")


def place_overlay(
    position: RelativePosition,
    size: RelativeSize,
    native_dim: tuple[float, float],
    slide_rect: Rect,
) -> Rect:
    """叠加层放置矩形 = 幻灯片左上角 + 偏移，尺寸为解析后的宽高"""
    bbox = slide_rect.size
    offset_x, offset_y = resolve_position(position, bbox)
    width, height = resolve_size(size, native_dim, bbox)
    return Rect.from_origin_size(
        slide_rect.x_min + offset_x,
        slide_rect.y_min + offset_y,
        width,
        height,
    )

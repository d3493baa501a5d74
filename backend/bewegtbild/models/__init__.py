"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- RelativeLength/RelativePosition/RelativeSize: 相对几何描述
- Rect: 绝对坐标矩形
- OverlayDefinition/OverlayInstance: 叠加层定义与播放实例
- PixelImage/PageRenderState/Viewport: 页面渲染缓存相关
"""

from .geometry import (
    AutoHeight,
    AutoWidth,
    FixedBoth,
    Rect,
    RelativeLength,
    RelativePosition,
    RelativeSize,
    default_size,
)
from .overlay import OverlayDefinition, OverlayInstance, OverlayPlacement
from .page import PageRenderState, PixelImage, Viewport

__all__ = [
    "RelativeLength",
    "RelativePosition",
    "RelativeSize",
    "FixedBoth",
    "AutoWidth",
    "AutoHeight",
    "default_size",
    "Rect",
    "OverlayDefinition",
    "OverlayInstance",
    "OverlayPlacement",
    "PixelImage",
    "PageRenderState",
    "Viewport",
]

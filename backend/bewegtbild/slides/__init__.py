"""
放映核心 - 几何解析、页面渲染缓存、叠加层生命周期

子模块：
- geometry: 相对几何 → 绝对像素
- render_cache: 页面渲染缓存
- overlay_registry: 叠加层注册表与生命周期协调
- session: 放映会话
"""

from .geometry import place_overlay, resolve_length, resolve_position, resolve_size
from .overlay_registry import OverlayRegistry
from .render_cache import RenderCache
from .session import SlideSession, TickResult

__all__ = [
    "resolve_length",
    "resolve_position",
    "resolve_size",
    "place_overlay",
    "RenderCache",
    "OverlayRegistry",
    "SlideSession",
    "TickResult",
]

"""
模块接口契约 - 定义外部协作者的抽象接口

设计原则：
1. 核心（渲染缓存 / 叠加层生命周期）只依赖接口，不依赖具体实现
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换

使用方式：
    from bewegtbild.interfaces import IPageRenderer

    class MyRenderer(IPageRenderer):
        def render(self, page_index: int, width: int, height: int) -> PixelImage | None:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .models import PixelImage, Rect


# ============================================================================
# 页面渲染接口
# ============================================================================

class IPageRenderer(ABC):
    """页面渲染器接口 - 文档光栅化"""

    @abstractmethod
    def render(self, page_index: int, width: int, height: int) -> PixelImage | None:
        """
        渲染单页

        Args:
            page_index: 页码（从0开始）
            width: 目标宽度（像素）
            height: 最大高度（像素）

        Returns:
            渲染结果；页码越界等情况返回None（不抛异常）
        """
        ...

    @abstractmethod
    def page_count(self) -> int:
        """文档总页数"""
        ...


# ============================================================================
# 媒体播放接口
# ============================================================================

class IMediaPlayer(ABC):
    """媒体播放器接口 - 视频/GIF解码与绘制"""

    @abstractmethod
    def init(self, context: Any, path: Path) -> None:
        """
        初始化播放器

        Args:
            context: 展示层上下文（由调用方透传）
            path: 媒体文件路径

        Raises:
            OverlayInitError: 初始化失败
        """
        ...

    @abstractmethod
    def start(self) -> None:
        """开始播放"""
        ...

    @abstractmethod
    def native_dimensions(self) -> tuple[float, float] | None:
        """原始像素尺寸 (宽, 高)；元数据未就绪时返回None"""
        ...

    @abstractmethod
    def draw(self, target_rect: Rect) -> Any:
        """在目标矩形内绘制当前帧"""
        ...

    @abstractmethod
    def destroy(self) -> None:
        """释放播放器资源"""
        ...


class MediaPlayerFactory(Protocol):
    """播放器工厂协议（每个叠加层实例一个播放器）"""

    def __call__(self) -> IMediaPlayer:
        ...


# ============================================================================
# 异常定义
# ============================================================================

class BewegtbildError(Exception):
    """基础异常"""
    pass


class RenderError(BewegtbildError):
    """渲染错误"""
    pass


class OverlayInitError(BewegtbildError):
    """叠加层初始化错误"""
    pass


class ConfigError(BewegtbildError):
    """配置错误"""
    pass


class GeometryError(BewegtbildError):
    """几何解析错误"""
    pass

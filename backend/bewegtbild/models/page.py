"""
页面模型 - 像素图像、页面渲染状态与视口
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class PixelImage:
    """RGBA像素缓冲（按值在组件间传递）"""
    width: int
    height: int
    rgba: bytes = b""

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


@dataclass
class PageRenderState:
    """单页缓存条目

    stale=True 表示视口尺寸在该图像生成后发生变化，
    再次显示前必须重新渲染（条目本身不会被淘汰）。
    """
    image: PixelImage
    stale: bool = False


class Viewport(BaseModel):
    """视口尺寸"""
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)

    model_config = {"frozen": True}

    def differs(self, width: int, height: int) -> bool:
        return self.width != width or self.height != height

"""
页面渲染缓存 - 决定复用缓存图像还是重新渲染

职责：
1. 每个页码保存最近一次渲染结果及过期标记
2. 视口尺寸变化时标记全部条目过期（惰性重渲染）
3. 导航入口 get_page：无需更新时返回None

测试要点：
- test_same_page_twice_returns_none: 连续请求同一页第二次返回None
- test_resize_invalidates: 改变视口后重新渲染
- test_render_failure_keeps_entry: 渲染失败不修改缓存
"""

from __future__ import annotations

import logging

from ..interfaces import IPageRenderer, RenderError
from ..models import PageRenderState, PixelImage, Viewport

logger = logging.getLogger(__name__)


class RenderCache:
    """页面渲染缓存（不淘汰条目，条目数受文档页数限制）"""

    def __init__(self, renderer: IPageRenderer, width: int, height: int):
        self.renderer = renderer
        self._viewport = Viewport(width=max(0, width), height=max(0, height))
        self._current_page_index = 0
        # 首次 get_page 必须渲染
        self._pending_redraw = True
        self._entries: dict[int, PageRenderState] = {}

    # === 状态访问 ===

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def current_page_index(self) -> int:
        return self._current_page_index

    @property
    def pending_redraw(self) -> bool:
        return self._pending_redraw

    def page_count(self) -> int:
        return self.renderer.page_count()

    def is_cached(self, page_index: int) -> bool:
        return page_index in self._entries

    def is_stale(self, page_index: int) -> bool:
        """未缓存的页视为过期"""
        entry = self._entries.get(page_index)
        return entry is None or entry.stale

    def __len__(self) -> int:
        return len(self._entries)

    # === 操作 ===

    def set_viewport(self, width: int, height: int) -> None:
        """更新视口；尺寸变化时全部条目过期（负值按0处理）"""
        width, height = max(0, width), max(0, height)
        if not self._viewport.differs(width, height):
            return

        logger.debug(
            f"视口变化: {self._viewport.width}x{self._viewport.height} -> {width}x{height}"
        )
        self._viewport = Viewport(width=width, height=height)
        self._pending_redraw = True
        for entry in self._entries.values():
            entry.stale = True

    def get_page(self, page_index: int) -> PixelImage | None:
        """
        切换到指定页并返回需要显示的图像

        Returns:
            - None: 无需更新（同一页且无待重绘），或渲染失败
            - 缓存图像: 条目存在且未过期
            - 新渲染图像: 条目缺失或过期
        """
        if not self._pending_redraw and page_index == self._current_page_index:
            return None

        self._current_page_index = page_index

        entry = self._entries.get(page_index)
        if entry is not None and not entry.stale:
            return entry.image

        return self._render(page_index)

    def clear(self) -> None:
        """清空缓存（文档重新加载时使用）"""
        self._entries.clear()
        self._pending_redraw = True

    def _render(self, page_index: int) -> PixelImage | None:
        """渲染当前页并更新缓存；失败时条目保持原样"""
        width, height = self._viewport.width, self._viewport.height
        try:
            image = self.renderer.render(page_index, width, height)
        except RenderError as e:
            logger.warning(f"页面渲染失败: page={page_index}: {e}")
            return None

        if image is None:
            logger.info(f"页面无可用渲染结果: page={page_index}")
            return None

        logger.debug(f"渲染页面 {page_index} ({width}x{height})")
        self._entries[page_index] = PageRenderState(image=image, stale=False)
        self._pending_redraw = False
        return image

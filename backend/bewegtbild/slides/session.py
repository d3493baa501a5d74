"""
放映会话 - 持有渲染缓存、叠加层注册表与热重载通道

职责：
1. 每帧：非阻塞轮询热重载通道 → 取页面图像 → 协调叠加层
2. 视口变化转发给渲染缓存（叠加层只重新放置，不重建）
3. 翻页（上一页/下一页，按页数夹取）

会话状态显式构造、显式关闭，不使用全局单例。

测试要点：
- test_tick_returns_image_and_placements: 单帧输出
- test_reload_channel_swaps_definitions: 通道消息触发整体替换
- test_navigation_clamped: 翻页夹取在 [0, 页数-1]
"""

from __future__ import annotations

import logging
import queue
from dataclasses import dataclass, field
from typing import Any, Iterable

from ..interfaces import IPageRenderer, MediaPlayerFactory
from ..models import OverlayDefinition, OverlayPlacement, PixelImage, Rect
from .overlay_registry import OverlayRegistry
from .render_cache import RenderCache

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """单帧结果"""
    image: PixelImage | None  # None 表示沿用上一帧图像
    placements: list[OverlayPlacement] = field(default_factory=list)
    slide_rect: Rect | None = None


class SlideSession:
    """放映会话"""

    def __init__(
        self,
        renderer: IPageRenderer,
        player_factory: MediaPlayerFactory,
        definitions: Iterable[OverlayDefinition] = (),
        width: int = 800,
        height: int = 600,
        context: Any = None,
    ):
        self.cache = RenderCache(renderer, width, height)
        self.overlays = OverlayRegistry(player_factory, definitions, context=context)
        # 单生产者/单消费者，容量1：只保留最新的定义集合
        self.reload_channel: queue.Queue[list[OverlayDefinition]] = queue.Queue(maxsize=1)
        self.requested_page_index = 0
        self._last_image: PixelImage | None = None

    @property
    def last_image(self) -> PixelImage | None:
        """最近一次显示的图像（渲染失败时继续显示）"""
        return self._last_image

    # === 帧处理 ===

    def tick(self, page_index: int | None = None, slide_rect: Rect | None = None) -> TickResult:
        """
        执行一帧

        Args:
            page_index: 要显示的页；None 表示当前请求页
            slide_rect: 幻灯片绝对矩形；None 时按最近显示图像（或视口）在原点处推算
        """
        if page_index is not None:
            self.requested_page_index = page_index

        self.poll_reload()

        image = self.cache.get_page(self.requested_page_index)
        if image is not None:
            self._last_image = image

        rect = slide_rect or self._default_slide_rect()
        placements = self.overlays.reconcile(self.requested_page_index, rect)
        return TickResult(image=image, placements=placements, slide_rect=rect)

    def resize(self, width: int, height: int) -> None:
        self.cache.set_viewport(width, height)

    def poll_reload(self) -> bool:
        """非阻塞轮询热重载通道；有消息则整体替换定义集合"""
        try:
            definitions = self.reload_channel.get_nowait()
        except queue.Empty:
            return False
        self.overlays.replace_definitions(definitions)
        return True

    @staticmethod
    def draw_overlays(placements: Iterable[OverlayPlacement]) -> None:
        for instance, rect in placements:
            instance.player.draw(rect)

    # === 翻页 ===

    def next_page(self) -> int:
        last = max(self.cache.page_count() - 1, 0)
        self.requested_page_index = min(self.requested_page_index + 1, last)
        return self.requested_page_index

    def previous_page(self) -> int:
        self.requested_page_index = max(self.requested_page_index - 1, 0)
        return self.requested_page_index

    # === 生命周期 ===

    def close(self) -> None:
        self.overlays.shutdown()
        logger.debug("放映会话已关闭")

    def __enter__(self) -> SlideSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _default_slide_rect(self) -> Rect:
        if self._last_image is not None:
            width, height = self._last_image.size
        else:
            width, height = self.cache.viewport.width, self.cache.viewport.height
        return Rect.from_origin_size(0.0, 0.0, width, height)

"""
叠加层注册表与生命周期控制 - 每帧协调叠加层的启动/保持/销毁与放置

职责：
1. 持有当前叠加层定义集合，每个定义至多一个播放实例
2. 当前页绑定的定义：确保实例存在且在播放（幂等，跨页连续播放）
3. 当前页未绑定的定义：销毁实例（不暂停、不保留进度）
4. 计算在播放实例的放置矩形（原始尺寸未就绪则跳过）
5. 整体替换定义集合（配置热重载）

测试要点：
- test_span_pages_single_init: 跨页 2→3→4 只初始化一次
- test_leave_page_tears_down: 2→5 销毁实例
- test_init_failure_retried: 初始化失败下一帧重试
- test_replace_definitions_tears_down_all: 热重载销毁全部实例
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from ..interfaces import MediaPlayerFactory, OverlayInitError
from ..models import OverlayDefinition, OverlayInstance, OverlayPlacement, Rect
from .geometry import place_overlay

logger = logging.getLogger(__name__)


class OverlayRegistry:
    """叠加层注册表（定义集合 + 播放实例）"""

    def __init__(
        self,
        player_factory: MediaPlayerFactory,
        definitions: Iterable[OverlayDefinition] = (),
        context: Any = None,
    ):
        self.player_factory = player_factory
        self.context = context
        self._definitions: list[OverlayDefinition] = list(definitions)
        # 定义序号 -> 实例
        self._instances: dict[int, OverlayInstance] = {}

    @property
    def definitions(self) -> list[OverlayDefinition]:
        return list(self._definitions)

    def live_instances(self) -> list[OverlayInstance]:
        """按定义顺序返回存活实例"""
        return [self._instances[idx] for idx in sorted(self._instances)]

    def instance_for(self, definition_index: int) -> OverlayInstance | None:
        return self._instances.get(definition_index)

    def definitions_for_page(self, page_index: int) -> list[OverlayDefinition]:
        return [d for d in self._definitions if d.is_active_on(page_index)]

    # === 生命周期 ===

    def reconcile(self, page_index: int, slide_rect: Rect) -> list[OverlayPlacement]:
        """
        执行一次协调

        Args:
            page_index: 当前显示页
            slide_rect: 幻灯片在屏幕上的绝对矩形

        Returns:
            本帧需要绘制的 (实例, 矩形) 列表，按定义顺序
        """
        for idx, definition in enumerate(self._definitions):
            if definition.is_active_on(page_index):
                self._ensure_running(idx, definition)
            else:
                self._teardown(idx)

        placements = []
        for idx in sorted(self._instances):
            instance = self._instances[idx]
            if not instance.is_running:
                continue
            rect = self._place(instance, slide_rect)
            if rect is not None:
                placements.append(OverlayPlacement(instance, rect))
        return placements

    def replace_definitions(self, definitions: Iterable[OverlayDefinition]) -> None:
        """整体替换定义集合；旧实例全部销毁"""
        new_definitions = list(definitions)
        self.shutdown()
        self._definitions = new_definitions
        logger.info(f"叠加层定义已替换: {len(new_definitions)} 条")

    def shutdown(self) -> None:
        """销毁全部实例"""
        for idx in list(self._instances):
            self._teardown(idx)

    def _ensure_running(self, idx: int, definition: OverlayDefinition) -> None:
        """确保实例在播放；实例已存在则不重新初始化"""
        if idx in self._instances:
            return

        player = self.player_factory()
        try:
            player.init(self.context, definition.media_path)
            player.start()
        except OverlayInitError as e:
            logger.warning(f"叠加层初始化失败，下一帧重试: {definition.media_path}: {e}")
            player.destroy()
            return
        except Exception:
            player.destroy()
            raise

        self._instances[idx] = OverlayInstance(
            definition=definition, player=player, is_running=True
        )
        logger.info(f"叠加层开始播放: {definition.media_path}")

    def _teardown(self, idx: int) -> None:
        instance = self._instances.pop(idx, None)
        if instance is None:
            return
        instance.teardown()
        logger.info(f"叠加层已销毁: {instance.media_path}")

    @staticmethod
    def _place(instance: OverlayInstance, slide_rect: Rect) -> Rect | None:
        """原始尺寸未就绪时返回None（本帧不绘制）"""
        native = instance.player.native_dimensions()
        if native is None:
            return None
        native_w, native_h = native
        if native_w <= 0 or native_h <= 0:
            return None
        definition = instance.definition
        return place_overlay(definition.position, definition.size, native, slide_rect)

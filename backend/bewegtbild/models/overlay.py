"""
叠加层模型 - 叠加层定义（配置来源）与播放实例（运行期）

对应配置文件 entries 中的单个条目
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple

from pydantic import BaseModel, Field, field_validator

from .geometry import Rect, RelativePosition, RelativeSize, default_size

if TYPE_CHECKING:
    from ..interfaces import IMediaPlayer


class OverlayDefinition(BaseModel):
    """叠加层定义（构造后不可变）"""
    page_indices: frozenset[int] = Field(..., description="绑定的页码集合（从0开始）")
    media_path: Path = Field(..., description="媒体文件路径")
    position: RelativePosition = Field(default_factory=RelativePosition)
    size: RelativeSize = Field(default_factory=default_size)

    model_config = {"frozen": True}

    @field_validator("page_indices")
    @classmethod
    def _check_page_indices(cls, value: frozenset[int]) -> frozenset[int]:
        if not value:
            raise ValueError("叠加层至少需要绑定一个页码")
        if any(idx < 0 for idx in value):
            raise ValueError(f"页码不能为负: {sorted(value)}")
        return value

    def is_active_on(self, page_index: int) -> bool:
        """是否绑定到指定页"""
        return page_index in self.page_indices


@dataclass
class OverlayInstance:
    """叠加层播放实例（每个定义至多一个）"""
    definition: OverlayDefinition
    player: IMediaPlayer
    is_running: bool = False

    @property
    def media_path(self) -> Path:
        return self.definition.media_path

    def plays(self, path: Path) -> bool:
        """是否正在播放指定路径"""
        return self.is_running and self.media_path == path

    def teardown(self) -> None:
        """释放播放器"""
        self.is_running = False
        self.player.destroy()


class OverlayPlacement(NamedTuple):
    """本帧需绘制的叠加层及其位置"""
    instance: OverlayInstance
    rect: Rect

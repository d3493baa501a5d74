"""
叠加层配置加载器 - 读取叠加层配置文件（YAML/JSON）

职责：
- 解析 entries 列表为 OverlayDefinition
- 兼容 slide_num 单值/列表、size 多种写法
- 媒体相对路径基于配置文件所在目录解析
- 配置错误统一转换为 ConfigError

配置示例：
    entries:
      - slide_num: [0, 1, 2]
        video_path: clip.mp4
        pos: ["10%", "5%"]
        size: "30%"                      # 宽30%，高度自动
      - slide_num: 4
        video_path: large.mp4
        size: ["50%", "10%"]             # 固定宽高
      - slide_num: [9, 10]
        video_path: anim.gif
        size: {width: auto, height: 20%} # 高20%，宽度自动

使用方式：
    config = OverlayLoader.load("overlays.yaml")
    definitions = config.definitions()
    by_page = config.slides_map()
"""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..interfaces import ConfigError
from ..models import (
    AutoHeight,
    AutoWidth,
    FixedBoth,
    OverlayDefinition,
    RelativeLength,
    RelativePosition,
    RelativeSize,
)
from ..models.geometry import DEFAULT_SIZE_PERCENT

AUTO = "auto"


class OverlayConfig(BaseModel):
    """叠加层配置（配置文件的结构化表示）"""
    entries: list[OverlayDefinition] = Field(default_factory=list)

    def definitions(self) -> list[OverlayDefinition]:
        """按配置顺序返回全部定义"""
        return list(self.entries)

    def slides_map(self) -> dict[int, list[OverlayDefinition]]:
        """页码 -> 该页的定义列表（保持配置顺序）"""
        result: dict[int, list[OverlayDefinition]] = defaultdict(list)
        for definition in self.entries:
            for page_index in sorted(definition.page_indices):
                result[page_index].append(definition)
        return dict(result)


class OverlayLoader:
    """叠加层配置加载器"""

    def __init__(self, default_size_percent: float = DEFAULT_SIZE_PERCENT):
        self.default_size_percent = default_size_percent

    @classmethod
    def load(
        cls,
        config_path: str | Path,
        default_size_percent: float = DEFAULT_SIZE_PERCENT,
    ) -> OverlayConfig:
        return cls(default_size_percent).load_file(Path(config_path))

    def load_file(self, config_path: Path) -> OverlayConfig:
        """加载配置文件"""
        if not config_path.exists():
            raise ConfigError(f"叠加层配置不存在: {config_path}")

        try:
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"叠加层配置解析失败: {config_path}: {e}") from e

        return self.parse(data, base_dir=config_path.parent)

    def parse(self, data: Any, base_dir: Path | None = None) -> OverlayConfig:
        """解析已读取的配置数据"""
        if data is None:
            return OverlayConfig()
        if not isinstance(data, dict):
            raise ConfigError("叠加层配置顶层必须是映射")

        entries = data.get("entries") or []
        if not isinstance(entries, list):
            raise ConfigError("entries 必须是列表")

        definitions = []
        for i, entry in enumerate(entries):
            try:
                definitions.append(self._parse_entry(entry, base_dir))
            except (ValueError, TypeError, ValidationError) as e:
                raise ConfigError(f"第{i}条叠加层配置无效: {e}") from e

        return OverlayConfig(entries=definitions)

    def _parse_entry(self, entry: Any, base_dir: Path | None) -> OverlayDefinition:
        if not isinstance(entry, dict):
            raise ValueError("条目必须是映射")
        if "slide_num" not in entry or "video_path" not in entry:
            raise ValueError("缺少 slide_num 或 video_path")

        media_path = Path(entry["video_path"])
        if base_dir is not None and not media_path.is_absolute():
            media_path = base_dir / media_path

        return OverlayDefinition(
            page_indices=frozenset(parse_slide_nums(entry["slide_num"])),
            media_path=media_path,
            position=parse_position(entry.get("pos")),
            size=self._parse_size(entry.get("size")),
        )

    def _parse_size(self, raw: Any) -> RelativeSize:
        if raw is None:
            return AutoHeight(width=RelativeLength(percent=self.default_size_percent))
        return parse_size(raw)


# ============================================================================
# 字段解析
# ============================================================================

def parse_length(raw: Any) -> RelativeLength:
    """ "30%" -> RelativeLength(30) """
    if not isinstance(raw, str):
        raise ValueError(f"百分比必须是形如 \"20%\" 的字符串: {raw!r}")
    return RelativeLength.parse(raw)


def parse_slide_nums(raw: Any) -> list[int]:
    """单个页码或页码列表"""
    if isinstance(raw, bool):
        raise ValueError(f"无效页码: {raw!r}")
    if isinstance(raw, int):
        return [raw]
    if isinstance(raw, list) and all(isinstance(n, int) and not isinstance(n, bool) for n in raw):
        return list(raw)
    raise ValueError(f"slide_num 必须是整数或整数列表: {raw!r}")


def parse_position(raw: Any) -> RelativePosition:
    """[x%, y%]，缺省为左上角"""
    if raw is None:
        return RelativePosition()
    if isinstance(raw, (list, tuple)) and len(raw) == 2:
        return RelativePosition(x=parse_length(raw[0]), y=parse_length(raw[1]))
    raise ValueError(f"pos 必须是两个百分比: {raw!r}")


def parse_size(raw: Any) -> RelativeSize:
    """
    尺寸写法：
    - "30%" / ["30%"]          -> AutoHeight(宽30%)
    - ["50%", "10%"]           -> FixedBoth
    - {width: "30%", height: auto} -> AutoHeight
    - {width: auto, height: "20%"} -> AutoWidth
    - {width: "50%", height: "10%"} -> FixedBoth
    """
    if isinstance(raw, str):
        return AutoHeight(width=parse_length(raw))

    if isinstance(raw, (list, tuple)):
        if len(raw) == 1:
            return AutoHeight(width=parse_length(raw[0]))
        if len(raw) == 2:
            return FixedBoth(width=parse_length(raw[0]), height=parse_length(raw[1]))
        raise ValueError(f"size 列表长度必须为1或2: {raw!r}")

    if isinstance(raw, dict):
        width = raw.get("width", AUTO)
        height = raw.get("height", AUTO)
        width_auto = width == AUTO
        height_auto = height == AUTO
        if width_auto and height_auto:
            raise ValueError("size 的 width 与 height 不能同时为 auto")
        if height_auto:
            return AutoHeight(width=parse_length(width))
        if width_auto:
            return AutoWidth(height=parse_length(height))
        return FixedBoth(width=parse_length(width), height=parse_length(height))

    raise ValueError(f"无法识别的 size: {raw!r}")

"""
几何模型 - 相对长度/位置/尺寸与绝对矩形

百分比在构造时校验范围 [0, 100]，解析阶段不再报错。
尺寸为带标签的联合类型（fixed_both / auto_width / auto_height）。
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class RelativeLength(BaseModel):
    """相对长度（参考尺寸的百分比）"""
    percent: float = Field(..., ge=0.0, le=100.0, description="百分比 0-100")

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, text: str) -> RelativeLength:
        """解析 "30%" 形式的字符串"""
        value = text.strip()
        if not value.endswith("%"):
            raise ValueError(f"百分比需以%结尾: {text!r}")
        try:
            percent = float(value[:-1])
        except ValueError as e:
            raise ValueError(f"无法解析百分比: {text!r}") from e
        return cls(percent=percent)

    def __str__(self) -> str:
        return f"{self.percent:g}%"


class RelativePosition(BaseModel):
    """相对位置（相对包围框左上角的偏移）"""
    x: RelativeLength = Field(default_factory=lambda: RelativeLength(percent=0.0))
    y: RelativeLength = Field(default_factory=lambda: RelativeLength(percent=0.0))

    model_config = {"frozen": True}


class FixedBoth(BaseModel):
    """宽高均按包围框解析（忽略原始宽高比）"""
    kind: Literal["fixed_both"] = "fixed_both"
    width: RelativeLength
    height: RelativeLength

    model_config = {"frozen": True}


class AutoWidth(BaseModel):
    """高度按包围框解析，宽度按原始宽高比推导"""
    kind: Literal["auto_width"] = "auto_width"
    height: RelativeLength

    model_config = {"frozen": True}


class AutoHeight(BaseModel):
    """宽度按包围框解析，高度按原始宽高比推导"""
    kind: Literal["auto_height"] = "auto_height"
    width: RelativeLength

    model_config = {"frozen": True}


RelativeSize = Annotated[
    Union[FixedBoth, AutoWidth, AutoHeight],
    Field(discriminator="kind"),
]

DEFAULT_SIZE_PERCENT = 30.0


def default_size() -> AutoHeight:
    """默认尺寸：宽度30%，高度自动"""
    return AutoHeight(width=RelativeLength(percent=DEFAULT_SIZE_PERCENT))


class Rect(BaseModel):
    """绝对坐标矩形（屏幕像素）"""
    x_min: float
    y_min: float
    x_max: float
    y_max: float

    model_config = {"frozen": True}

    @classmethod
    def from_origin_size(cls, x: float, y: float, width: float, height: float) -> Rect:
        return cls(x_min=x, y_min=y, x_max=x + width, y_max=y + height)

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def top_left(self) -> tuple[float, float]:
        return (self.x_min, self.y_min)

    @property
    def size(self) -> tuple[float, float]:
        return (self.width, self.height)

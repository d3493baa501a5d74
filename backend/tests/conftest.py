"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(renderer, player_factory):
        cache = RenderCache(renderer, 800, 600)
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any, Generator

import pytest

from bewegtbild.interfaces import IMediaPlayer, IPageRenderer, OverlayInitError
from bewegtbild.models import (
    AutoHeight,
    OverlayDefinition,
    PixelImage,
    Rect,
    RelativeLength,
    RelativePosition,
)


# ============================================================================
# 外部协作者替身
# ============================================================================

class FakePageRenderer(IPageRenderer):
    """记录调用的渲染器替身"""

    def __init__(self, num_pages: int = 10):
        self.num_pages = num_pages
        self.calls: list[tuple[int, int, int]] = []
        self.failing_pages: set[int] = set()

    def render(self, page_index: int, width: int, height: int) -> PixelImage | None:
        self.calls.append((page_index, width, height))
        if not 0 <= page_index < self.num_pages or page_index in self.failing_pages:
            return None
        return PixelImage(width=width, height=height, rgba=bytes([page_index % 256]))

    def page_count(self) -> int:
        return self.num_pages


class FakeMediaPlayer(IMediaPlayer):
    """记录生命周期的播放器替身"""

    def __init__(self, native: tuple[float, float] | None = (1920.0, 1080.0)):
        self.native = native
        self.fail_init = False
        self.init_error: Exception | None = None
        self.path: Path | None = None
        self.context: Any = None
        self.started = False
        self.destroyed = False
        self.drawn: list[Rect] = []

    def init(self, context: Any, path: Path) -> None:
        if self.fail_init:
            raise OverlayInitError(f"cannot open {path}")
        if self.init_error is not None:
            raise self.init_error
        self.context = context
        self.path = path

    def start(self) -> None:
        self.started = True

    def native_dimensions(self) -> tuple[float, float] | None:
        return self.native

    def draw(self, target_rect: Rect) -> Any:
        self.drawn.append(target_rect)
        return None

    def destroy(self) -> None:
        self.destroyed = True


class FakePlayerFactory:
    """播放器工厂替身（保存创建过的全部播放器）"""

    def __init__(self, native: tuple[float, float] | None = (1920.0, 1080.0)):
        self.native = native
        self.fail_init = False
        self.init_error: Exception | None = None
        self.players: list[FakeMediaPlayer] = []

    def __call__(self) -> FakeMediaPlayer:
        player = FakeMediaPlayer(self.native)
        player.fail_init = self.fail_init
        player.init_error = self.init_error
        self.players.append(player)
        return player

    @property
    def init_count(self) -> int:
        return sum(1 for p in self.players if p.path is not None)


def pct(value: float) -> RelativeLength:
    return RelativeLength(percent=value)


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def renderer() -> FakePageRenderer:
    """10页文档"""
    return FakePageRenderer(num_pages=10)


@pytest.fixture
def player_factory() -> FakePlayerFactory:
    return FakePlayerFactory()


@pytest.fixture
def pending_player_factory() -> FakePlayerFactory:
    """原始尺寸尚未就绪的播放器"""
    return FakePlayerFactory(native=None)


@pytest.fixture
def span_definition() -> OverlayDefinition:
    """绑定 2/3/4 页的叠加层"""
    return OverlayDefinition(
        page_indices=frozenset({2, 3, 4}),
        media_path=Path("clip.mp4"),
        position=RelativePosition(x=pct(10), y=pct(20)),
        size=AutoHeight(width=pct(30)),
    )


@pytest.fixture
def single_definition() -> OverlayDefinition:
    """只绑定第5页的叠加层"""
    return OverlayDefinition(
        page_indices=frozenset({5}),
        media_path=Path("large.mp4"),
    )


@pytest.fixture
def slide_rect() -> Rect:
    return Rect.from_origin_size(100.0, 50.0, 1000.0, 800.0)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)

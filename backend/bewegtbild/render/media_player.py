"""
视频播放器 - 基于 OpenCV VideoCapture 的 IMediaPlayer 实现

职责：
1. 打开媒体文件（视频 / GIF）
2. 报告原始帧尺寸
3. 按目标矩形缩放当前帧并交给展示层（播放到结尾后循环）

context 若为可调用对象，则作为帧接收器：context(frame_rgba, target_rect)。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import cv2

from ..interfaces import IMediaPlayer, OverlayInitError
from ..models import Rect

logger = logging.getLogger(__name__)


class OpenCVMediaPlayer(IMediaPlayer):
    """OpenCV播放器实现"""

    def __init__(self):
        self._capture: cv2.VideoCapture | None = None
        self._context: Any = None
        self._path: Path | None = None
        self._playing = False

    @property
    def path(self) -> Path | None:
        return self._path

    def init(self, context: Any, path: Path) -> None:
        path = Path(path)
        if not path.exists():
            raise OverlayInitError(f"媒体文件不存在: {path}")

        capture = cv2.VideoCapture(str(path))
        if not capture.isOpened():
            capture.release()
            raise OverlayInitError(f"媒体文件无法解码: {path}")

        self.destroy()
        self._capture = capture
        self._context = context
        self._path = path

    def start(self) -> None:
        if self._capture is None:
            raise OverlayInitError("播放器未初始化")
        self._playing = True

    def native_dimensions(self) -> tuple[float, float] | None:
        if self._capture is None:
            return None
        width = self._capture.get(cv2.CAP_PROP_FRAME_WIDTH)
        height = self._capture.get(cv2.CAP_PROP_FRAME_HEIGHT)
        if width <= 0 or height <= 0:
            return None
        return (float(width), float(height))

    def draw(self, target_rect: Rect) -> Any:
        """读取下一帧并缩放到目标矩形；无帧可用时返回None"""
        if not self._playing or self._capture is None:
            return None

        ok, frame = self._capture.read()
        if not ok:
            # 播放结束，回到开头
            self._capture.set(cv2.CAP_PROP_POS_FRAMES, 0)
            ok, frame = self._capture.read()
            if not ok:
                logger.debug(f"无可用帧: {self._path}")
                return None

        size = (max(1, round(target_rect.width)), max(1, round(target_rect.height)))
        resized = cv2.resize(frame, size, interpolation=cv2.INTER_AREA)
        rgba = cv2.cvtColor(resized, cv2.COLOR_BGR2RGBA)

        if callable(self._context):
            self._context(rgba, target_rect)
        return rgba

    def destroy(self) -> None:
        self._playing = False
        if self._capture is not None:
            self._capture.release()
            self._capture = None

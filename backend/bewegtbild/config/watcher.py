"""
叠加层配置热重载 - 后台线程监视配置文件

职责：
1. 按固定间隔检查配置文件修改时间
2. 文件变化后解析配置（解析失败只记日志，不发送）
3. 通过单槽通道投递解析好的定义集合（永不阻塞）

与核心的唯一同步点是通道：放映线程每帧 get_nowait 一次。

测试要点：
- test_check_once_sends_on_change: 文件变化后投递
- test_malformed_config_not_sent: 配置错误不投递
- test_newer_message_replaces_pending: 未消费的旧消息被新消息替换
"""

from __future__ import annotations

import logging
import queue
import threading
from pathlib import Path

from ..interfaces import ConfigError
from ..models import OverlayDefinition
from .overlay_loader import OverlayLoader

logger = logging.getLogger(__name__)


class ConfigWatcher:
    """配置文件监视器"""

    def __init__(
        self,
        config_path: str | Path,
        channel: queue.Queue[list[OverlayDefinition]],
        loader: OverlayLoader | None = None,
        poll_interval_sec: float = 0.5,
    ):
        self.config_path = Path(config_path).resolve()
        self.channel = channel
        self.loader = loader or OverlayLoader()
        self.poll_interval_sec = poll_interval_sec
        self._last_mtime = self._mtime()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        """启动后台线程"""
        if self._thread is not None:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="overlay-config-watcher", daemon=True
        )
        self._thread.start()
        logger.info(f"开始监视叠加层配置: {self.config_path}")

    def stop(self, timeout: float | None = None) -> None:
        """停止后台线程"""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def check_once(self) -> bool:
        """
        检查一次配置文件

        Returns:
            是否投递了新的定义集合
        """
        mtime = self._mtime()
        if mtime is None or mtime == self._last_mtime:
            return False
        self._last_mtime = mtime

        logger.info(f"叠加层配置已变化: {self.config_path}")
        try:
            config = self.loader.load_file(self.config_path)
        except ConfigError as e:
            logger.error(f"叠加层配置无效，忽略本次变更: {e}")
            return False

        self._send(config.definitions())
        return True

    def _send(self, definitions: list[OverlayDefinition]) -> None:
        """投递到单槽通道；未被消费的旧消息直接丢弃"""
        try:
            self.channel.put_nowait(definitions)
        except queue.Full:
            try:
                self.channel.get_nowait()
            except queue.Empty:
                pass
            try:
                self.channel.put_nowait(definitions)
            except queue.Full:
                logger.debug("通道已满，本次变更等待下次文件修改")

    def _run(self) -> None:
        while not self._stop_event.wait(self.poll_interval_sec):
            self.check_once()

    def _mtime(self) -> int | None:
        try:
            return self.config_path.stat().st_mtime_ns
        except OSError:
            return None

"""
配置层 - 运行期配置与叠加层配置

职责：
- 加载 config/runtime.yaml（运行期参数）
- 加载叠加层配置文件并提供类型安全的定义集合
- 监视叠加层配置并热重载
"""

from .logging_setup import setup_logging
from .overlay_loader import OverlayConfig, OverlayLoader
from .runtime_config import RuntimeConfig, get_config, reload_config
from .watcher import ConfigWatcher

__all__ = [
    "RuntimeConfig",
    "get_config",
    "reload_config",
    "setup_logging",
    "OverlayConfig",
    "OverlayLoader",
    "ConfigWatcher",
]

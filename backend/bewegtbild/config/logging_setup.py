"""
日志初始化 - 按运行期配置设置根日志
"""

from __future__ import annotations

import logging

from .runtime_config import RuntimeConfig


def setup_logging(config: RuntimeConfig) -> None:
    """按配置设置日志级别与格式"""
    level = getattr(logging, config.logging.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=config.logging.log_format, force=True)

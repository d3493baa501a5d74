"""
运行期配置 - 读取 config/runtime.yaml

职责：
- 加载视口/渲染/热重载/日志等运行参数
- 提供环境变量覆盖机制
- 类型安全的配置访问
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class ViewportConfig(BaseModel):
    """初始视口"""

    width: int = 800
    height: int = 600


class RenderConfig(BaseModel):
    """页面渲染配置"""

    max_dimension: int = 8192
    antialias: bool = True


class ReloadConfig(BaseModel):
    """叠加层配置热重载"""

    enabled: bool = False
    poll_interval_sec: float = 0.5


class OverlayDefaultsConfig(BaseModel):
    """叠加层默认值"""

    default_size_percent: float = Field(30.0, ge=0.0, le=100.0)


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    # 基础路径
    pdf_path: Path | None = None
    overlay_config_path: Path | None = None

    # 各子配置
    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    reload: ReloadConfig = Field(default_factory=ReloadConfig)
    overlays: OverlayDefaultsConfig = Field(default_factory=OverlayDefaultsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "BEWEGTBILD_",
        "env_nested_delimiter": "__",
        "arbitrary_types_allowed": True,
    }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        runtime_opts = data.get("runtime_options", {})
        paths = cls._extract(runtime_opts, "paths")

        config = cls(
            pdf_path=paths.get("pdf_path"),
            overlay_config_path=paths.get("overlay_config_path"),
            viewport=ViewportConfig(**cls._extract(runtime_opts, "viewport")),
            render=RenderConfig(**cls._extract(runtime_opts, "render")),
            reload=ReloadConfig(**cls._extract(runtime_opts, "reload")),
            overlays=OverlayDefaultsConfig(**cls._extract(runtime_opts, "overlays")),
            logging=LoggingConfig(**cls._extract(runtime_opts, "logging")),
        )

        config._resolve_paths(base_dir=path.parent)
        return config

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置"""
        section = data.get(key) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result

    def _resolve_paths(self, base_dir: Path) -> None:
        """解析相对路径配置为绝对路径（基于配置文件所在目录）"""
        if self.pdf_path and not self.pdf_path.is_absolute():
            self.pdf_path = (base_dir / self.pdf_path).resolve()
        if self.overlay_config_path and not self.overlay_config_path.is_absolute():
            self.overlay_config_path = (base_dir / self.overlay_config_path).resolve()


# 全局配置实例
_config: RuntimeConfig | None = None

DEFAULT_CONFIG_PATH = Path("config/runtime.yaml")


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = RuntimeConfig.from_yaml(DEFAULT_CONFIG_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    path = yaml_path or DEFAULT_CONFIG_PATH
    _config = RuntimeConfig.from_yaml(path)
    return _config

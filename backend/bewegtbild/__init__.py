"""
bewegtbild 幻灯片放映核心 - 页面渲染缓存与媒体叠加层引擎

模块结构：
- config/     运行期配置、叠加层配置加载、热重载
- models/     数据模型定义
- slides/     几何解析、渲染缓存、叠加层生命周期、会话
- render/     外部协作者适配（PDF渲染 / 视频播放）
"""

__version__ = "0.1.0"

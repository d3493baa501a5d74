"""
外部协作者适配 - 页面光栅化与媒体播放

- pdf_renderer: pdfplumber 渲染PDF页面
- media_player: OpenCV 解码视频/GIF
"""

from .media_player import OpenCVMediaPlayer
from .pdf_renderer import PdfPageRenderer, fit_scale

__all__ = [
    "PdfPageRenderer",
    "fit_scale",
    "OpenCVMediaPlayer",
]

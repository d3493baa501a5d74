"""
PDF页面渲染器 - 基于 pdfplumber 的 IPageRenderer 实现

职责：
1. 加载PDF并统计页数
2. 按目标宽度渲染单页，高度不超过视口（保持页面比例）
3. 页码越界返回None

依赖：
- pdfplumber: 页面光栅化（Page.to_image）

测试要点：
- test_missing_document: 文件不存在抛 RenderError
- test_fit_scale: 宽度优先，高度封顶
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pdfplumber

from ..config import get_config
from ..interfaces import IPageRenderer, RenderError
from ..models import PixelImage

logger = logging.getLogger(__name__)

PDF_POINTS_PER_INCH = 72.0


class PdfPageRenderer(IPageRenderer):
    """PDF渲染器实现"""

    def __init__(
        self,
        pdf_path: str | Path,
        max_dimension: int | None = None,
        antialias: bool | None = None,
    ):
        config = get_config()
        self.max_dimension = max_dimension or config.render.max_dimension
        self.antialias = config.render.antialias if antialias is None else antialias
        self.path = Path(pdf_path)
        self._document_bytes = b""
        self._num_pages = 0
        self.load_document(self.path)

    def load_document(self, pdf_path: str | Path) -> None:
        """加载（或重新加载）文档"""
        path = Path(pdf_path)
        if not path.exists():
            raise RenderError(f"PDF文档不存在: {path}")

        logger.info(f"加载PDF文档: {path}")
        document_bytes = path.read_bytes()
        try:
            with pdfplumber.open(io.BytesIO(document_bytes)) as pdf:
                num_pages = len(pdf.pages)
        except Exception as e:
            raise RenderError(f"PDF文档无法解析: {path}: {e}") from e

        self._document_bytes = document_bytes
        self._num_pages = num_pages
        self.path = path

    def page_count(self) -> int:
        return self._num_pages

    def render(self, page_index: int, width: int, height: int) -> PixelImage | None:
        """渲染单页（宽度为目标宽度，高度为上限）"""
        if not 0 <= page_index < self._num_pages:
            return None
        if width <= 0 or height <= 0:
            return None

        logger.debug(f"渲染PDF页面 {page_index}")
        try:
            with pdfplumber.open(io.BytesIO(self._document_bytes)) as pdf:
                page = pdf.pages[page_index]
                scale = fit_scale(
                    (float(page.width), float(page.height)),
                    (width, height),
                    self.max_dimension,
                )
                page_image = page.to_image(
                    resolution=PDF_POINTS_PER_INCH * scale,
                    antialias=self.antialias,
                )
                rgba = page_image.original.convert("RGBA")
        except Exception as e:
            raise RenderError(f"页面渲染失败: page={page_index}: {e}") from e

        return PixelImage(width=rgba.width, height=rgba.height, rgba=rgba.tobytes())


def fit_scale(
    page_size: tuple[float, float],
    target: tuple[int, int],
    max_dimension: int,
) -> float:
    """
    页面（PDF点）到像素的缩放比例

    宽度对齐目标宽度；若高度超过目标高度则改为按高度；
    最长边不超过 max_dimension。
    """
    page_w, page_h = page_size
    target_w, target_h = target
    if page_w <= 0 or page_h <= 0:
        raise RenderError(f"页面尺寸无效: {page_size}")

    scale = target_w / page_w
    if page_h * scale > target_h:
        scale = target_h / page_h
    longest = max(page_w, page_h) * scale
    if longest > max_dimension:
        scale = max_dimension / max(page_w, page_h)
    return scale

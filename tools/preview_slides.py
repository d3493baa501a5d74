"""
无界面放映预览：逐页渲染PDF并打印叠加层放置矩形。

用法：
    python tools/preview_slides.py slides.pdf --config overlays.yaml
    python tools/preview_slides.py --runtime config/runtime.yaml --reload
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path


def _add_backend_to_path() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    backend_root = repo_root / "backend"
    if str(backend_root) not in sys.path:
        sys.path.insert(0, str(backend_root))


def _print_placements(placements) -> None:
    for instance, rect in placements:
        print(
            f"    {instance.media_path.name}: "
            f"({rect.x_min:.1f}, {rect.y_min:.1f}) {rect.width:.1f}x{rect.height:.1f}"
        )


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Render PDF pages and print overlay placements."
    )
    parser.add_argument("pdf_path", nargs="?", default="", help="PDF文件（默认取运行期配置）")
    parser.add_argument("-c", "--config", default="", help="叠加层配置文件（YAML/JSON）")
    parser.add_argument("--reload", action="store_true", help="配置文件变化时重新加载")
    parser.add_argument("--runtime", default="config/runtime.yaml", help="运行期配置")
    parser.add_argument("--width", type=int, default=0, help="视口宽度（默认取运行期配置）")
    parser.add_argument("--height", type=int, default=0, help="视口高度（默认取运行期配置）")
    args = parser.parse_args()

    _add_backend_to_path()
    from bewegtbild.config import (  # type: ignore
        ConfigWatcher,
        OverlayLoader,
        reload_config,
        setup_logging,
    )
    from bewegtbild.interfaces import BewegtbildError  # type: ignore
    from bewegtbild.render import OpenCVMediaPlayer, PdfPageRenderer  # type: ignore
    from bewegtbild.slides import SlideSession  # type: ignore

    config = reload_config(args.runtime)
    setup_logging(config)

    pdf_path = Path(args.pdf_path) if args.pdf_path else config.pdf_path
    overlay_path = Path(args.config) if args.config else config.overlay_config_path
    if pdf_path is None:
        print("未指定PDF文件")
        return 1

    width = args.width or config.viewport.width
    height = args.height or config.viewport.height
    loader = OverlayLoader(config.overlays.default_size_percent)

    try:
        renderer = PdfPageRenderer(pdf_path)
        definitions = []
        if overlay_path is not None and overlay_path.exists():
            definitions = loader.load_file(overlay_path).definitions()
    except BewegtbildError as e:
        print(f"启动失败: {e}")
        return 1

    watcher = None
    with SlideSession(renderer, OpenCVMediaPlayer, definitions, width, height) as session:
        if (args.reload or config.reload.enabled) and overlay_path is not None:
            watcher = ConfigWatcher(
                overlay_path,
                session.reload_channel,
                loader=loader,
                poll_interval_sec=config.reload.poll_interval_sec,
            )
            watcher.start()

        try:
            for page_index in range(renderer.page_count()):
                result = session.tick(page_index)
                shown = session.last_image
                size = f"{shown.width}x{shown.height}" if shown else "-"
                print(f"[page {page_index}] image={size}")
                _print_placements(result.placements)
                session.draw_overlays(result.placements)

            # 热重载：停留在最后一页，配置变化时重新打印
            while watcher is not None:
                time.sleep(config.reload.poll_interval_sec)
                if not session.poll_reload():
                    continue
                result = session.tick()
                print(f"[reload] page {session.requested_page_index}")
                _print_placements(result.placements)
        except KeyboardInterrupt:
            pass
        finally:
            if watcher is not None:
                watcher.stop()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""
页面渲染缓存单元测试

每个模块完成后必须运行：pytest tests/unit/test_render_cache.py -v
"""

from bewegtbild.interfaces import RenderError
from bewegtbild.slides import RenderCache


class TestRenderCache:
    """渲染缓存测试"""

    def test_first_request_renders(self, renderer):
        """测试首次请求当前页也会渲染"""
        cache = RenderCache(renderer, 800, 600)
        image = cache.get_page(0)
        assert image is not None
        assert image.size == (800, 600)
        assert renderer.calls == [(0, 800, 600)]

    def test_same_page_twice_returns_none(self, renderer):
        """测试连续请求同一页第二次返回None"""
        cache = RenderCache(renderer, 800, 600)
        assert cache.get_page(0) is not None
        assert cache.get_page(0) is None
        assert len(renderer.calls) == 1

    def test_scenario_resize_and_new_page(self, renderer):
        """测试视口变化后重新渲染，新页直接渲染"""
        cache = RenderCache(renderer, 800, 600)
        cache.get_page(0)
        assert cache.get_page(0) is None

        cache.set_viewport(1024, 768)
        assert cache.is_stale(0)
        image = cache.get_page(0)
        assert image is not None
        assert image.size == (1024, 768)

        image = cache.get_page(1)
        assert image is not None
        assert renderer.calls == [(0, 800, 600), (0, 1024, 768), (1, 1024, 768)]

    def test_cached_page_reused(self, renderer):
        """测试未过期的缓存页直接复用"""
        cache = RenderCache(renderer, 800, 600)
        first = cache.get_page(0)
        cache.get_page(1)
        again = cache.get_page(0)
        assert again is first
        assert len(renderer.calls) == 2

    def test_resize_marks_all_pages_stale(self, renderer):
        """测试视口变化使全部页过期（惰性重渲染）"""
        cache = RenderCache(renderer, 800, 600)
        cache.get_page(0)
        cache.get_page(1)
        cache.set_viewport(1024, 768)
        assert cache.pending_redraw
        cache.get_page(1)
        assert not cache.pending_redraw
        # 第0页仍过期，访问时重渲染
        assert cache.is_stale(0)
        cache.get_page(0)
        assert renderer.calls[-1] == (0, 1024, 768)

    def test_same_viewport_is_noop(self, renderer):
        """测试相同视口不触发失效"""
        cache = RenderCache(renderer, 800, 600)
        cache.get_page(0)
        cache.set_viewport(800, 600)
        assert not cache.is_stale(0)
        assert cache.get_page(0) is None

    def test_negative_viewport_clamped(self, renderer):
        """测试负视口尺寸按0处理"""
        cache = RenderCache(renderer, -5, 600)
        assert (cache.viewport.width, cache.viewport.height) == (0, 600)
        cache.get_page(0)
        cache.set_viewport(800, -1)
        assert (cache.viewport.width, cache.viewport.height) == (800, 0)
        assert cache.is_stale(0)

    def test_out_of_range_returns_none(self, renderer):
        """测试越界页返回None且不缓存"""
        cache = RenderCache(renderer, 800, 600)
        assert cache.get_page(42) is None
        assert not cache.is_cached(42)
        assert cache.current_page_index == 42

    def test_render_failure_keeps_stale_entry(self, renderer):
        """测试渲染失败不修改过期条目"""
        cache = RenderCache(renderer, 800, 600)
        cache.get_page(3)
        cache.set_viewport(1024, 768)
        renderer.failing_pages.add(3)
        assert cache.get_page(3) is None
        assert cache.is_cached(3)
        assert cache.is_stale(3)
        # 仍待重绘，下一次请求重试
        renderer.failing_pages.clear()
        assert cache.get_page(3) is not None
        assert not cache.is_stale(3)

    def test_render_error_is_not_fatal(self, renderer):
        """测试渲染器抛出RenderError时返回None"""
        def broken(page_index, width, height):
            raise RenderError("broken page")

        renderer.render = broken
        cache = RenderCache(renderer, 800, 600)
        assert cache.get_page(0) is None
        assert len(cache) == 0

    def test_clear(self, renderer):
        """测试清空缓存后重新渲染"""
        cache = RenderCache(renderer, 800, 600)
        cache.get_page(0)
        cache.clear()
        assert len(cache) == 0
        assert cache.get_page(0) is not None
        assert cache.page_count() == 10

"""Tests for cv_core.pdf_engine.cursor.LayoutState."""

import pytest

from cv_core.pdf_engine.cursor import LayoutState
from cv_core.pdf_engine.templates import PageSpec


@pytest.fixture
def state(page):
    return LayoutState(page)


class TestInitialState:
    def test_starts_at_top_margin(self, state, page):
        assert state.current_page == 0
        assert state.cursor_y == page.top_margin
        assert state.at_page_top

    def test_remaining(self, state, page):
        assert state.remaining == pytest.approx(page.usable_height)

    def test_page_dimensions(self, state):
        assert state.page_width == pytest.approx(595.2756, abs=0.01)
        assert state.page_height == pytest.approx(841.8898, abs=0.01)


class TestEnsureFits:
    """Page break iff cursor + height > page height - bottom margin, unless already at a page top."""

    def test_fits_exactly_at_limit(self):
        page = PageSpec(600, 800, 50, 50, 50, 50)
        state = LayoutState(page, cursor_y=700)
        y = state.ensure_fits(50)
        assert state.current_page == 0
        assert y == 700

    def test_breaks_just_past_limit(self):
        page = PageSpec(600, 800, 50, 50, 50, 50)
        state = LayoutState(page, cursor_y=700)
        y = state.ensure_fits(50.01)
        assert state.current_page == 1
        assert y == page.top_margin

    @pytest.mark.parametrize("cursor,height", [
        (50, 10), (50, 741.89), (400, 391.88), (400, 391.9), (780, 5), (780, 30), (791.89, 0.0),
    ])
    def test_iff_rule(self, page, cursor, height):
        state = LayoutState(page, cursor_y=cursor)
        state.ensure_fits(height)
        expected_break = cursor + height > page.height - page.bottom_margin and cursor > page.top_margin
        assert (state.current_page == 1) == expected_break

    def test_does_not_move_cursor_when_fitting(self, state):
        before = state.cursor_y
        state.ensure_fits(100)
        assert state.cursor_y == before

    def test_deterministic(self, page):
        results = []
        for _ in range(3):
            state = LayoutState(page, cursor_y=650)
            y = state.ensure_fits(200)
            results.append((state.current_page, state.cursor_y, y))
        assert len(set(results)) == 1

    def test_oversized_block_advances_once(self, page):
        state = LayoutState(page, cursor_y=300)
        y = state.ensure_fits(page.usable_height * 3)
        assert state.current_page == 1
        assert y == page.top_margin

    def test_oversized_block_at_page_top_stays(self, page):
        state = LayoutState(page)
        y = state.ensure_fits(page.usable_height * 3)
        assert state.current_page == 0
        assert y == page.top_margin

    def test_oversized_block_on_later_page_top_stays(self, page):
        state = LayoutState(page)
        state.advance_page()
        state.ensure_fits(page.usable_height + 1)
        assert state.current_page == 1

    def test_oversized_block_overflows_instead_of_looping(self, page):
        state = LayoutState(page, cursor_y=300)
        state.reserve(page.usable_height * 3)
        assert state.current_page == 1
        assert state.cursor_y > page.bottom_limit


class TestMovement:
    def test_advance(self, state, page):
        assert state.advance(25) == page.top_margin + 25
        assert not state.at_page_top

    def test_advance_ignores_negative(self, state, page):
        state.advance(-10)
        assert state.cursor_y == page.top_margin

    def test_advance_page(self, state, page):
        state.advance(300)
        assert state.advance_page() == 1
        assert state.cursor_y == page.top_margin

    def test_reserve_returns_start(self, state, page):
        y = state.reserve(40)
        assert y == page.top_margin
        assert state.cursor_y == page.top_margin + 40

    def test_snapshot_restore(self, state):
        state.advance(120)
        snapshot = state.snapshot()
        state.advance_page()
        state.advance(80)
        state.restore(snapshot)
        assert state.current_page == 0
        assert state.cursor_y == pytest.approx(state.page.top_margin + 120)


class TestPageSpec:
    def test_a4_defaults(self):
        page = PageSpec.a4()
        assert page.margins == (50, 50, 50, 50)
        assert page.content_width == pytest.approx(page.width - 100)
        assert page.bottom_limit == pytest.approx(page.height - 50)
        assert page.right_edge == pytest.approx(page.width - 50)

    def test_custom_margins(self):
        page = PageSpec.a4(margins=(40, 30, 60, 20))
        assert page.top_margin == 40
        assert page.left_margin == 20
        assert page.usable_height == pytest.approx(page.height - 100)

"""
Page cursor: vertical write position and page index for one render call.

The cursor only moves down, or resets to the top margin when a new page
starts; the page index only grows.
"""

import logging
from dataclasses import dataclass, field

from .templates.base import PageSpec


logger = logging.getLogger(__name__)


@dataclass
class LayoutState:
    """Mutable layout position owned by a single render call"""
    page: PageSpec
    current_page: int = 0
    cursor_y: float = field(default=-1.0)

    def __post_init__(self):
        if self.cursor_y < 0:
            self.cursor_y = self.page.top_margin

    @property
    def page_width(self) -> float:
        return self.page.width

    @property
    def page_height(self) -> float:
        return self.page.height

    @property
    def remaining(self) -> float:
        return self.page.bottom_limit - self.cursor_y

    @property
    def at_page_top(self) -> bool:
        return self.cursor_y <= self.page.top_margin

    def fits(self, required_height: float) -> bool:
        return self.cursor_y + required_height <= self.page.bottom_limit

    def ensure_fits(self, required_height: float) -> float:
        """
        Make room for a block of the given height.

        Starts a new page when the block would cross the bottom margin,
        then returns the y at which to write. A block taller than a whole
        page is placed at the top of a fresh page and overflows; the page
        is advanced at most once per call, and not at all when the cursor
        is already at the top of a page.
        """
        if self.fits(required_height):
            return self.cursor_y
        if required_height > self.page.usable_height:
            logger.debug(
                f"Block of {required_height:.1f}pt exceeds usable page height "
                f"{self.page.usable_height:.1f}pt, letting it overflow"
            )
        if not self.at_page_top:
            self.advance_page()
        return self.cursor_y

    def advance(self, height: float) -> float:
        """Move the cursor down; returns the new y."""
        if height > 0:
            self.cursor_y += height
        return self.cursor_y

    def advance_page(self) -> int:
        """Start a new page: cursor back to the top margin."""
        self.current_page += 1
        self.cursor_y = self.page.top_margin
        return self.current_page

    def reserve(self, required_height: float) -> float:
        """ensure_fits + advance: returns the y the block starts at."""
        y = self.ensure_fits(required_height)
        self.advance(required_height)
        return y

    def snapshot(self) -> tuple:
        return (self.current_page, self.cursor_y)

    def restore(self, snapshot: tuple) -> None:
        self.current_page, self.cursor_y = snapshot

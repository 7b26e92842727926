"""
Font loading for PDF rendering.

This module handles:
- Font file discovery across multiple candidate locations
- TTF registration with ReportLab
- A process-wide cache keyed by logical font name

Lifecycle of the shared provider: populated once per logical name,
read many times, never evicted. Concurrent first loads of one name are
coalesced so the font file is read exactly once.
"""

import logging
import os
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont

from cv_core.exceptions import FontNotFoundError
from .templates.base import BODY_BOLD, BODY_ITALIC, BODY_REGULAR, LOGICAL_FONTS


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontHandle:
    """A loaded font: the name ReportLab knows it by and where it came from"""
    logical_name: str
    font_name: str
    path: Optional[str] = None
    builtin: bool = False


@dataclass(frozen=True)
class FontFamily:
    """Regular/bold/italic handles used for one render call"""
    regular: FontHandle
    bold: FontHandle
    italic: FontHandle

    @property
    def is_builtin(self) -> bool:
        return self.regular.builtin

    def font_name(self, logical_name: str) -> str:
        """ReportLab font name for a logical font (unknown names map to regular)"""
        if logical_name == BODY_BOLD:
            return self.bold.font_name
        if logical_name == BODY_ITALIC:
            return self.italic.font_name
        return self.regular.font_name


# Standard PDF fonts, always available in ReportLab. Latin-1 only, so
# Turkish letters such as ş/ğ/ı degrade when this family is in use.
BUILTIN_FAMILY = FontFamily(
    regular=FontHandle(BODY_REGULAR, "Helvetica", builtin=True),
    bold=FontHandle(BODY_BOLD, "Helvetica-Bold", builtin=True),
    italic=FontHandle(BODY_ITALIC, "Helvetica-Oblique", builtin=True),
)


class FontProvider:
    """
    Resolves logical font names to registered TrueType fonts.

    Candidate files are tried in preference order (Noto Sans, then
    Roboto, then DejaVu Sans), each across the search paths in order.
    The first existing file wins.
    """

    # Default search paths for fonts, highest priority first
    DEFAULT_SEARCH_PATHS = [
        # Project paths
        str(Path(__file__).resolve().parent.parent / 'assets' / 'fonts'),
        './assets/fonts/',
        './src/assets/fonts/',
        './fonts/',

        # User paths
        os.path.expanduser('~/.fonts/'),
        os.path.expanduser('~/.local/share/fonts/'),

        # System paths (Linux)
        '/usr/share/fonts/truetype/noto/',
        '/usr/share/fonts/noto/',
        '/usr/share/fonts/truetype/dejavu/',
        '/usr/share/fonts/TTF/',
        '/usr/local/share/fonts/',

        # macOS paths
        '/Library/Fonts/',
        os.path.expanduser('~/Library/Fonts/'),
    ]

    # Candidate files per logical name; all cover Latin Extended-A (Turkish)
    FONT_FILES: Dict[str, Sequence[str]] = {
        BODY_REGULAR: ('NotoSans-Regular.ttf', 'Roboto-Regular.ttf', 'DejaVuSans.ttf'),
        BODY_BOLD: ('NotoSans-Bold.ttf', 'Roboto-Bold.ttf', 'DejaVuSans-Bold.ttf'),
        BODY_ITALIC: ('NotoSans-Italic.ttf', 'Roboto-Italic.ttf', 'DejaVuSans-Oblique.ttf'),
    }

    def __init__(
        self,
        search_paths: Optional[List[str]] = None,
        additional_paths: Optional[List[str]] = None,
    ):
        """
        Initialize FontProvider.

        Args:
            search_paths: Replace the default search paths entirely
            additional_paths: Extra paths searched before the defaults
        """
        base = list(self.DEFAULT_SEARCH_PATHS) if search_paths is None else list(search_paths)
        self.search_paths = list(additional_paths or []) + base

        self._cache: Dict[str, FontHandle] = {}
        self._inflight: Dict[str, Future] = {}
        self._lock = threading.Lock()
        self.load_count = 0

    def candidate_paths(self, logical_name: str) -> List[str]:
        """All candidate file locations for a logical font, in priority order."""
        candidates = []
        for filename in self.FONT_FILES.get(logical_name, ()):
            for search_path in self.search_paths:
                candidates.append(str(Path(search_path).expanduser() / filename))
        return candidates

    def load_font(self, logical_name: str) -> FontHandle:
        """
        Load (or return the cached) font for a logical name.

        Raises:
            FontNotFoundError: No candidate file exists or it cannot be parsed
        """
        handle = self._cache.get(logical_name)
        if handle is not None:
            return handle

        with self._lock:
            handle = self._cache.get(logical_name)
            if handle is not None:
                return handle
            future = self._inflight.get(logical_name)
            is_leader = future is None
            if is_leader:
                future = Future()
                self._inflight[logical_name] = future

        if not is_leader:
            return future.result()

        try:
            handle = self._load(logical_name)
        except Exception as e:
            with self._lock:
                self._inflight.pop(logical_name, None)
            future.set_exception(e)
            raise

        with self._lock:
            self._cache[logical_name] = handle
            self._inflight.pop(logical_name, None)
        future.set_result(handle)
        return handle

    def load_family(self) -> FontFamily:
        """Load regular, bold and italic. Raises FontNotFoundError on the first miss."""
        return FontFamily(
            regular=self.load_font(BODY_REGULAR),
            bold=self.load_font(BODY_BOLD),
            italic=self.load_font(BODY_ITALIC),
        )

    def is_cached(self, logical_name: str) -> bool:
        return logical_name in self._cache

    def _load(self, logical_name: str) -> FontHandle:
        if logical_name not in LOGICAL_FONTS:
            raise FontNotFoundError(logical_name, reason="unknown logical font")

        candidates = self.candidate_paths(logical_name)
        font_path = next((p for p in candidates if Path(p).is_file()), None)
        if font_path is None:
            logger.warning(f"Font not found for {logical_name} in any of {len(candidates)} locations")
            raise FontNotFoundError(logical_name, candidates)

        font_name = Path(font_path).stem
        self.load_count += 1
        try:
            pdfmetrics.registerFont(TTFont(font_name, font_path))
        except (TTFError, OSError) as e:
            logger.error(f"Failed to register font {font_name} from {font_path}: {e}")
            raise FontNotFoundError(logical_name, candidates, reason=str(e)) from e

        logger.info(f"Font loaded and cached: {logical_name} -> {font_name} from {font_path}")
        return FontHandle(logical_name, font_name, font_path)


_shared_provider: Optional[FontProvider] = None
_shared_lock = threading.Lock()


def get_font_provider() -> FontProvider:
    """Process-wide FontProvider with the default search paths."""
    global _shared_provider
    if _shared_provider is None:
        with _shared_lock:
            if _shared_provider is None:
                _shared_provider = FontProvider()
    return _shared_provider

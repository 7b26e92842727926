"""
Template spec exports.
"""

from .base import (
    BODY_BOLD,
    BODY_ITALIC,
    BODY_REGULAR,
    LOGICAL_FONTS,
    FontSpec,
    LayoutConstants,
    LetterTypography,
    PageSpec,
    TypographySpec,
)


__all__ = [
    'BODY_REGULAR',
    'BODY_BOLD',
    'BODY_ITALIC',
    'LOGICAL_FONTS',
    'FontSpec',
    'LayoutConstants',
    'LetterTypography',
    'PageSpec',
    'TypographySpec',
]

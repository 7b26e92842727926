"""
CV rendering exceptions.
"""

from typing import List, Optional


class CvRenderError(Exception):
    """Base exception for the CV rendering engine"""
    pass


class FontNotFoundError(CvRenderError):
    """No usable font program for a logical font name"""
    def __init__(self, logical_name: str, searched: Optional[List[str]] = None, reason: str = ""):
        self.logical_name = logical_name
        self.searched = list(searched or [])
        detail = reason or f"searched {len(self.searched)} location(s)"
        super().__init__(f"Font '{logical_name}' could not be loaded ({detail})")


class MeasurementError(CvRenderError):
    """Text shaping failed while measuring a string"""
    pass


class SectionRenderError(CvRenderError):
    """A single section could not be rendered; the section is skipped"""
    def __init__(self, section_kind: str, message: str):
        self.section_kind = section_kind
        super().__init__(f"[{section_kind}] {message}")


class EmptyDocumentError(CvRenderError):
    """Nothing renderable in the input document"""
    pass

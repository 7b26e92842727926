"""Formatting helpers shared by the CV and cover-letter renderers."""

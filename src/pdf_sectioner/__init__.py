"""
PDF Sectioner

Structure-aware PDF splitting driven by bookmarks, table of contents
detection and header heuristics.
"""

__version__ = "0.1.0"

"""
Interfaces module - UI adapters for annotation core.

Provides adapters to connect the core annotation logic
with different UI frameworks (OpenCV, Tkinter, Web, etc).
"""

from .gui_adapter import OpenCVAnnotationAdapter, draw_payload

__all__ = ['OpenCVAnnotationAdapter', 'draw_payload']

"""Rendering backends that paint a SceneGraph."""

from ganttline.backends.base import SceneBackend
from ganttline.backends.html import HtmlBackend

__all__ = [
    "HtmlBackend",
    "SceneBackend",
]

"""Base abstraction for scene rendering backends."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ganttline.scene import SceneGraph


class SceneBackend(Protocol):
    """Protocol for backends that turn a SceneGraph into output.

    Backends receive a complete scene on every update and paint it from
    scratch; they own pointer/scroll event dispatch on their platform.
    """

    def render(self, scene: SceneGraph) -> str:
        """Render the scene.

        Args:
            scene: Complete scene for the current update

        Returns:
            Rendered document content
        """
        ...

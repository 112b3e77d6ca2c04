"""Zoom and pan state of a rendered diagram."""

from __future__ import annotations

import dataclasses as dc

ZOOM_STEP = 1.2
MIN_SCALE = 0.2
MAX_SCALE = 5.0

ACTIONS = ("zoomin", "zoomout", "reset")


@dc.dataclass(slots=True)
class DiagramViewer:
    """A diagram whose zoom menu appears after the first click.

    Examples
    --------
    >>> viewer = DiagramViewer("mermaid-0")
    >>> viewer.perform("zoomin")
    False
    >>> viewer.click()
    >>> viewer.perform("zoomin")
    True
    >>> viewer.transform
    'translate(0px, 0px) scale(1.2)'
    """

    diagram_id: str
    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    controls_visible: bool = False

    def click(self) -> None:
        """Reveal the zoom menu."""
        self.controls_visible = True

    def perform(self, action: str) -> bool:
        """Run a zoom menu action; hidden controls and unknown actions no-op."""
        if not self.controls_visible:
            return False
        match action:
            case "zoomin":
                scale = min(self.scale * ZOOM_STEP, MAX_SCALE)
            case "zoomout":
                scale = max(self.scale / ZOOM_STEP, MIN_SCALE)
            case "reset":
                changed = (self.scale, self.offset_x, self.offset_y) != (1.0, 0.0, 0.0)
                self.scale = 1.0
                self.offset_x = 0.0
                self.offset_y = 0.0
                return changed
            case _:
                return False
        changed = scale != self.scale
        self.scale = round(scale, 6)
        return changed

    def pan(self, dx: float, dy: float) -> None:
        """Shift the diagram by ``dx`` and ``dy`` pixels."""
        self.offset_x += dx
        self.offset_y += dy

    @property
    def transform(self) -> str:
        """Return the CSS transform applied to the diagram SVG."""
        return (
            f"translate({self.offset_x:g}px, {self.offset_y:g}px) "
            f"scale({self.scale:g})"
        )


__all__ = ["ACTIONS", "MAX_SCALE", "MIN_SCALE", "ZOOM_STEP", "DiagramViewer"]

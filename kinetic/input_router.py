from __future__ import annotations
from typing import Optional, Tuple, Protocol

# Minimal protocols, no pygame import here
class _HasHitTest(Protocol):
    def hit_test(self, pos: Tuple[int, int]) -> bool: ...

class _HasRect(Protocol):
    # typed as "any" to avoid importing pygame.Rect
    rect: object

class InputRouter:
    """
    Central gatekeeper for 'should a press start a scroll interaction?'

    Rules:
      - If the press is on a form control -> do NOT scroll, the control owns it.
      - If the press is inside the scroll container -> scroll.
      - Otherwise (outside the container) -> do NOT scroll.
    """
    def __init__(
        self,
        *,
        container: Optional[_HasRect] = None,
        controls: Optional[_HasHitTest] = None,
    ) -> None:
        self.container = container
        self.controls = controls

    # --- public API ---------------------------------------------------------
    def interaction_allowed(self, pos: Tuple[int, int]) -> bool:
        """
        Return True if a press at `pos` should begin a scroll interaction,
        according to the hit rules above.
        """
        if self.on_control(pos):
            return False
        return self._rect_hit(self.container, pos)

    def on_control(self, pos: Tuple[int, int]) -> bool:
        return self._hit(self.controls, pos)

    # --- helpers ------------------------------------------------------------
    @staticmethod
    def _hit(obj: Optional[_HasHitTest], pos: Tuple[int, int]) -> bool:
        return bool(obj and getattr(obj, "hit_test", None) and obj.hit_test(pos))

    @staticmethod
    def _rect_hit(obj: Optional[_HasRect], pos: Tuple[int, int]) -> bool:
        # Works with any object that has a pygame.Rect-like "rect"
        if not obj or not hasattr(obj, "rect"):
            return False
        rect = getattr(obj, "rect")
        return bool(getattr(rect, "collidepoint", None) and rect.collidepoint(pos))

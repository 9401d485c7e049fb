from __future__ import annotations
from typing import Optional, Tuple

import pygame

from kinetic.settings import DemoCfg


class ListView:
    """
    Demo content for the scroller: a column of fixed-height rows.

    Every `control_every`-th row stands in for a form control (a text field
    or a button). Presses on those belong to the control, not the scroller.
    """
    __slots__ = ("cfg", "rect", "offset")

    def __init__(self, cfg: DemoCfg, rect: pygame.Rect):
        self.cfg = cfg
        self.rect = rect.copy()
        self.offset: float = 0.0

    def content_height(self) -> int:
        return max(0, self.cfg.row_count) * max(1, self.cfg.row_height)

    def is_control(self, row: int) -> bool:
        every = self.cfg.control_every
        return every > 0 and row % every == every - 1

    def row_at(self, pos: Tuple[int, int]) -> Optional[int]:
        """ Row under a screen position at the current offset, or None. """
        if not self.rect.collidepoint(pos):
            return None
        y = pos[1] - self.rect.y + self.offset
        if y < 0:
            return None
        row = int(y // max(1, self.cfg.row_height))
        return row if row < self.cfg.row_count else None

    def hit_test(self, pos: Tuple[int, int]) -> bool:
        """ True if `pos` lands on a form control row. """
        row = self.row_at(pos)
        return row is not None and self.is_control(row)

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        cfg = self.cfg
        h = max(1, cfg.row_height)
        prev_clip = surface.get_clip()
        surface.set_clip(self.rect)

        # only rows intersecting the viewport
        first = max(0, int(self.offset // h))
        last = min(cfg.row_count, int((self.offset + self.rect.h) // h) + 1)
        for row in range(first, last):
            y = self.rect.y + row * h - int(round(self.offset))
            row_rect = pygame.Rect(self.rect.x, y, self.rect.w, h)
            if self.is_control(row):
                color = cfg.control_rgb
                label = f"Control {row + 1} (tap me)"
            else:
                color = cfg.row_rgb if row % 2 == 0 else cfg.row_alt_rgb
                label = f"Row {row + 1}"
            pygame.draw.rect(surface, color, row_rect)
            text = font.render(label, True, cfg.text_rgb)
            surface.blit(text, (row_rect.x + 16, row_rect.y + (h - text.get_height()) // 2))

        surface.set_clip(prev_clip)
